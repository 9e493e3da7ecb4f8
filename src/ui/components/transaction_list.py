"""
Transaction list — running total, add form, and rows newest first.

Invalid amounts are dropped silently: no request, no message, and the
input keeps what was typed.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

import streamlit as st

from src.services.ledger import compute_total, format_amount, format_timestamp, parse_amount
from src.ui.api_client import APIClient, APIError, get_api_client

logger = logging.getLogger(__name__)

_KINDS = ["Buy-In", "Exit"]


def submit_amount(client: APIClient, amount_text: str, is_buy_in: bool) -> str:
    """Add a transaction from raw input and return the new input field text.

    Returns ``amount_text`` unchanged when it is not an integer (no request is
    made), otherwise ``""`` once the transaction has been created.
    """
    value = parse_amount(amount_text)
    if value is None:
        return amount_text
    client.create_transaction(amount=abs(value), is_buy_in=is_buy_in)
    return ""


def delete_at(client: APIClient, transactions: Sequence[dict], indices: Iterable[int]) -> int:
    """Delete the rows at ``indices`` in one request. Out-of-range indices are ignored."""
    ids = [transactions[i]["id"] for i in sorted(set(indices)) if 0 <= i < len(transactions)]
    if not ids:
        return 0
    return client.delete_transactions(ids).get("deleted", 0)


def _client() -> APIClient:
    return get_api_client(st.session_state.get("api_base_url", "http://localhost:8000"))


def _on_add() -> None:
    """Button callback: runs before the rerun so the input can be cleared."""
    is_buy_in = st.session_state.get("kind_input") != _KINDS[1]
    try:
        st.session_state.amount_input = submit_amount(
            _client(), st.session_state.get("amount_input", ""), is_buy_in
        )
    except APIError as exc:
        st.session_state.list_error = exc.message


def _open(transaction_id: str) -> None:
    st.session_state.pop(f"notes_{transaction_id}", None)
    st.session_state.selected_transaction_id = transaction_id
    st.session_state.annotation_error = None


def render_transaction_list() -> None:
    """Render the total, the add form, and the transaction rows."""
    client = _client()
    try:
        data = client.list_transactions()
    except APIError as exc:
        st.error(f"Could not fetch transactions: {exc.message}")
        return
    transactions = data.get("transactions", [])

    st.title(f"Total: {compute_total(t['amount'] for t in transactions)}")

    col_amount, col_kind, col_add = st.columns([3, 3, 1], vertical_alignment="bottom")
    with col_amount:
        st.text_input("Amt", key="amount_input", placeholder="Amt", label_visibility="collapsed")
    with col_kind:
        st.segmented_control(
            "Kind", _KINDS, key="kind_input", default=_KINDS[0], label_visibility="collapsed"
        )
    with col_add:
        st.button("Add", type="primary", on_click=_on_add, use_container_width=True)

    if "list_error" in st.session_state:
        st.error(st.session_state.pop("list_error"))

    if not transactions:
        st.info("No transactions yet.")
        return

    selected: list[int] = []
    for index, tx in enumerate(transactions):
        col_check, col_label, col_date, col_open = st.columns(
            [0.5, 3, 3, 1], vertical_alignment="center"
        )
        with col_check:
            if st.checkbox("select", key=f"select_{tx['id']}", label_visibility="collapsed"):
                selected.append(index)
        with col_label:
            st.markdown(format_amount(tx["amount"]))
        with col_date:
            st.caption(format_timestamp(datetime.fromisoformat(tx["date"])))
        with col_open:
            st.button("Open", key=f"open_{tx['id']}", on_click=_open, args=(tx["id"],))

    if selected and st.button(f"Delete selected ({len(selected)})", type="secondary"):
        try:
            deleted = delete_at(client, transactions, selected)
        except APIError as exc:
            st.error(f"Delete failed: {exc.message}")
            return
        logger.info("Deleted %d transaction(s) from the list", deleted)
        st.rerun()
