"""
Transaction detail — amount, date, editable notes, and voice notes.

Notes are stored as soon as the text area changes, so a voice note always
appends to what the user sees and leaving the screen never drops edits.

Voice-note states: idle -> recording (inside the browser widget) ->
transcribing -> idle. Only one clip per screen is processed at a time and a
submitted clip cannot be cancelled.
"""

import logging
from datetime import datetime

import streamlit as st

from src.services.ledger import format_amount, format_datetime
from src.ui.api_client import APIClient, APIError, get_api_client

logger = logging.getLogger(__name__)


def run_transcription(
    client: APIClient, transaction_id: str, audio: bytes
) -> tuple[str | None, str | None]:
    """Upload one clip and return ``(notes, error_message)``.

    Exactly one of the two is set. On failure the stored notes are untouched.
    """
    try:
        result = client.transcribe(transaction_id, audio)
    except APIError as exc:
        logger.warning("Voice note for %s failed: %s", transaction_id, exc.message)
        return None, exc.message
    return result["transaction"]["notes"], None


def _client() -> APIClient:
    return get_api_client(st.session_state.get("api_base_url", "http://localhost:8000"))


def _notes_key(transaction_id: str) -> str:
    return f"notes_{transaction_id}"


def _save_notes(transaction_id: str) -> None:
    """Text-area callback: store the edited notes as soon as they change."""
    try:
        _client().update_notes(transaction_id, st.session_state[_notes_key(transaction_id)])
    except APIError as exc:
        st.session_state.annotation_error = exc.message


def _back() -> None:
    st.session_state.selected_transaction_id = None
    st.session_state.annotation_status = "idle"
    st.session_state.annotation_error = None
    st.session_state.pop("_pending_audio", None)


def _process_pending_audio(client: APIClient, transaction_id: str) -> None:
    """Transcribe the clip captured on the previous run, then return to idle."""
    audio = st.session_state.pop("_pending_audio", None)
    if audio is not None:
        with st.spinner("Transcribing…"):
            notes, error = run_transcription(client, transaction_id, audio)
        st.session_state.annotation_error = error
        if notes is not None:
            st.session_state[_notes_key(transaction_id)] = notes
    st.session_state.annotation_status = "idle"
    # New key so the microphone widget comes back empty.
    st.session_state.audio_nonce = st.session_state.get("audio_nonce", 0) + 1


def render_transaction_detail(transaction_id: str) -> None:
    """Render the detail screen for one transaction."""
    client = _client()
    st.button("← Back", on_click=_back)

    if st.session_state.get("annotation_status") == "transcribing":
        _process_pending_audio(client, transaction_id)

    try:
        tx = client.get_transaction(transaction_id)
    except APIError as exc:
        st.error(f"Could not load transaction: {exc.message}")
        return

    st.subheader("Transaction")
    st.markdown(f"**{format_amount(tx['amount'])}**")
    st.caption(format_datetime(datetime.fromisoformat(tx["date"])))

    notes_key = _notes_key(transaction_id)
    if notes_key not in st.session_state:
        st.session_state[notes_key] = tx.get("notes", "")
    st.text_area(
        "Notes", key=notes_key, height=150, on_change=_save_notes, args=(transaction_id,)
    )

    error = st.session_state.get("annotation_error")
    if error:
        st.error(error)

    audio = st.audio_input(
        "Voice note",
        key=f"audio_{transaction_id}_{st.session_state.get('audio_nonce', 0)}",
    )
    if audio is not None and st.session_state.get("annotation_status", "idle") == "idle":
        st.session_state.annotation_status = "transcribing"
        st.session_state._pending_audio = audio.getvalue()
        st.rerun()
