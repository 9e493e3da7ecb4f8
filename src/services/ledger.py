"""
Pure bookkeeping helpers shared by the API and the Streamlit UI.

Amounts are whole currency units. Buy-ins are stored negative, exits
positive; the running total is always recomputed from the rows at hand.
"""

import re
from collections.abc import Iterable
from datetime import UTC, datetime

_INT_RE = re.compile(r"^[+-]?\d+$")


def parse_amount(text: str | None) -> int | None:
    """Parse user input as an integer, or return ``None`` if it is not one.

    Surrounding whitespace is ignored. Decimals, thousands separators and
    empty input are all rejected.
    """
    if text is None:
        return None
    text = text.strip()
    if not _INT_RE.match(text):
        return None
    return int(text)


def signed_amount(magnitude: int, is_buy_in: bool) -> int:
    """Return ``magnitude`` with the sign implied by the transaction kind."""
    value = abs(magnitude)
    return -value if is_buy_in else value


def compute_total(amounts: Iterable[int]) -> int:
    """Sum the given amounts; an empty ledger totals 0."""
    return sum(amounts)


def is_exit(amount: int) -> bool:
    return amount > 0


def format_amount(amount: int) -> str:
    """Row label such as ``+150 (exit)`` or ``-100 (buy in)``."""
    if is_exit(amount):
        return f"+{amount} (exit)"
    return f"{amount} (buy in)"


def _as_local(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC.
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone()


def format_timestamp(dt: datetime) -> str:
    """Numeric date and time for list rows, in local time."""
    return _as_local(dt).strftime("%m/%d/%Y, %I:%M:%S %p")


def format_datetime(dt: datetime) -> str:
    """Longer date/time used on the detail screen."""
    return _as_local(dt).strftime("%b %d, %Y at %I:%M:%S %p")


def append_note(notes: str, text: str) -> str:
    """Append transcribed ``text`` to ``notes``, newline-separated."""
    if not notes:
        return text
    return f"{notes}\n{text}"
