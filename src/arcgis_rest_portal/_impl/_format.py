from __future__ import annotations
import re
import math
import datetime
from typing import Union

Term = Union[str, int, float, datetime.date, datetime.datetime]

_QUOTE_RE = re.compile(r"\s|:")


# --------------------------------------------------------------------------
def to_epoch_ms(value: Union[datetime.date, datetime.datetime]) -> int:
    """
    Converts a date or datetime to milliseconds since the Unix epoch.

    Naive datetimes and plain dates are read as UTC.

    :return: int
    """
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    # seconds and milliseconds taken separately, float rounding would lose one
    return math.floor(value.timestamp()) * 1000 + value.microsecond // 1000


# --------------------------------------------------------------------------
def needs_quotes(value: str) -> bool:
    """Returns True when ``value`` holds whitespace or a colon."""
    return _QUOTE_RE.search(value) is not None


# --------------------------------------------------------------------------
def format_term(term: Term) -> str:
    """
    Renders a single value the way the portal search grammar expects it.

    ================    ===============================================================
    **Value**           **Output**
    ----------------    ---------------------------------------------------------------
    date / datetime     Milliseconds since the epoch, ie ``1577836800000``.
    ----------------    ---------------------------------------------------------------
    str                 Wrapped in double quotes if it holds whitespace or ``:``,
                        otherwise unchanged.
    ----------------    ---------------------------------------------------------------
    bool                ``true`` or ``false``.
    ----------------    ---------------------------------------------------------------
    float               Without a fractional part when it is a whole number, ie
                        ``2.0`` is sent as ``2``.
    ----------------    ---------------------------------------------------------------
    anything else       ``str(term)``
    ================    ===============================================================

    :return: String
    """
    if isinstance(term, (datetime.date, datetime.datetime)):
        return str(to_epoch_ms(term))
    if isinstance(term, str) and needs_quotes(term):
        return f'"{term}"'
    if isinstance(term, bool):
        return "true" if term else "false"
    if isinstance(term, float) and term.is_integer():
        return str(int(term))
    return str(term)


# --------------------------------------------------------------------------
def format_range(lower: Term, upper: Term) -> str:
    return f"[{format_term(lower)} TO {format_term(upper)}]"


# --------------------------------------------------------------------------
def format_terms(terms: list) -> str:
    return " ".join(format_term(t) for t in terms)
