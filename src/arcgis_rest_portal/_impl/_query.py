from __future__ import annotations
import re
import logging
from enum import Enum
from typing import Optional

from ._format import Term, format_range, format_terms
from ._validation import WarnHandler, call_name, not_modified, warn

_log = logging.getLogger(__name__)

# only applied to a seeded query, whose text was not written by the builder
_TRAILING_MODIFIER_RE = re.compile(r"(?:^|\s+)(AND|OR|NOT)\s*$")

# token kinds, the buffer is rendered from a list of (kind, text) pairs
_SEED = "seed"
_CLAUSE = "clause"
_BOOST = "boost"
_MODIFIER = "modifier"
_OPEN = "open"
_CLOSE = "close"


# --------------------------------------------------------------------------
def _render_token(q: str, depth: int, kind: str, text: str):
    if kind == _MODIFIER:
        if q and not q.endswith(("(", " ")):
            q += " "
        return q + text + " ", depth
    if kind == _OPEN:
        if depth > 0 and not q.endswith(" "):
            q += " "
        return q + "(", depth + 1
    if kind == _CLOSE:
        return q + ")", depth - 1
    return q + text, depth


# --------------------------------------------------------------------------
def _render(tokens: list) -> str:
    q, depth = "", 0
    for kind, text in tokens:
        q, depth = _render_token(q, depth, kind, text)
    return q


# --------------------------------------------------------------------------
def _trim_seed(text: str):
    """Strips connectives left dangling at the end of a seeded query."""
    removed = []
    match = _TRAILING_MODIFIER_RE.search(text)
    while match:
        removed.insert(0, match.group(1))
        text = text[: match.start()]
        match = _TRAILING_MODIFIER_RE.search(text)
    return text.rstrip(), removed


# --------------------------------------------------------------------------
def _is_dangling(tokens: list, i: int) -> bool:
    text = tokens[i][1]
    prev = tokens[i - 1][0] if i > 0 else None
    nxt = tokens[i + 1][0] if i + 1 < len(tokens) else None
    if nxt in (None, _CLOSE):
        return True
    if prev in (None, _OPEN) and text != "NOT":
        return True
    # AND NOT / OR NOT is the only valid pair of connectives
    if nxt == _MODIFIER:
        return text == "NOT" or tokens[i + 1][1] != "NOT"
    return False


# --------------------------------------------------------------------------
def _prune(tokens: list):
    """
    Removes empty groups, each with one neighbouring connective, and
    connectives with nothing to join.

    :return: Tuple of the remaining tokens, the removed connectives and the
             number of removed groups
    """
    tokens = list(tokens)
    removed = []
    groups = 0
    changed = True
    while changed:
        changed = False
        for i, (kind, text) in enumerate(tokens):
            nxt = tokens[i + 1][0] if i + 1 < len(tokens) else None
            if kind == _OPEN and nxt == _CLOSE:
                start, end = i, i + 2
                if end < len(tokens) and tokens[end][0] == _BOOST:
                    end += 1
                if start > 0 and tokens[start - 1][0] == _MODIFIER:
                    start -= 1
                elif end < len(tokens) and tokens[end][0] == _MODIFIER:
                    end += 1
                removed.extend(t for k, t in tokens[start:end] if k == _MODIFIER)
                del tokens[start:end]
                groups += 1
                changed = True
                break
            if kind == _MODIFIER and _is_dangling(tokens, i):
                removed.append(text)
                del tokens[i]
                changed = True
                break
    return tokens, removed, groups


class BuilderState(Enum):
    """The phase a :class:`SearchQueryBuilder` is in between two calls."""

    EMPTY = "empty"
    TERM_PENDING = "term_pending"
    RANGE_PENDING = "range_pending"
    MODIFIER_PENDING = "modifier_pending"
    COMMITTED = "committed"


class SearchQueryBuilder(object):
    """
    The ``SearchQueryBuilder`` constructs the ``q`` parameter used by the
    portal's item, group and user search operations. Chaining its methods
    builds up a query string one clause at a time.

    .. code-block:: python

        # Usage Example

        >>> import datetime as dt
        >>> query = (
        ...     SearchQueryBuilder()
        ...     .match("Patrick").in_("owner")
        ...     .and_()
        ...     .from_(dt.date(2020, 1, 1)).to(dt.date(2020, 9, 1)).in_("created")
        ...     .and_()
        ...     .start_group()
        ...         .match("Web Mapping Application").in_("type")
        ...         .or_()
        ...         .match("Mobile Application").in_("type")
        ...     .end_group()
        ...     .and_()
        ...     .match("Demo App")
        ... )
        >>> query.to_param()
        'owner:Patrick AND created:[1577836800000 TO 1598918400000] AND (type:"Web Mapping Application" OR type:"Mobile Application") AND "Demo App"'

    Misuse never raises. Each invalid call is reported as a warning and
    leaves the query as it was.

    ================    ===============================================================
    **Parameter**        **Description**
    ----------------    ---------------------------------------------------------------
    q                   Optional String. An existing query string to start from.
    ----------------    ---------------------------------------------------------------
    warn                Optional callable. Receives every usage warning as a single
                        string. When omitted, warnings go to the handler set in
                        :mod:`arcgis_rest_portal.env` or the package logger.
    ================    ===============================================================
    """

    _q = None
    _tokens = None
    _terms = None
    _range = None
    _modifier = None
    _open_groups = None
    _warn = None

    # ----------------------------------------------------------------------
    def __init__(self, q: str = "", warn: Optional[WarnHandler] = None):
        self._q = q or ""
        self._tokens = [(_SEED, self._q)] if self._q else []
        self._terms = []
        self._range = [None, None]
        self._modifier = None
        self._open_groups = 0
        self._warn = warn

    # ----------------------------------------------------------------------
    def __str__(self):
        return self._q

    # ----------------------------------------------------------------------
    def __repr__(self):
        return "< SearchQueryBuilder @ {q} >".format(q=self._q)

    # ----------------------------------------------------------------------
    @property
    def state(self) -> BuilderState:
        """Returns the :class:`BuilderState` of the pending clause."""
        if self._has_terms:
            return BuilderState.TERM_PENDING
        if self._has_range_bound:
            return BuilderState.RANGE_PENDING
        if self._modifier:
            return BuilderState.MODIFIER_PENDING
        if self._q == "":
            return BuilderState.EMPTY
        return BuilderState.COMMITTED

    # ----------------------------------------------------------------------
    @property
    def open_groups(self) -> int:
        """The number of groups started but not yet ended."""
        return self._open_groups

    # ----------------------------------------------------------------------
    def match(self, *terms: str) -> "SearchQueryBuilder":
        """
        Defines strings to search for.

        .. code-block:: python

            >>> SearchQueryBuilder().match("My Layer").to_param()
            '"My Layer"'

        :return: SearchQueryBuilder
        """
        if self._has_range_bound:
            self._emit(
                not_modified(
                    "`match(...)` is not allowed while a range from `from_(...)`/`to(...)` "
                    "is pending. Finish the range with `in_(...)` first."
                )
            )
            return self
        self._terms.extend(terms)
        return self

    # ----------------------------------------------------------------------
    def in_(self, field: Optional[str] = None) -> "SearchQueryBuilder":
        """
        Defines the field to search for the previous ``match`` or range in.
        Pass ``"*"`` or no field to search the default set of fields.

        ================    ===============================================================
        **Parameter**        **Description**
        ----------------    ---------------------------------------------------------------
        field               Optional String. The field name, ie ``title`` or ``owner``.
                            A leading ``-`` excludes matches, ie ``-title``.
        ================    ===============================================================

        :return: SearchQueryBuilder
        """
        fn = call_name("in_", field) if field else call_name("in_")
        if not self._has_range and not self._has_terms:
            if self._has_range_bound:
                message = (
                    f"{fn} was called with an incomplete range. Call both "
                    "`from_(...)` and `to(...)` before `in_(...)`."
                )
            else:
                message = (
                    f"{fn} was called with no call to `match(...)` or "
                    "`from_(...)`/`to(...)`."
                )
            self._emit(not_modified(message))
            return self

        prefix = f"{field}:" if field and field != "*" else ""
        return self._commit(prefix)

    # ----------------------------------------------------------------------
    def from_(self, term: Term) -> "SearchQueryBuilder":
        """
        Begins a range query. ``term`` may be a string, a number, or a
        ``datetime.date``/``datetime.datetime`` which is sent as
        milliseconds since the epoch.

        :return: SearchQueryBuilder
        """
        return self._set_bound(0, "from_", term)

    # ----------------------------------------------------------------------
    def to(self, term: Term) -> "SearchQueryBuilder":
        """
        Ends a range query.

        .. code-block:: python

            >>> import datetime as dt
            >>> SearchQueryBuilder().from_(dt.date(2020, 1, 1)).to(dt.date(2020, 9, 1)).in_("created").to_param()
            'created:[1577836800000 TO 1598918400000]'

        :return: SearchQueryBuilder
        """
        return self._set_bound(1, "to", term)

    # ----------------------------------------------------------------------
    def start_group(self) -> "SearchQueryBuilder":
        """
        Starts a new search group. Groups control the precedence of
        ``and_``, ``or_`` and ``not_``.

        :return: SearchQueryBuilder
        """
        self._commit()
        self._append(_OPEN)
        self._open_groups += 1
        return self

    # ----------------------------------------------------------------------
    def end_group(self) -> "SearchQueryBuilder":
        """Ends the innermost open search group."""
        if self._open_groups <= 0:
            self._emit(
                not_modified(
                    "`end_group()` was called without calling `start_group()` first."
                )
            )
            return self
        self._commit()
        self._open_groups -= 1
        self._append(_CLOSE)
        return self

    # ----------------------------------------------------------------------
    def and_(self) -> "SearchQueryBuilder":
        """Joins two clauses with ``AND``."""
        return self._add_modifier("and")

    # ----------------------------------------------------------------------
    def or_(self) -> "SearchQueryBuilder":
        """Joins two clauses with ``OR``."""
        return self._add_modifier("or")

    # ----------------------------------------------------------------------
    def not_(self) -> "SearchQueryBuilder":
        """
        Excludes the next clause with ``NOT``. Unlike ``and_`` and ``or_``
        this may begin a query. A ``-`` prefixed field,
        ie ``match("Rivers").in_("-title")``, is equivalent.

        :return: SearchQueryBuilder
        """
        return self._add_modifier("not")

    # ----------------------------------------------------------------------
    def boost(self, num: float) -> "SearchQueryBuilder":
        """
        Boosts the previous clause to increase its rank in the results.

        .. code-block:: python

            >>> (SearchQueryBuilder().match("Lakes").in_("title")
            ...  .or_().match("Rivers").in_("title").boost(3).to_param())
            'title:Lakes OR title:Rivers^3'

        :return: SearchQueryBuilder
        """
        if not self._has_committable and (
            self._modifier or self._q.strip() == "" or self._q.endswith("(")
        ):
            self._emit(
                not_modified(
                    f"{call_name('boost', num)} was called without a clause to boost."
                )
            )
            return self
        self._commit()
        self._append(_BOOST, f"^{num}")
        return self

    # ----------------------------------------------------------------------
    def to_param(self) -> str:
        """
        Commits any pending clause, closes open groups, removes dangling
        connectives and returns the query string. Safe to call repeatedly.

        :return: String
        """
        self._commit()
        self._cleanup()
        return self._q

    # ----------------------------------------------------------------------
    def clone(self) -> "SearchQueryBuilder":
        """
        Finalizes this builder and returns a new, independent
        ``SearchQueryBuilder`` seeded with its query.

        :return: SearchQueryBuilder
        """
        return SearchQueryBuilder(self.to_param(), warn=self._warn)

    # ----------------------------------------------------------------------
    @property
    def _has_terms(self) -> bool:
        return len(self._terms) > 0

    # ----------------------------------------------------------------------
    @property
    def _has_range(self) -> bool:
        # 0 and "" are valid bounds, only None marks an unset one
        return self._range[0] is not None and self._range[1] is not None

    # ----------------------------------------------------------------------
    @property
    def _has_range_bound(self) -> bool:
        return self._range[0] is not None or self._range[1] is not None

    # ----------------------------------------------------------------------
    @property
    def _has_committable(self) -> bool:
        return self._has_terms or self._has_range

    # ----------------------------------------------------------------------
    def _emit(self, message: str) -> None:
        warn(message, self._warn)

    # ----------------------------------------------------------------------
    def _append(self, kind: str, text: str = "") -> None:
        self._tokens.append((kind, text))
        self._q, _ = _render_token(self._q, self._open_groups, kind, text)

    # ----------------------------------------------------------------------
    def _set_bound(self, index: int, method: str, term: Term) -> "SearchQueryBuilder":
        if self._has_terms:
            self._emit(
                not_modified(
                    f"`{method}(...)` is not allowed after `match(...)`, try using "
                    "`.from_(...).to(...).in_(...)`. Dates should be `datetime.date` "
                    "or `datetime.datetime` objects or numbers in milliseconds."
                )
            )
            return self
        self._range[index] = term
        return self

    # ----------------------------------------------------------------------
    def _add_modifier(self, modifier: str) -> "SearchQueryBuilder":
        fn = call_name(f"{modifier}_")
        if self._modifier:
            self._emit(
                not_modified(
                    f"You have called {fn} after {call_name(self._modifier + '_')}."
                )
            )
            return self

        nothing_to_join = self._q.strip() == "" or self._q.endswith("(")
        if modifier != "not" and nothing_to_join and not self._has_committable:
            self._emit(
                not_modified(
                    f"You have called {fn} without calling another method to modify "
                    "your query first. Try calling `match()` first."
                )
            )
            return self

        self._commit()
        self._modifier = modifier
        self._append(_MODIFIER, modifier.upper())
        return self

    # ----------------------------------------------------------------------
    def _commit(self, prefix: str = "") -> "SearchQueryBuilder":
        self._modifier = None
        clause = ""
        if self._has_range:
            clause += format_range(self._range[0], self._range[1])
            self._range = [None, None]
        if self._has_terms:
            clause += format_terms(self._terms)
            self._terms = []
        if clause:
            self._append(_CLAUSE, prefix + clause)
        return self

    # ----------------------------------------------------------------------
    def _cleanup(self) -> None:
        if self._has_range_bound:
            self._emit(
                "Discarding an incomplete range. Call both `from_(...)` and "
                "`to(...)` followed by `in_(...)` to search a range."
            )
            self._range = [None, None]

        if self._open_groups > 0:
            self._emit(
                f"Automatically closing {self._open_groups} group(s). You can use "
                "`end_group()` to remove this warning."
            )
            self._tokens.extend([(_CLOSE, "")] * self._open_groups)
            self._open_groups = 0

        tokens = self._tokens
        removed = []
        groups = 0
        while True:
            tokens, mods, count = _prune(tokens)
            removed.extend(mods)
            groups += count
            if not tokens or tokens[-1][0] != _SEED:
                break
            seed, mods = _trim_seed(tokens[-1][1])
            if seed == tokens[-1][1]:
                break
            removed.extend(mods)
            tokens = tokens[:-1] + ([(_SEED, seed)] if seed else [])
        self._tokens = tokens
        self._q = _render(tokens).rstrip()

        if removed or groups:
            parts = []
            if groups:
                parts.append(f"{groups} empty group(s)")
            if removed:
                parts.append("dangling " + ", ".join(f"`{m}`" for m in removed))
            self._emit(
                f"Removed {' and '.join(parts)} with no clause to join. Call "
                "`match(...)` after `and_()`, `or_()`, `not_()` or `start_group()` "
                "to remove this warning."
            )
        _log.debug("Finalized search query: %s", self._q)
