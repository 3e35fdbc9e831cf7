from ._query import SearchQueryBuilder, BuilderState
from ._format import format_term, format_range, needs_quotes, to_epoch_ms
from ._validation import warn
from ._search import _search
