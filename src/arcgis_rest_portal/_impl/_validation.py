from __future__ import annotations
import logging
from typing import Callable, Optional

_log = logging.getLogger(__name__)

WarnHandler = Callable[[str], None]


# --------------------------------------------------------------------------
def warn(message: str, handler: Optional[WarnHandler] = None) -> None:
    """
    Sends a usage warning to ``handler``, the handler configured in
    :mod:`arcgis_rest_portal.env`, or the package logger, in that order.
    """
    if handler is None:
        from arcgis_rest_portal import env

        handler = env.warning_handler
    if handler is None:
        _log.warning(message)
    else:
        handler(message)


# --------------------------------------------------------------------------
def call_name(method: str, *args) -> str:
    """Renders a method call the way warnings quote it, e.g. ``in_("title")``."""
    rendered = ", ".join(f'"{a}"' if isinstance(a, str) else str(a) for a in args)
    return f"`{method}({rendered})`"


# --------------------------------------------------------------------------
def not_modified(message: str) -> str:
    return f"{message} Your query was not modified."
