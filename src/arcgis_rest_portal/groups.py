from __future__ import annotations
import logging

from arcgis_rest_portal.urls import get_group_url

_log = logging.getLogger(__name__)

__all__ = ["protect_group", "unprotect_group"]


# --------------------------------------------------------------------------
def _group_operation(operation, group_id, con, portal=None, authentication=None):
    url = f"{get_group_url(group_id, portal=portal, authentication=authentication)}/{operation}"
    _log.debug("Sending %s for group %s", operation, group_id)
    return con.post(url, {"f": "json"})


# --------------------------------------------------------------------------
def protect_group(group_id: str, con, portal: str = None, authentication: object = None):
    """
    Protects a group so it cannot be deleted.

    ================    ===============================================================
    **Parameter**        **Description**
    ----------------    ---------------------------------------------------------------
    group_id            Required String. The id of the group.
    ----------------    ---------------------------------------------------------------
    con                 Required connection. Any object with a ``post(url, params)``
                        method, such as :class:`~arcgis_rest_portal.request.Connection`.
    ----------------    ---------------------------------------------------------------
    portal              Optional String. The portal to send the request to.
    ----------------    ---------------------------------------------------------------
    authentication      Optional object with a ``portal`` attribute.
    ================    ===============================================================

    :return: The response returned by ``con``, ie ``{"success": True}``
    """
    return _group_operation("protect", group_id, con, portal, authentication)


# --------------------------------------------------------------------------
def unprotect_group(group_id: str, con, portal: str = None, authentication: object = None):
    """Allows a protected group to be deleted again. See :func:`protect_group`."""
    return _group_operation("unprotect", group_id, con, portal, authentication)
