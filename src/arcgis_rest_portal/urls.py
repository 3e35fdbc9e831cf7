"""
Helpers that build the REST URLs of portal resources. None of them send a
request.
"""
from __future__ import annotations
from urllib.parse import quote

from arcgis_rest_portal import env

DEFAULT_PORTAL = "https://www.arcgis.com/sharing/rest"

__all__ = ["DEFAULT_PORTAL", "get_portal_url", "get_user_url", "get_group_url"]


# --------------------------------------------------------------------------
def _encode(value: str) -> str:
    # same reserved set as encodeURIComponent
    return quote(str(value), safe="!'()*-._~")


# --------------------------------------------------------------------------
def get_portal_url(portal: str = None, authentication: object = None) -> str:
    """
    Returns the sharing REST endpoint to send requests to.

    ================    ===============================================================
    **Parameter**        **Description**
    ----------------    ---------------------------------------------------------------
    portal              Optional String. An explicit portal URL, ie
                        ``https://myorg.maps.arcgis.com/sharing/rest``.
    ----------------    ---------------------------------------------------------------
    authentication      Optional object with a ``portal`` attribute, such as a user
                        session. Used when ``portal`` is not given.
    ================    ===============================================================

    Falls back to :data:`arcgis_rest_portal.env.portal`.

    :return: String
    """
    url = portal or getattr(authentication, "portal", None) or env.portal
    return url.rstrip("/")


# --------------------------------------------------------------------------
def get_user_url(session: object) -> str:
    """
    Returns the URL of the user the session is signed in as, ie
    ``<portal>/community/users/<username>``.

    :return: String
    """
    username = getattr(session, "username", None)
    if not username:
        raise ValueError("The session does not have a username.")
    return f"{get_portal_url(authentication=session)}/community/users/{_encode(username)}"


# --------------------------------------------------------------------------
def get_group_url(group_id: str, portal: str = None, authentication: object = None) -> str:
    """Returns ``<portal>/community/groups/<group_id>``."""
    if not group_id:
        raise ValueError("A group id is required.")
    base = get_portal_url(portal=portal, authentication=authentication)
    return f"{base}/community/groups/{_encode(group_id)}"
