from __future__ import annotations
import logging
from typing import Callable, Optional

import requests

from arcgis_rest_portal.error import PortalHttpResponseError, PortalRequestError
from arcgis_rest_portal.urls import get_portal_url

_log = logging.getLogger(__name__)

__all__ = ["Connection"]


class Connection(object):
    """
    A thin adapter over a ``requests.Session`` that the search and group
    helpers send their requests through. Any object offering the same
    ``get(url, params)`` and ``post(url, params)`` methods, such as the
    connection of an ``arcgis.gis.GIS``, can be used in its place.

    ================    ===============================================================
    **Parameter**        **Description**
    ----------------    ---------------------------------------------------------------
    portal              Optional String. The portal URL. Paths passed to ``get`` and
                        ``post`` that are not absolute are resolved against it.
    ----------------    ---------------------------------------------------------------
    token               Optional String. A token added to every request.
    ----------------    ---------------------------------------------------------------
    session             Optional ``requests.Session`` to reuse.
    ================    ===============================================================
    """

    _session = None
    _portal = None
    _token = None

    # ----------------------------------------------------------------------
    def __init__(
        self,
        portal: Optional[str] = None,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self._portal = get_portal_url(portal)
        self._token = token
        self._session = session or requests.Session()

    # ----------------------------------------------------------------------
    def __str__(self):
        return "< Connection @ {url} >".format(url=self._portal)

    # ----------------------------------------------------------------------
    def __repr__(self):
        return "< Connection @ {url} >".format(url=self._portal)

    # ----------------------------------------------------------------------
    @property
    def portal(self) -> str:
        return self._portal

    # ----------------------------------------------------------------------
    @property
    def session(self) -> requests.Session:
        return self._session

    # ----------------------------------------------------------------------
    def add_hook(self, hook: Callable) -> "Connection":
        """
        Adds a ``requests`` response hook, ie one of the functions in
        :mod:`arcgis_rest_portal.hooks`.

        :return: Connection
        """
        self._session.hooks["response"].append(hook)
        return self

    # ----------------------------------------------------------------------
    def clear_hooks(self) -> "Connection":
        """Removes every response hook from the session."""
        self._session.hooks["response"].clear()
        return self

    # ----------------------------------------------------------------------
    def get(self, url: str, params: dict = None) -> dict:
        """Sends an HTTP GET and returns the decoded JSON response."""
        url, params = self._prepare(url, params)
        _log.debug("REQUEST (get): %s", url)
        resp = self._session.get(url, params=params)
        return self._handle_response(resp)

    # ----------------------------------------------------------------------
    def post(self, url: str, params: dict = None) -> dict:
        """Sends a form encoded HTTP POST and returns the decoded JSON response."""
        url, params = self._prepare(url, params)
        _log.debug("REQUEST (post): %s", url)
        resp = self._session.post(url, data=params)
        return self._handle_response(resp)

    # ----------------------------------------------------------------------
    def _prepare(self, url, params):
        if not url.startswith(("http://", "https://")):
            url = f"{self._portal}/{url.lstrip('/')}"
        params = dict(params or {})
        params.setdefault("f", "json")
        if self._token:
            params["token"] = self._token
        return url, params

    # ----------------------------------------------------------------------
    def _handle_response(self, resp: requests.Response) -> dict:
        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise PortalHttpResponseError(str(e), status_code=resp.status_code) from e

        data = resp.json()
        if isinstance(data, dict) and data.get("error"):
            error = data["error"]
            raise PortalRequestError(
                error.get("message", "Unknown portal error."),
                code=error.get("code"),
                details=error.get("details"),
            )
        return data
