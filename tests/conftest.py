"""Shared test fixtures for arcgis_rest_portal."""

from __future__ import annotations

from typing import Any

import pytest

from arcgis_rest_portal import SearchQueryBuilder, env

PORTAL = "https://myorg.maps.arcgis.com/sharing/rest"


class FakeSession:
    """Stands in for a signed in user session."""

    def __init__(self, username: str = "casey", portal: str = PORTAL) -> None:
        self.username = username
        self.portal = portal


class FakeConnection:
    """Records every request and answers with a canned response."""

    def __init__(self, response: dict[str, Any] | None = None) -> None:
        self.response = response if response is not None else {"success": True}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def get(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("get", url, dict(params)))
        return self.response

    def post(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("post", url, dict(params)))
        return self.response

    @property
    def last_call(self) -> tuple[str, str, dict[str, Any]]:
        return self.calls[-1]


@pytest.fixture(autouse=True)
def _reset_env():
    portal, handler = env.portal, env.warning_handler
    yield
    env.portal, env.warning_handler = portal, handler


@pytest.fixture
def warnings_seen() -> list[str]:
    return []


@pytest.fixture
def builder(warnings_seen: list[str]) -> SearchQueryBuilder:
    """A builder whose warnings are collected in ``warnings_seen``."""
    return SearchQueryBuilder(warn=warnings_seen.append)


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def con() -> FakeConnection:
    return FakeConnection()
