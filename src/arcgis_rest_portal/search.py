"""
Search helpers for items, groups and users. Each accepts the query either
as a string or as a :class:`~arcgis_rest_portal.SearchQueryBuilder`.

.. code-block:: python

    >>> from arcgis_rest_portal import SearchQueryBuilder, search_items
    >>> from arcgis_rest_portal.request import Connection
    >>> query = SearchQueryBuilder().match("Patrick").in_("owner")
    >>> res = search_items(query, Connection(token="..."))
    >>> res["results"]
"""
from __future__ import annotations
from typing import Union

from arcgis_rest_portal._impl import SearchQueryBuilder, _search

Query = Union[str, SearchQueryBuilder]

__all__ = ["search_items", "search_groups", "search_users", "search_group_content"]


# --------------------------------------------------------------------------
def search_items(query: Query, con, **kwargs) -> dict:
    """
    Searches the portal for items. Keyword arguments are the options
    of :func:`~arcgis_rest_portal._impl._search._search`, ie ``num``,
    ``sort_field`` or ``bbox``.

    :return: Dictionary
    """
    return _search(con, query, stype="content", **kwargs)


# --------------------------------------------------------------------------
def search_group_content(query: Query, group_id: str, con, **kwargs) -> dict:
    """Searches the items shared to a single group."""
    return _search(con, query, stype="group_content", group_id=group_id, **kwargs)


# --------------------------------------------------------------------------
def search_groups(query: Query, con, **kwargs) -> dict:
    return _search(con, query, stype="groups", **kwargs)


# --------------------------------------------------------------------------
def search_users(query: Query, con, **kwargs) -> dict:
    return _search(con, query, stype="users", **kwargs)
