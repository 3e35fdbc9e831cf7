__version__ = "1.0.0"

from arcgis_rest_portal import env
from arcgis_rest_portal._impl import SearchQueryBuilder, BuilderState
from arcgis_rest_portal.error import PortalRequestError, PortalHttpResponseError
from arcgis_rest_portal.urls import get_portal_url, get_user_url, get_group_url
from arcgis_rest_portal.groups import protect_group, unprotect_group
from arcgis_rest_portal.search import (
    search_items,
    search_groups,
    search_users,
    search_group_content,
)

__all__ = [
    "env",
    "SearchQueryBuilder",
    "BuilderState",
    "PortalRequestError",
    "PortalHttpResponseError",
    "get_portal_url",
    "get_user_url",
    "get_group_url",
    "protect_group",
    "unprotect_group",
    "search_items",
    "search_groups",
    "search_users",
    "search_group_content",
]
