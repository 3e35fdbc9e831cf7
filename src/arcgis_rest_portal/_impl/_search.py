import json
import logging

_log = logging.getLogger(__name__)

_COMMUNITY_KEYS = {"q", "start", "num", "sortField", "sortOrder", "f"}


# --------------------------------------------------------------------------
def _search(
    con,
    query,
    stype="content",
    start=1,
    num=10,
    sort_field=None,
    sort_order=None,
    bbox=None,
    categories=None,
    category_filter=None,
    count_fields=None,
    count_size=None,
    group_id=None,
    portal=None,
    authentication=None,
):
    """
    Generalized search method. Builds the request for searching content,
    group content, groups or users and sends it through the connection.

    ================    ===============================================================
    **Parameter**        **Description**
    ----------------    ---------------------------------------------------------------
    con                 Required connection. Any object with a ``get(url, params)``
                        method.
    ----------------    ---------------------------------------------------------------
    query               Required String or SearchQueryBuilder. The search query.
    ----------------    ---------------------------------------------------------------
    stype               Required String. The search type. Allowed values: `content`,
                        `group_content`, `groups` and `users`.
    ----------------    ---------------------------------------------------------------
    start               Optional Int. The 1-based position of the first result.
    ----------------    ---------------------------------------------------------------
    num                 Optional Int. The maximum number of results, up to 100.
    ----------------    ---------------------------------------------------------------
    sort_field          Optional String. The field to sort the results on.
    ----------------    ---------------------------------------------------------------
    sort_order          Optional String. `asc` or `desc`.
    ----------------    ---------------------------------------------------------------
    bbox                Optional String or list. The xmin,ymin,xmax,ymax bounding box
                        to limit the search in. Content only.
    ----------------    ---------------------------------------------------------------
    categories          Optional list. Up to 8 org content categories. Content only.
    ----------------    ---------------------------------------------------------------
    category_filter     Optional String. A comma separated list of up to 3 category
                        terms. Content only.
    ----------------    ---------------------------------------------------------------
    count_fields        Optional String. A comma separated list of fields to count.
                        Content only.
    ----------------    ---------------------------------------------------------------
    count_size          Optional Int. The maximum number of field values to count for
                        each `count_fields`. Content only.
    ----------------    ---------------------------------------------------------------
    group_id            Optional String. The group to search in. Required for
                        `group_content`.
    ================    ===============================================================

    :return: The response returned by ``con``
    """
    from arcgis_rest_portal.urls import get_portal_url

    if hasattr(query, "to_param"):
        query = query.to_param()

    params = {
        "f": "json",
        "q": query,
        "start": start,
        "num": num,
    }
    if sort_field:
        params["sortField"] = sort_field
    if sort_order:
        params["sortOrder"] = sort_order
    if categories:
        params["categories"] = json.dumps(categories)
    if category_filter:
        params["categoryFilters"] = category_filter
    if count_fields:
        params["countFields"] = count_fields
    if count_size:
        params["countSize"] = count_size
    if bbox:
        if isinstance(bbox, (tuple, list)):
            bbox = ",".join([str(b) for b in bbox])
        params["bbox"] = bbox

    base = get_portal_url(portal=portal, authentication=authentication)
    stype = str(stype).lower()
    if stype in {"content", "item", "items"}:
        url = f"{base}/search"
    elif stype == "group_content":
        if not group_id:
            raise ValueError("A group_id is required to search group content.")
        url = f"{base}/content/groups/{group_id}/search"
    elif stype in {"user", "users", "group", "groups"}:
        for k in list(params.keys()):
            if k not in _COMMUNITY_KEYS:
                _log.debug("Dropping %s, it is not supported when searching %s", k, stype)
                del params[k]
        if stype in {"user", "users"}:
            url = f"{base}/community/users"
        else:
            url = f"{base}/community/groups"
    else:
        raise ValueError(f"Invalid search type: {stype}")

    _log.debug("Searching %s (q=%s, start=%s, num=%s)", stype, query, start, num)
    return con.get(url, params)
