"""Tests for group protect/unprotect."""

import pytest

from arcgis_rest_portal import protect_group, unprotect_group


class TestProtect:
    def test_protect_group(self, con, session) -> None:
        res = protect_group("5bc", con, authentication=session)
        assert res == {"success": True}
        method, url, params = con.last_call
        assert method == "post"
        assert url == "https://myorg.maps.arcgis.com/sharing/rest/community/groups/5bc/protect"
        assert params == {"f": "json"}

    def test_unprotect_group(self, con, session) -> None:
        unprotect_group("5bc", con, authentication=session)
        method, url, params = con.last_call
        assert method == "post"
        assert url == "https://myorg.maps.arcgis.com/sharing/rest/community/groups/5bc/unprotect"
        assert params == {"f": "json"}

    def test_default_portal(self, con) -> None:
        protect_group("5bc", con)
        assert con.last_call[1] == "https://www.arcgis.com/sharing/rest/community/groups/5bc/protect"

    def test_group_id_required(self, con) -> None:
        with pytest.raises(ValueError):
            protect_group("", con)
        assert con.calls == []
