"""Tests for the usage warning sink."""

import logging

from arcgis_rest_portal import SearchQueryBuilder, env
from arcgis_rest_portal._impl._validation import call_name, not_modified, warn

LOGGER = "arcgis_rest_portal._impl._validation"


class TestWarnSink:
    def test_defaults_to_logger(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger=LOGGER):
            SearchQueryBuilder().end_group()
        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.WARNING
        assert "`end_group()`" in caplog.records[0].getMessage()

    def test_env_handler_replaces_logger(self, caplog) -> None:
        seen = []
        env.warning_handler = seen.append
        with caplog.at_level(logging.WARNING, logger=LOGGER):
            SearchQueryBuilder().and_()
        assert len(seen) == 1
        assert caplog.records == []

    def test_builder_handler_wins_over_env(self) -> None:
        from_env, from_builder = [], []
        env.warning_handler = from_env.append
        SearchQueryBuilder(warn=from_builder.append).in_()
        assert from_env == []
        assert len(from_builder) == 1

    def test_valid_chain_is_silent(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger=LOGGER):
            SearchQueryBuilder().match("a").in_("title").to_param()
        assert caplog.records == []

    def test_warn_with_explicit_handler(self) -> None:
        seen = []
        warn("message", seen.append)
        assert seen == ["message"]


class TestMessages:
    def test_call_name_quotes_strings(self) -> None:
        assert call_name("in_", "title") == '`in_("title")`'

    def test_call_name_without_arguments(self) -> None:
        assert call_name("and_") == "`and_()`"

    def test_call_name_numbers(self) -> None:
        assert call_name("boost", 3) == "`boost(3)`"

    def test_not_modified_suffix(self) -> None:
        assert not_modified("Oops.") == "Oops. Your query was not modified."
