"""Tests for Settings."""

import pytest

from airtable_links import ConfigurationError, Settings
from airtable_links.settings import DEFAULT_API_URL


class TestFromMapping:
    """Tests for Settings.from_mapping."""

    def test_camel_case_keys(self) -> None:
        settings = Settings.from_mapping(
            {
                "accessToken": "pat123",
                "baseID": "appBASE000001",
                "linksTableID": "tblLINKS00001",
                "listsTableID": "tblLISTS00001",
            }
        )
        assert settings.access_token == "pat123"
        assert settings.base_id == "appBASE000001"
        assert settings.links_table_id == "tblLINKS00001"
        assert settings.lists_table_id == "tblLISTS00001"

    def test_defaults_fill_gaps(self) -> None:
        settings = Settings.from_mapping(None)
        assert settings.access_token == ""
        assert settings.api_url == DEFAULT_API_URL
        assert settings.freshness_window_ms == 180_000

    def test_strips_pasted_query_strings(self) -> None:
        settings = Settings.from_mapping(
            {"baseID": "appBASE000001?foo=1", "links_table_id": " tblLINKS00001?v=2"}
        )
        assert settings.base_id == "appBASE000001"
        assert settings.links_table_id == "tblLINKS00001"

    def test_unknown_keys_ignored(self) -> None:
        settings = Settings.from_mapping({"theme": "dark", "accessToken": "x"})
        assert settings.access_token == "x"


class TestValidate:
    """Tests for Settings.validate."""

    def test_valid(self, settings: Settings) -> None:
        settings.validate()

    def test_reports_every_problem(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(base_id="bad", freshness_window="soon").validate()
        problems = exc_info.value.problems
        assert "access token is required" in problems
        assert any("base ID" in p for p in problems)
        assert any("lists table ID" in p for p in problems)
        assert any("links table ID" in p for p in problems)
        assert any("freshness window" in p for p in problems)

    @pytest.mark.parametrize("timeout", ["fast", None, 0, -1.5, True])
    def test_bad_timeout_reported(self, settings: Settings, timeout: object) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            settings.with_updates(timeout=timeout).validate()
        assert exc_info.value.problems == [
            f"timeout must be a positive number, got {timeout!r}"
        ]

    def test_freshness_window_ms(self, settings: Settings) -> None:
        assert settings.freshness_window_ms == 180_000
        updated = settings.with_updates(freshness_window=5_000)
        assert updated.freshness_window_ms == 5_000

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Settings().validate()


class TestRepr:
    def test_token_is_masked(self, settings: Settings) -> None:
        assert "test-token" not in repr(settings)
        assert "***" in repr(settings)

    def test_with_updates(self, settings: Settings) -> None:
        updated = settings.with_updates(base_id="appOTHER00001")
        assert updated.base_id == "appOTHER00001"
        assert settings.base_id == "appBASE000001"
