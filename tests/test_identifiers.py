"""Tests for identifier validation."""

import pytest

from airtable_links import (
    classify_identifier,
    is_valid_base_id,
    is_valid_record_id,
    is_valid_table_id,
    strip_query,
)


class TestRecordID:
    """Tests for is_valid_record_id."""

    @pytest.mark.parametrize(
        "value",
        ["recAAAAAAAAA", "rec123456789", "recAbC123xYz9", "rec" + "a" * 40],
    )
    def test_valid(self, value: str) -> None:
        assert is_valid_record_id(value)

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "rec",
            "recAAAAAAAA",  # 8 characters after prefix
            "RECAAAAAAAAA",
            "tblAAAAAAAAA",
            " recAAAAAAAAA",
            "recAAAAAAAAA ",
            "recAAAAAAAAA\n",
            "recAAAA-AAAAA",
            "recAAAAAAAAA?blocks=hide",
            "https://airtable.com/recAAAAAAAAA",
            "recAAAAAAAAAé",
        ],
    )
    def test_invalid(self, value: str) -> None:
        assert not is_valid_record_id(value)

    def test_non_string_is_invalid(self) -> None:
        assert not is_valid_record_id(None)
        assert not is_valid_record_id(123)


class TestTableAndBaseID:
    """Tests for table and base id validation."""

    def test_table_id(self) -> None:
        assert is_valid_table_id("tblLINKS00001")
        assert not is_valid_table_id("tblSHORT")
        assert not is_valid_table_id("appBASE000001")

    def test_base_id(self) -> None:
        assert is_valid_base_id("appBASE000001")
        assert not is_valid_base_id("appBASE00000/tblLINKS00001")
        assert not is_valid_base_id("recAAAAAAAAA")


class TestClassify:
    """Tests for classify_identifier and strip_query."""

    def test_classify(self) -> None:
        assert classify_identifier("recAAAAAAAAA") == "record"
        assert classify_identifier("tblAAAAAAAAA") == "table"
        assert classify_identifier("appAAAAAAAAA") == "base"
        assert classify_identifier("viwAAAAAAAAA") is None

    def test_strip_query(self) -> None:
        assert strip_query("tblLINKS00001?blocks=hide") == "tblLINKS00001"
        assert strip_query("tblLINKS00001") == "tblLINKS00001"
        assert strip_query("a?b?c") == "a"
