"""
Tests for the ObjectId helpers in noteful.validation.
"""

import pytest

from noteful.exceptions import ValidationError
from noteful.validation import (
    is_valid_object_id,
    new_object_id,
    require_object_id,
    require_object_ids,
)


class TestObjectIdValidation:

    def test_generated_ids_are_valid(self):
        oid = new_object_id()
        assert len(oid) == 24
        assert is_valid_object_id(oid)

    def test_generated_ids_are_unique(self):
        assert new_object_id() != new_object_id()

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "123",
            "1111111111111111111111000",  # 25 chars
            "zzzzzzzzzzzzzzzzzzzzzzzz",
            "not-a-valid-object-id!!",
            None,
            12345,
            b"111111111111",  # 12 raw bytes is a valid ObjectId, but not on the wire
        ],
    )
    def test_rejects(self, value):
        assert not is_valid_object_id(value)

    def test_require_lowercases(self):
        assert require_object_id("5F0E1A2B3C4D5E6F7A8B9C0D") == "5f0e1a2b3c4d5e6f7a8b9c0d"

    def test_require_message_names_field(self):
        with pytest.raises(ValidationError, match="The `folderId` is not valid") as exc_info:
            require_object_id("123", "folderId")
        assert exc_info.value.context == {"field": "folderId"}


class TestRequireObjectIds:

    def test_deduplicates_in_order(self):
        a = "222222222222222222222201"
        b = "222222222222222222222200"
        assert require_object_ids([a, b, a], "tagId") == [a, b]

    def test_one_bad_id_fails_all(self):
        with pytest.raises(ValidationError, match="The `tagId` is not valid"):
            require_object_ids(["222222222222222222222200", "bad"], "tagId")
