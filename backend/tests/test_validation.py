"""Tests for input validation helpers."""

import pytest

from app.core.exceptions import (
    InvalidRequestError,
    InvalidSortOrderError,
    InvalidTagsError,
    InvalidUrlError,
    InvalidUserIdError,
    TagLimitExceededError,
)
from app.services.validation import (
    SortOrder,
    ensure_tag_capacity,
    is_provider_image_url,
    parse_sort_order,
    parse_user_id,
    require_single_tag,
    validate_image_url,
    validate_new_photo_tags,
    validate_tag_names,
)


@pytest.mark.unit
class TestImageUrlValidation:
    def test_accepts_provider_url(self):
        assert is_provider_image_url("https://images.unsplash.com/photo-1")

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/photo.jpg",
            "http://images.unsplash.com/photo-1",
            "https://images.unsplash.com.evil.net/photo-1",
            "",
            None,
            42,
        ],
    )
    def test_rejects_other_urls(self, url):
        assert not is_provider_image_url(url)
        with pytest.raises(InvalidUrlError):
            validate_image_url(url)

    def test_custom_prefix(self):
        prefix = "https://images.example-provider.com/"
        assert is_provider_image_url("https://images.example-provider.com/abc", prefix)
        assert not is_provider_image_url("https://images.unsplash.com/abc", prefix)


@pytest.mark.unit
class TestNewPhotoTags:
    def test_returns_trimmed_names(self):
        assert validate_new_photo_tags([" nature ", "sunset"]) == ["nature", "sunset"]

    def test_empty_list_allowed(self):
        assert validate_new_photo_tags([]) == []

    def test_rejects_non_list(self):
        with pytest.raises(InvalidTagsError, match="array"):
            validate_new_photo_tags("nature")

    def test_rejects_more_than_five(self):
        with pytest.raises(InvalidTagsError, match="maximum 5"):
            validate_new_photo_tags(["a", "b", "c", "d", "e", "f"])

    def test_rejects_long_tag(self):
        with pytest.raises(InvalidTagsError, match="20 characters"):
            validate_new_photo_tags(["x" * 21])

    def test_twenty_characters_allowed(self):
        assert validate_new_photo_tags(["x" * 20]) == ["x" * 20]

    @pytest.mark.parametrize("bad", [[1], [""], ["   "], [None]])
    def test_rejects_non_string_or_blank(self, bad):
        with pytest.raises(InvalidTagsError):
            validate_new_photo_tags(bad)


@pytest.mark.unit
class TestTagNames:
    def test_rejects_empty_list(self):
        with pytest.raises(InvalidTagsError):
            validate_tag_names([])

    @pytest.mark.parametrize("bad", [None, "travel", {"a": 1}, ["ok", ""], ["ok", 3]])
    def test_rejects_bad_input(self, bad):
        with pytest.raises(InvalidTagsError):
            validate_tag_names(bad)

    def test_accepts_strings(self):
        assert validate_tag_names(["travel", " adventure"]) == ["travel", "adventure"]


@pytest.mark.unit
class TestTagCapacity:
    def test_within_limit(self):
        ensure_tag_capacity(2, 3)

    def test_over_limit(self):
        with pytest.raises(TagLimitExceededError):
            ensure_tag_capacity(4, 2)

    def test_custom_limit(self):
        with pytest.raises(TagLimitExceededError):
            ensure_tag_capacity(1, 1, limit=1)


@pytest.mark.unit
class TestSortOrder:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, SortOrder.ASC),
            ("ASC", SortOrder.ASC),
            ("asc", SortOrder.ASC),
            ("Desc", SortOrder.DESC),
        ],
    )
    def test_parses(self, value, expected):
        assert parse_sort_order(value) == expected

    @pytest.mark.parametrize("value", ["AESC", "", "up", 1])
    def test_rejects(self, value):
        with pytest.raises(InvalidSortOrderError):
            parse_sort_order(value)


@pytest.mark.unit
class TestUserId:
    @pytest.mark.parametrize("value,expected", [(7, 7), ("7", 7), (" 12 ", 12)])
    def test_parses(self, value, expected):
        assert parse_user_id(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "1.5", True, 0, -3, 3.0])
    def test_rejects(self, value):
        with pytest.raises(InvalidUserIdError):
            parse_user_id(value)


@pytest.mark.unit
class TestSingleTag:
    def test_accepts_string(self):
        assert require_single_tag(" sunset ") == "sunset"

    @pytest.mark.parametrize("value", [None, "", "  ", ["a", "b"], ["a"]])
    def test_rejects(self, value):
        with pytest.raises(InvalidRequestError):
            require_single_tag(value)
