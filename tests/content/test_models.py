"""Tests for content domain models."""

from datetime import UTC, datetime

import pytest
from postflow.content.models import ContentItem, PublicationState
from pydantic import ValidationError


def _item(**kwargs: object) -> ContentItem:
    defaults: dict[str, object] = {
        "slug": "hello-world",
        "title": "Hello World",
        "created_at": datetime(2026, 2, 18, 10, 0, tzinfo=UTC),
    }
    defaults.update(kwargs)
    return ContentItem(**defaults)  # type: ignore[arg-type]


class TestPublicationState:
    def test_enum_values(self):
        assert PublicationState.DRAFT == "draft"
        assert PublicationState.PUBLISHED == "published"

    def test_only_two_states(self):
        assert {s.value for s in PublicationState} == {"draft", "published"}


class TestContentItem:
    def test_defaults(self):
        item = _item()
        assert item.state is PublicationState.DRAFT
        assert item.body == ""
        assert item.author is None
        assert item.metadata == {}
        assert item.file_path == ""

    def test_draft_property_follows_state(self):
        item = _item()
        assert item.draft is True
        item.state = PublicationState.PUBLISHED
        assert item.draft is False

    def test_state_accepts_string_value(self):
        item = _item(state="published")
        assert item.state is PublicationState.PUBLISHED

    def test_rejects_unknown_state(self):
        with pytest.raises(ValidationError):
            _item(state="archived")

    def test_rejects_unknown_state_on_assignment(self):
        item = _item()
        with pytest.raises(ValidationError):
            item.state = "archived"  # type: ignore[assignment]

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            _item(title="   ")

    def test_slug_is_frozen(self):
        item = _item()
        with pytest.raises(ValidationError):
            item.slug = "other"  # type: ignore[misc]
        assert item.slug == "hello-world"

    def test_created_at_is_frozen(self):
        item = _item()
        with pytest.raises(ValidationError):
            item.created_at = datetime.now(tz=UTC)  # type: ignore[misc]

    def test_body_and_author_are_mutable(self):
        item = _item()
        item.body = "text"
        item.author = "kay"
        assert item.body == "text"
        assert item.author == "kay"

    def test_json_round_trip(self):
        item = _item(author="kay", body="text", metadata={"tags": ["design"]})
        restored = ContentItem.model_validate_json(item.model_dump_json())
        assert restored.model_dump() == item.model_dump()
