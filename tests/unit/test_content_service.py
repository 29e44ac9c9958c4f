from unittest.mock import Mock
from uuid import uuid4

import pytest

from portable_content.domain.entities import ContentItem, MarkdownBlock
from portable_content.components.content import ContentService


@pytest.fixture
def mock_repo():
    repo = Mock()
    repo.save.side_effect = lambda content: content
    return repo


@pytest.fixture
def content_service(mock_repo, service):
    return ContentService(mock_repo, service)


@pytest.fixture
def existing():
    return ContentItem(
        type="note", title="Old", blocks=[MarkdownBlock(source="# Old")]
    )


def test_create_success(content_service, mock_repo, valid_data):
    item, result = content_service.create(valid_data)

    assert result.is_valid()
    assert item is not None
    assert item.type == "note"
    assert item.title == "Test Note"
    assert [b.source for b in item.blocks] == ["# Hello World"]
    mock_repo.save.assert_called_once_with(item)


def test_create_saves_sanitized_values(content_service):
    item, _ = content_service.create(
        {"type": " note ", "blocks": [{"kind": "markdown", "source": "#  Hi  "}]}
    )
    assert item.type == "note"
    assert item.blocks[0].source == "# Hi"
    assert item.title is None


def test_create_invalid_does_not_save(content_service, mock_repo):
    item, result = content_service.create({"title": "no type"})

    assert item is None
    assert not result.is_valid()
    mock_repo.save.assert_not_called()


def test_create_unknown_kind_does_not_save(content_service, mock_repo):
    item, result = content_service.create(
        {"type": "note", "blocks": [{"kind": "video", "source": "x"}]}
    )
    assert item is None
    assert result.has_field_errors("sanitization")
    mock_repo.save.assert_not_called()


def test_create_uses_factory(mock_repo, service, valid_data, existing):
    factory = Mock(return_value=existing)
    content_service = ContentService(mock_repo, service, factory=factory)

    item, _ = content_service.create(valid_data)

    factory.assert_called_once_with(valid_data)
    assert item is existing


def test_get(content_service, mock_repo, existing):
    mock_repo.get_by_id.return_value = existing
    assert content_service.get(existing.id) is existing
    mock_repo.get_by_id.assert_called_with(existing.id)


def test_update_success(content_service, mock_repo, existing):
    mock_repo.get_by_id.return_value = existing

    item, result = content_service.update(existing.id, {"title": "  New   Title "})

    assert result.is_valid()
    assert item.id == existing.id
    assert item.title == "New Title"
    assert item.type == "note"
    assert item.blocks == existing.blocks
    assert item.updated_at >= existing.updated_at
    mock_repo.save.assert_called_once_with(item)


def test_update_replaces_blocks(content_service, mock_repo, existing):
    mock_repo.get_by_id.return_value = existing

    item, _ = content_service.update(
        existing.id, {"blocks": [{"kind": "markdown", "source": "a"}, {"kind": "markdown", "source": "b"}]}
    )

    assert [b.source for b in item.blocks] == ["a", "b"]


def test_update_not_found(content_service, mock_repo):
    mock_repo.get_by_id.return_value = None
    missing = uuid4()

    item, result = content_service.update(missing, {"title": "x"})

    assert item is None
    assert result.get_field_errors("id") == [f"Content {missing} not found"]
    mock_repo.save.assert_not_called()


def test_update_invalid(content_service, mock_repo, existing):
    mock_repo.get_by_id.return_value = existing

    item, result = content_service.update(existing.id, {"type": ""})

    assert item is None
    assert result.get_field_errors("type") == ["Type cannot be empty"]
    mock_repo.save.assert_not_called()


def test_list_pages_through_repo(content_service, mock_repo, existing):
    mock_repo.find_all.return_value = [existing]

    assert content_service.list(limit=5, offset=10) == [existing]
    mock_repo.find_all.assert_called_once_with(limit=5, offset=10)


def test_list_defaults(content_service, mock_repo):
    mock_repo.find_all.return_value = []
    content_service.list()
    mock_repo.find_all.assert_called_once_with(limit=20, offset=0)


def test_delete_existing(content_service, mock_repo, existing):
    mock_repo.exists.return_value = True

    assert content_service.delete(existing.id) is True
    mock_repo.delete.assert_called_once_with(existing.id)


def test_delete_missing(content_service, mock_repo):
    mock_repo.exists.return_value = False

    assert content_service.delete(uuid4()) is False
    mock_repo.delete.assert_not_called()
