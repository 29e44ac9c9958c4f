from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from portable_content.adapters.memory_repo import InMemoryContentRepo
from portable_content.domain.entities import ContentItem

BASE = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def repo():
    return InMemoryContentRepo()


@pytest.fixture
def items(repo):
    saved = [
        repo.save(ContentItem(type="note", title=f"n{i}", created_at=BASE + timedelta(days=i)))
        for i in range(5)
    ]
    return saved


def test_save_and_get(repo):
    item = repo.save(ContentItem(type="note"))
    assert repo.get_by_id(item.id) == item
    assert repo.get_by_id(uuid4()) is None


def test_save_overwrites_same_id(repo):
    item = repo.save(ContentItem(type="note", title="old"))
    repo.save(item.with_title("new"))
    assert repo.count() == 1
    assert repo.get_by_id(item.id).title == "new"


def test_find_all_newest_first(repo, items):
    assert [c.title for c in repo.find_all()] == ["n4", "n3", "n2", "n1", "n0"]


def test_find_all_paging(repo, items):
    assert [c.title for c in repo.find_all(limit=2)] == ["n4", "n3"]
    assert [c.title for c in repo.find_all(limit=2, offset=2)] == ["n2", "n1"]
    assert [c.title for c in repo.find_all(limit=2, offset=4)] == ["n0"]
    assert repo.find_all(offset=10) == []


def test_find_all_default_limit(repo):
    for _ in range(25):
        repo.save(ContentItem(type="note"))
    assert len(repo.find_all()) == 20


def test_find_all_rejects_negative_paging(repo):
    with pytest.raises(ValueError):
        repo.find_all(limit=-1)


def test_exists_and_count(repo, items):
    assert repo.count() == 5
    assert repo.exists(items[0].id)
    assert not repo.exists(uuid4())


def test_delete(repo, items):
    repo.delete(items[0].id)
    assert not repo.exists(items[0].id)
    assert repo.count() == 4


def test_delete_unknown_is_noop(repo, items):
    repo.delete(uuid4())
    assert repo.count() == 5
