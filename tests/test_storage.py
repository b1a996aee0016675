"""Unit tests for the in-memory submission store."""

from datetime import timedelta
from unittest.mock import patch

import pytest

from prepay.storage import SubmissionStore


def _make(store, hospital="안양병원", content="상비약 구매", **extra):
    return store.create({"hospital": hospital, "content": content, **extra})


class TestCreate:
    def test_assigns_id_timestamp_and_defaults(self, store):
        submission = _make(store, category="안양")

        assert submission.id
        assert submission.created_at is not None
        assert submission.status == "pending"
        assert submission.category == "안양"
        assert submission.file_name is None
        assert submission.file_path is None
        assert submission.file_size is None

    def test_ids_are_unique(self, store):
        ids = {_make(store).id for _ in range(50)}
        assert len(ids) == 50

    def test_created_at_non_decreasing(self, store):
        created = [_make(store).created_at for _ in range(20)]
        assert created == sorted(created)

    def test_clock_stepping_back_does_not_reorder(self, store):
        first = _make(store)
        earlier = first.created_at - timedelta(seconds=5)
        with patch("prepay.storage.utcnow", return_value=earlier):
            second = _make(store)

        assert second.created_at >= first.created_at

    def test_partial_file_fields_are_cleared(self, store):
        submission = _make(store, file_name="a.pdf", file_path=None, file_size="1.00 MB")

        assert (submission.file_name, submission.file_path, submission.file_size) == (
            None,
            None,
            None,
        )

    def test_complete_file_fields_are_kept(self, store):
        submission = _make(
            store, file_name="a.pdf", file_path="/tmp/a.pdf", file_size="1.23 MB"
        )
        assert submission.file_size == "1.23 MB"
        assert submission.has_file


class TestList:
    def test_all_sorted_newest_first(self, store):
        made = [_make(store, content=str(i)) for i in range(5)]

        listed = store.list()

        assert [s.id for s in listed] == [s.id for s in reversed(made)]

    @pytest.mark.parametrize("sentinel", [None, "", "전체"])
    def test_all_sentinel_returns_everything(self, store, sentinel):
        _make(store, hospital="안양병원")
        _make(store, hospital="구로병원")

        assert len(store.list(sentinel)) == 2

    def test_filter_exact_match(self, store):
        a = _make(store, hospital="안양병원")
        _make(store, hospital="구로병원")
        b = _make(store, hospital="안양병원")

        listed = store.list("안양병원")

        assert [s.id for s in listed] == [b.id, a.id]

    def test_filter_without_matches_is_empty(self, store):
        _make(store)
        assert store.list("없는병원") == []

    def test_filter_on_category_axis(self):
        store = SubmissionStore(filter_field="category")
        match = _make(store, category="구로")
        _make(store, category="안산")

        assert [s.id for s in store.list("구로")] == [match.id]

    def test_deleted_records_are_not_listed(self, store):
        keep = _make(store)
        gone = _make(store)
        store.delete(gone.id)

        assert [s.id for s in store.list()] == [keep.id]


class TestUpdateDelete:
    def test_update_overlays_only_given_fields(self, store):
        original = _make(store, category="안양")

        updated = store.update(original.id, {"status": "completed"})

        assert updated.status == "completed"
        assert updated.content == original.content
        assert updated.category == "안양"
        assert updated.created_at == original.created_at
        assert store.get_by_id(original.id).status == "completed"

    def test_update_ignores_identity_fields(self, store):
        original = _make(store)

        updated = store.update(original.id, {"id": "other", "created_at": None})

        assert updated.id == original.id
        assert updated.created_at == original.created_at

    def test_update_missing_returns_none(self, store):
        _make(store)
        assert store.update("missing", {"status": "failed"}) is None
        assert len(store) == 1

    def test_status_transitions_are_unconstrained(self, store):
        submission = _make(store)
        for status in ("completed", "pending", "failed", "completed"):
            assert store.update(submission.id, {"status": status}).status == status

    def test_delete_then_get(self, store):
        submission = _make(store)

        assert store.delete(submission.id) is True
        assert store.get_by_id(submission.id) is None
        assert store.delete(submission.id) is False
        assert store.delete(submission.id) is False

    def test_returned_records_are_detached(self, store):
        submission = _make(store)
        submission.status = "failed"

        assert store.get_by_id(submission.id).status == "pending"


class TestCounts:
    def test_counts_per_value_and_total(self, store):
        _make(store, hospital="안양병원")
        _make(store, hospital="안양병원")
        _make(store, hospital="기타")

        assert store.counts() == {"안양병원": 2, "기타": 1, "전체": 3}

    def test_counts_skip_missing_category(self, store):
        _make(store, category="안산")
        _make(store)

        assert store.counts("category") == {"안산": 1, "전체": 2}


class TestUsers:
    def test_create_and_lookup(self, store):
        user = store.create_user("nurse", "secret")

        assert store.get_user(user.id) is user
        assert store.get_user_by_username("nurse") is user
        assert store.get_user_by_username("nobody") is None
