"""LocalStore: the in-memory and file-backed stand-in for Firestore."""

import json
from datetime import datetime, timezone

import pytest
from google.cloud.firestore_v1.base_query import FieldFilter

from app.services.local_store import LocalStore


def test_set_get_and_merge():
    store = LocalStore()
    ref = store.collection("users").document("u1")
    ref.set({"email": "a@b.com", "firstName": "A"})
    ref.set({"firstName": "Ann"}, merge=True)

    snapshot = ref.get()
    assert snapshot.exists
    assert snapshot.to_dict() == {"email": "a@b.com", "firstName": "Ann"}
    assert not store.collection("users").document("missing").get().exists


def test_snapshots_are_copies():
    store = LocalStore()
    ref = store.collection("plans").document("p")
    ref.set({"features": ["a"]})
    ref.get().to_dict()["features"].append("b")
    assert ref.get().to_dict() == {"features": ["a"]}


def test_update_missing_document_raises():
    with pytest.raises(KeyError):
        LocalStore().collection("users").document("nope").update({"x": 1})


def test_where_accepts_field_filter():
    store = LocalStore()
    schedule = store.collection("schedule")
    schedule.document("a").set({"dayOfWeek": "monday"})
    schedule.document("b").set({"dayOfWeek": "friday"})

    docs = schedule.where(filter=FieldFilter("dayOfWeek", "==", "friday")).get()
    assert [d.id for d in docs] == ["b"]
    assert [d.id for d in schedule.where("dayOfWeek", "==", "monday").get()] == ["a"]


def test_transaction_commits_all_writes():
    store = LocalStore()
    store.collection("codes").document("C1").set({"status": "ACTIVE"})

    def work(transaction):
        transaction.set(store.collection("users").document("u1"), {"email": "a@b.com"})
        transaction.update(store.collection("codes").document("C1"), {"status": "USED"})
        return "done"

    assert store.run_transaction(work) == "done"
    assert store.collections["users"]["u1"] == {"email": "a@b.com"}
    assert store.collections["codes"]["C1"] == {"status": "USED"}


def test_failed_transaction_writes_nothing():
    store = LocalStore()
    store.collection("codes").document("C1").set({"status": "ACTIVE"})

    def work(transaction):
        transaction.set(store.collection("users").document("u1"), {"email": "a@b.com"})
        transaction.update(store.collection("codes").document("C1"), {"status": "USED"})
        raise RuntimeError("abort")

    with pytest.raises(RuntimeError):
        store.run_transaction(work)
    assert "u1" not in store.collections.get("users", {})
    assert store.collections["codes"]["C1"] == {"status": "ACTIVE"}


def test_file_backed_store_survives_restart(tmp_path):
    store = LocalStore(tmp_path)
    store.collection("contractCodes").document("GYM-0001").set(
        {"status": "ACTIVE", "expiresAt": datetime(2030, 1, 1, tzinfo=timezone.utc)}
    )
    _, ref = store.collection("visits").add({"fullName": "Jane"})

    reloaded = LocalStore(tmp_path)
    assert reloaded.collection("contractCodes").document("GYM-0001").get().to_dict() == {
        "status": "ACTIVE",
        "expiresAt": "2030-01-01T00:00:00+00:00",
    }
    assert reloaded.collection("visits").document(ref.id).get().get("fullName") == "Jane"


def test_loads_seed_lists(tmp_path):
    (tmp_path / "plans.json").write_text(json.dumps([{"id": "basic", "name": "Basic", "price": 29}]))
    store = LocalStore(tmp_path)
    assert store.collection("plans").document("basic").get().to_dict() == {"name": "Basic", "price": 29}


def test_limit_applies_after_filters():
    store = LocalStore()
    accounts = store.collection("authAccounts")
    accounts.document("u1").set({"email": "a@b.com"})
    accounts.document("u2").set({"email": "c@d.com"})
    accounts.document("u3").set({"email": "c@d.com"})

    assert [d.id for d in accounts.where("email", "==", "c@d.com").limit(1).get()] == ["u2"]
    assert len(accounts.limit(2).get()) == 2


@pytest.mark.parametrize("op", ["!=", ">=", "in", "array_contains"])
def test_only_equality_filters_are_supported(op):
    with pytest.raises(ValueError):
        LocalStore().collection("schedule").where("dayOfWeek", op, "monday")
