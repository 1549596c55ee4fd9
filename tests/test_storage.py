import json
from decimal import Decimal

import pytest

from finance_core.exceptions import PersistenceError
from finance_core.storage import SnapshotStorage


def _write(path, name, payload):
    (path / name).write_text(json.dumps(payload), encoding="utf-8")


@pytest.fixture
def export_dir(tmp_path):
    _write(tmp_path, "expenses.json", [
        {"id": "e1", "amount": 20, "description": "Taxi", "category": "c1",
         "date": "2024-06-02T10:00:00Z", "userId": "alice"},
        {"id": "e2", "amount": 99, "description": "Other user", "category": "c1",
         "date": "2024-06-02T10:00:00Z", "userId": "bob"},
    ])
    _write(tmp_path, "categories.json", [
        {"id": "c1", "name": "Transportation", "color": "bg-green-500", "userId": "alice"},
    ])
    _write(tmp_path, "budgets.json", [
        {"id": "alice", "userId": "alice", "monthlyBudget": 800, "categories": {"c1": 100}},
    ])
    return tmp_path


def test_snapshot_is_scoped_to_owner(export_dir):
    snapshot = SnapshotStorage(export_dir).snapshot("alice")

    assert [expense.id for expense in snapshot.expenses] == ["e1"]
    assert snapshot.categories[0].name == "Transportation"
    assert snapshot.budget.monthly_budget == Decimal("800")
    assert snapshot.savings_goals == ()


def test_missing_files_are_empty_collections(tmp_path):
    snapshot = SnapshotStorage(tmp_path).snapshot("nobody")
    assert snapshot.expenses == ()
    assert snapshot.budget is None


def test_corrupted_json_raises_persistence_error(tmp_path):
    (tmp_path / "expenses.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(PersistenceError):
        SnapshotStorage(tmp_path).snapshot("alice")


def test_non_list_payload_raises_persistence_error(tmp_path):
    _write(tmp_path, "categories.json", {"id": "c1"})
    with pytest.raises(PersistenceError):
        SnapshotStorage(tmp_path).load("categories.json")


def test_malformed_record_raises_persistence_error(tmp_path):
    _write(tmp_path, "expenses.json", [{"userId": "alice", "amount": 5}])
    with pytest.raises(PersistenceError, match="Malformed record"):
        SnapshotStorage(tmp_path).snapshot("alice")
