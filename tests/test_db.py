import sqlite3

import pytest

from spike.db import Database, make_args_list

PARENT = "CREATE TABLE parent (id INTEGER PRIMARY KEY, name TEXT NOT NULL UNIQUE)"
CHILD = (
    "CREATE TABLE child (id INTEGER PRIMARY KEY AUTOINCREMENT, parent_id INTEGER NOT NULL, "
    "value TEXT NOT NULL, FOREIGN KEY (parent_id) REFERENCES parent(id) ON DELETE CASCADE)"
)


@pytest.fixture
def db(tmp_path):
    database = Database()
    database.connect(str(tmp_path / "test.db"))
    database.exec_stmt(PARENT)
    database.exec_stmt(CHILD)
    yield database
    if database._conn is not None:
        database.close()


def test_foreign_keys_enabled(db):
    assert db.query("PRAGMA foreign_keys") == [(1,)]


def test_exec_insert_and_query(db):
    db.exec_insert("INSERT INTO parent (id, name) VALUES (?, ?)", 1, "alpha")
    assert db.query("SELECT id, name FROM parent WHERE name = ?", "alpha") == [(1, "alpha")]


def test_bulk_insert_with_args_list(db):
    db.exec_insert("INSERT INTO parent (id, name) VALUES (?, ?)", 1, "alpha")
    values = ["a", "b", "c"]
    db.exec_bulk_insert(
        "INSERT INTO child (parent_id, value) VALUES (?, ?)", make_args_list(1, values)
    )
    rows = db.query("SELECT parent_id, value FROM child ORDER BY id")
    assert rows == [(1, v) for v in values]


def test_bulk_insert_rolls_back_on_error(db):
    with pytest.raises(sqlite3.IntegrityError):
        db.exec_bulk_insert(
            "INSERT INTO parent (name) VALUES (?)", [("x",), ("y",), ("x",)]
        )
    assert db.query("SELECT COUNT(*) FROM parent") == [(0,)]


def test_foreign_key_violation(db):
    with pytest.raises(sqlite3.IntegrityError):
        db.exec_insert("INSERT INTO child (parent_id, value) VALUES (?, ?)", 42, "orphan")


def test_cascade_delete(db):
    db.exec_insert("INSERT INTO parent (id, name) VALUES (?, ?)", 1, "alpha")
    db.exec_bulk_insert(
        "INSERT INTO child (parent_id, value) VALUES (?, ?)", make_args_list(1, ["a", "b"])
    )
    db.exec_insert("DELETE FROM parent WHERE id = ?", 1)
    assert db.query("SELECT COUNT(*) FROM child") == [(0,)]


def test_data_persists_after_close(tmp_path):
    path = str(tmp_path / "persist.db")
    with Database() as first:
        first.connect(path)
        first.exec_stmt(PARENT)
        first.exec_insert("INSERT INTO parent (id, name) VALUES (?, ?)", 5, "kept")
    second = Database()
    second.connect(path)
    try:
        assert second.query("SELECT name FROM parent") == [("kept",)]
    finally:
        second.close()


def test_not_connected_raises():
    with pytest.raises(sqlite3.ProgrammingError):
        Database().query("SELECT 1")


def test_close_then_use_raises(db):
    db.close()
    with pytest.raises(sqlite3.ProgrammingError):
        db.exec_stmt("SELECT 1")


def test_make_args_list():
    values = ["u1", "u2"]
    result = make_args_list(9, values)
    assert len(result) == len(values)
    assert [row[1] for row in result] == values
    assert all(row[0] == 9 for row in result)


def test_make_args_list_empty():
    assert make_args_list("p", []) == []