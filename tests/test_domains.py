import sqlite3

import pytest

from spike.db import Database
from spike.domains import (
    DomainRecord,
    insert_domain,
    insert_domains,
    push_domains_to_db,
    select_domains,
    update_domain_scanned,
)


@pytest.fixture
def db():
    database = Database()
    database.connect(":memory:")
    yield database
    database.close()


def test_push_and_select_domains(db):
    push_domains_to_db(db, ["a.example.com", "b.example.com"])
    records = select_domains(db)
    assert [r.domain for r in records] == ["a.example.com", "b.example.com"]
    assert all(r.is_scanned is False for r in records)
    assert len({r.id for r in records}) == 2


def test_select_on_empty_table_returns_empty_list(db):
    push_domains_to_db(db, [])
    assert select_domains(db) == []


def test_insert_domain_single(db):
    push_domains_to_db(db, [])
    insert_domain(db, "example.com")
    records = select_domains(db)
    assert [r.domain for r in records] == ["example.com"]
    assert isinstance(records[0], DomainRecord)


def test_duplicate_domain_rejected(db):
    push_domains_to_db(db, ["example.com"])
    with pytest.raises(sqlite3.IntegrityError):
        insert_domain(db, "example.com")


def test_bulk_insert_rolls_back_on_duplicate(db):
    push_domains_to_db(db, ["example.com"])
    with pytest.raises(sqlite3.IntegrityError):
        insert_domains(db, ["new.example.com", "example.com"])
    assert [r.domain for r in select_domains(db)] == ["example.com"]


def test_push_twice_keeps_table(db):
    push_domains_to_db(db, ["a.example.com"])
    push_domains_to_db(db, ["b.example.com"])
    assert [r.domain for r in select_domains(db)] == ["a.example.com", "b.example.com"]


def test_update_domain_scanned(db):
    push_domains_to_db(db, ["a.example.com", "b.example.com"])
    update_domain_scanned(db, "a.example.com")
    flags = {r.domain: r.is_scanned for r in select_domains(db)}
    assert flags == {"a.example.com": True, "b.example.com": False}


def test_insert_without_table_fails(db):
    with pytest.raises(sqlite3.OperationalError):
        insert_domain(db, "example.com")