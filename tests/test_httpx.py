import sqlite3
import sys

import pytest

from spike.db import Database
from spike.domains import push_domains_to_db, select_domains
from spike.httpx import create_live_hosts_table, insert_live_host, insert_live_hosts, probe
from spike.utils import CommandError

ECHO_TOOL = """
import sys
print(" ".join(sys.argv[1:]))
for line in sys.stdin.read().splitlines():
    print(line)
"""


def _install_tool(directory, name, body):
    path = directory / name
    path.write_text(f"#!{sys.executable}\n{body}")
    path.chmod(0o755)


@pytest.fixture
def tool_dir(tmp_path, monkeypatch):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))
    return bin_dir


@pytest.fixture
def db():
    database = Database()
    database.connect(":memory:")
    push_domains_to_db(database, ["example.com"])
    create_live_hosts_table(database)
    yield database
    database.close()


def test_probe_source_case(tool_dir):
    _install_tool(tool_dir, "httpx", ECHO_TOOL)
    urls = probe(["https://example.com"], 50)
    assert len(urls) > 0
    assert urls == ["-s -t 50", "https://example.com"]


def test_probe_removes_duplicates_and_blanks(tool_dir):
    _install_tool(tool_dir, "httpx", ECHO_TOOL)
    urls = probe(["https://a.example.com", "", "https://a.example.com"], 5)
    assert urls == ["-s -t 5", "https://a.example.com"]


def test_probe_failure_raises(tool_dir):
    _install_tool(tool_dir, "httpx", "import sys\nsys.exit(1)\n")
    with pytest.raises(CommandError):
        probe(["https://example.com"], 1)


def test_probe_missing_tool_raises(tool_dir):
    with pytest.raises(CommandError):
        probe(["https://example.com"], 1)


def test_insert_live_hosts(db):
    domain_id = select_domains(db)[0].id
    insert_live_hosts(db, domain_id, ["https://example.com", "http://example.com"])
    rows = db.query("SELECT domain_id, live_host FROM live_hosts ORDER BY id")
    assert rows == [(domain_id, "https://example.com"), (domain_id, "http://example.com")]


def test_insert_live_hosts_empty_is_noop(db):
    insert_live_hosts(db, 1, [])
    assert db.query("SELECT COUNT(*) FROM live_hosts") == [(0,)]


def test_insert_live_host_single(db):
    domain_id = select_domains(db)[0].id
    insert_live_host(db, domain_id, "https://example.com")
    assert db.query("SELECT live_host FROM live_hosts") == [("https://example.com",)]


def test_insert_live_host_unknown_domain_violates_foreign_key(db):
    with pytest.raises(sqlite3.IntegrityError):
        insert_live_host(db, 999, "https://example.com")


def test_live_hosts_cascade_on_domain_delete(db):
    domain_id = select_domains(db)[0].id
    insert_live_hosts(db, domain_id, ["https://example.com"])
    db.exec_insert("DELETE FROM domains WHERE id = ?", domain_id)
    assert db.query("SELECT COUNT(*) FROM live_hosts") == [(0,)]