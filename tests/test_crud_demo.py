"""
CRUD command-line tool
"""

import pytest

from database.errors import StoreConnectionError
from fakes import FakeDatabase
from tools.crud_demo import main


def test_scenario_leaves_table_without_record(capsys):
    database = FakeDatabase(rows={1: "existing"})

    main(["scenario"], database=database)

    output = capsys.readouterr().out
    assert "Inserted record: 3" in output
    assert "3\tzhangqi" in output
    assert "Updated rows: 1" in output
    assert "Deleted rows: 1" in output
    assert database.rows == {1: "existing"}
    assert database.close_calls == 1


def test_create_and_list(capsys):
    database = FakeDatabase()

    main(["create", "5", "eve"], database=database)
    main(["list"], database=database)

    assert "5\teve" in capsys.readouterr().out


def test_delete_missing_reports_zero(capsys):
    main(["delete", "9"], database=FakeDatabase())

    assert "Deleted rows: 0" in capsys.readouterr().out


def test_duplicate_create_exits_with_error(capsys):
    database = FakeDatabase(rows={5: "eve"})

    with pytest.raises(SystemExit) as exc_info:
        main(["create", "5", "mallory"], database=database)

    assert exc_info.value.code == 1
    assert "already exists" in capsys.readouterr().out
    assert database.rows == {5: "eve"}
    assert database.close_calls == 1


def test_unreachable_database_exits_with_error(capsys):
    database = FakeDatabase()
    database.connect_error = StoreConnectionError("Cannot connect to database: connection refused")

    with pytest.raises(SystemExit) as exc_info:
        main(["list"], database=database)

    assert exc_info.value.code == 1
