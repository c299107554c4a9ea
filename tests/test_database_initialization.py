"""
Integration tests for the ``init`` command.
"""
from argparse import Namespace

import pytest
from sqlalchemy import func, inspect, select

from todoboard.__main__ import main
from todoboard.commands.initialize import InitializeCommand
from todoboard.database import create_db_engine
from todoboard.models import TodoList


def run_command(database_url, validate_only=False):
    cmd = InitializeCommand(Namespace(database_url=database_url, validate_only=validate_only))
    with cmd:
        return cmd.run()


def test_initialize_command_creates_complete_database(database_url):
    assert run_command(database_url) == 0

    engine = create_db_engine(database_url)
    try:
        tables = set(inspect(engine).get_table_names())
        assert {"todo_lists", "todo_items", "roles", "users", "user_roles"} <= tables
        with engine.connect() as conn:
            assert conn.scalar(select(func.count()).select_from(TodoList)) == 5
    finally:
        engine.dispose()


def test_validate_only_on_initialized_database(database_url):
    assert run_command(database_url) == 0

    assert run_command(database_url, validate_only=True) == 0


def test_validate_only_on_empty_database(database_url):
    assert run_command(database_url, validate_only=True) == 1


def test_initialization_failure_returns_error(database_url, monkeypatch):
    def fail(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr("todoboard.commands.initialize.initialise_database", fail)

    assert run_command(database_url) == 1


def test_main_runs_init(database_url):
    assert main(["init", "--database-url", database_url]) == 0


def test_main_without_command():
    assert main([]) == 1


def test_main_rejects_unknown_command():
    with pytest.raises(SystemExit):
        main(["nope"])
