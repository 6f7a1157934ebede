"""Tests for the database management commands."""

import pytest
from manage import drop_database, main, seed_database, setup_database
from shared.config import get_settings
from shared.storage.sql_adapter import SqlBackend
from sqlalchemy import inspect


@pytest.fixture()
def database_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'manage.db'}"
    monkeypatch.setenv("STORE_BACKEND", "sql")
    monkeypatch.setenv("DATABASE_URL", url)
    get_settings.cache_clear()

    yield url

    get_settings.cache_clear()


def _tables(url):
    backend = SqlBackend(url)
    try:
        return set(inspect(backend.engine).get_table_names())
    finally:
        backend.close()


class TestCommands:
    def test_setup_and_drop(self, sql_backend, capsys):
        drop_database(sql_backend)
        assert inspect(sql_backend.engine).get_table_names() == []

        setup_database(sql_backend)
        assert {"products", "customers", "orders", "order_items"} <= set(inspect(sql_backend.engine).get_table_names())
        assert "Creating sql schema" in capsys.readouterr().out

    def test_seed_once(self, backend, capsys):
        seed_database(backend)
        assert "Seeded 3 sample products" in capsys.readouterr().out

        seed_database(backend)
        assert "nothing seeded" in capsys.readouterr().out
        assert backend.count_products() == 3


class TestMain:
    def test_setup_db(self, database_url):
        main(["setup-db"])
        assert {"products", "customers", "orders", "order_items"} <= _tables(database_url)

    def test_seed(self, database_url):
        main(["seed"])

        backend = SqlBackend(database_url)
        try:
            assert backend.count_products() == 3
        finally:
            backend.close()

    def test_drop_db(self, database_url):
        main(["setup-db"])
        main(["drop-db"])
        assert _tables(database_url) == set()

    def test_unknown_command(self, database_url):
        with pytest.raises(SystemExit):
            main(["migrate"])
