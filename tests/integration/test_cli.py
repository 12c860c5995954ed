"""Integration tests for labadmin CLI."""

import pytest
from click.testing import CliRunner

from labadmin.cli import main
from labadmin.store.sqlite import SQLiteLabStore


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "labs.db"


@pytest.fixture
def env(db_path):
    """Point the CLI at a test database."""
    return {"LABADMIN_DATABASE_PATH": str(db_path), "LABADMIN_STORE_BACKEND": "sqlite"}


@pytest.fixture
def store(db_path):
    return SQLiteLabStore(db_path)


@pytest.fixture
def sample_lab(store):
    """Create a sample lab for testing."""
    return store.insert({
        "name": "Physics",
        "building": "Main",
        "capacity": 40,
        "has_projector": True,
        "has_ac": True,
        "is_available": True,
    })


class TestMainCommand:
    """Tests for the main labadmin command."""

    def test_version(self, runner):
        """Test --version flag."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "labadmin" in result.output
        assert "0.1.0" in result.output

    def test_help(self, runner):
        """Test --help flag."""
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Lab Administration" in result.output
        assert "list" in result.output
        assert "toggle" in result.output


class TestListCommand:
    """Tests for the list command."""

    def test_list_empty(self, runner, env):
        result = runner.invoke(main, ["list"], env=env)
        assert result.exit_code == 0
        assert "No labs found" in result.output

    def test_list_labs(self, runner, env, sample_lab):
        result = runner.invoke(main, ["-v", "list"], env=env)
        assert result.exit_code == 0
        assert "Physics" in result.output
        assert "40 seats" in result.output
        assert "Projector, AC" in result.output
        assert "Available" in result.output
        assert "1 lab(s)" in result.output


class TestAddCommand:
    """Tests for the add command."""

    def test_add_defaults(self, runner, env, store):
        """Test add stores an available lab with default capacity."""
        result = runner.invoke(main, ["add", "Chemistry", "Science"], env=env)
        assert result.exit_code == 0
        assert "Lab added successfully" in result.output

        lab = store.list_labs()[0]
        assert lab.capacity == 30
        assert lab.has_projector is True
        assert lab.has_ac is True
        assert lab.is_available is True

    def test_add_without_facilities(self, runner, env, store):
        result = runner.invoke(
            main, ["add", "Bio", "North", "--capacity", "abc", "--no-projector"], env=env
        )
        assert result.exit_code == 0

        lab = store.list_labs()[0]
        assert lab.capacity == 30
        assert lab.has_projector is False
        assert lab.has_ac is True


class TestEditCommand:
    """Tests for the edit command."""

    def test_edit_fields(self, runner, env, store, sample_lab):
        """Test edit changes given fields and keeps the rest."""
        store.update(sample_lab.id, {"is_available": False})

        result = runner.invoke(
            main, ["edit", sample_lab.id, "--capacity", "12", "--no-ac"], env=env
        )
        assert result.exit_code == 0
        assert "Lab updated successfully" in result.output

        lab = store.list_labs()[0]
        assert lab.name == "Physics"
        assert lab.capacity == 12
        assert lab.has_ac is False
        assert lab.has_projector is True
        assert lab.is_available is False

    def test_edit_no_changes(self, runner, env, sample_lab):
        result = runner.invoke(main, ["edit", sample_lab.id], env=env)
        assert result.exit_code == 0
        assert "No changes specified" in result.output

    def test_edit_unknown_lab(self, runner, env):
        result = runner.invoke(main, ["edit", "missing", "--name", "x"], env=env)
        assert result.exit_code == 1
        assert "not found" in result.output


class TestToggleCommand:
    """Tests for the toggle command."""

    def test_toggle(self, runner, env, store, sample_lab):
        result = runner.invoke(main, ["toggle", sample_lab.id], env=env)
        assert result.exit_code == 0
        assert "Physics: In Use" in result.output
        assert store.list_labs()[0].is_available is False

        result = runner.invoke(main, ["toggle", sample_lab.id], env=env)
        assert "Physics: Available" in result.output


class TestRemoveCommand:
    """Tests for the remove command."""

    def test_remove_declined(self, runner, env, store, sample_lab):
        """Test answering no leaves the lab in place."""
        result = runner.invoke(main, ["remove", sample_lab.id], input="n\n", env=env)
        assert result.exit_code != 0
        assert "Are you sure you want to delete this lab?" in result.output
        assert len(store.list_labs()) == 1

    def test_remove_confirmed(self, runner, env, store, sample_lab):
        result = runner.invoke(main, ["remove", sample_lab.id], input="y\n", env=env)
        assert result.exit_code == 0
        assert "Lab deleted successfully" in result.output
        assert store.list_labs() == []

    def test_remove_yes(self, runner, env, store, sample_lab):
        result = runner.invoke(main, ["remove", sample_lab.id, "--yes"], env=env)
        assert result.exit_code == 0
        assert store.list_labs() == []


class TestConfigCommands:
    """Tests for config commands."""

    def test_config_show(self, runner, env, db_path):
        result = runner.invoke(main, ["config", "show"], env=env)
        assert result.exit_code == 0
        assert "Store backend: sqlite" in result.output
        assert str(db_path) in result.output

    def test_config_init(self, runner, env, tmp_path):
        path = tmp_path / "config.yaml"
        result = runner.invoke(main, ["config", "init", "--path", str(path)], env=env)
        assert result.exit_code == 0
        assert path.exists()

        result = runner.invoke(main, ["config", "init", "--path", str(path)], env=env)
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_unsupported_backend(self, runner, env):
        env = {**env, "LABADMIN_STORE_BACKEND": "mongo"}
        result = runner.invoke(main, ["list"], env=env)
        assert result.exit_code == 1
        assert "Unsupported store backend" in result.output
