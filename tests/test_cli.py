"""
Tests for the factory-helper command line.

Runs main() against a SQLite file holding the sample tables.
"""

import logging
from pathlib import Path

import pytest
from sqlalchemy import create_engine

from factory_helper.config import Settings
from factory_helper.logging_config import resolve_level, setup_logging
from factory_helper.main import build_parser, main, read_document
from sample_app.database import Base


@pytest.fixture(autouse=True)
def restore_logging():
    """main() reconfigures the root logger; put pytest's handlers back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    url = f"sqlite:///{tmp_path / 'app.db'}"
    engine = create_engine(url)
    Base.metadata.create_all(engine)
    engine.dispose()
    return url


@pytest.fixture
def cli_settings(settings: Settings, database_url: str) -> Settings:
    settings.database_url = database_url
    return settings


@pytest.fixture
def output(tmp_path: Path) -> Path:
    return tmp_path / "tests" / "factories.py"


class TestParser:
    """Command line options."""

    def test_defaults(self, settings: Settings):
        args = build_parser(settings).parse_args([])
        assert args.model == []
        assert args.filename == "tests/factories.py"
        assert args.dir is None
        assert args.reset is False
        assert args.ignore == ""

    def test_short_options(self, settings: Settings):
        args = build_parser(settings).parse_args(
            ["a.A,b.B", "c.C", "-F", "out.py", "-D", "app", "-D", "lib", "-R", "-I", "a.A"]
        )
        assert args.model == ["a.A,b.B", "c.C"]
        assert args.filename == "out.py"
        assert args.dir == ["app", "lib"]
        assert args.reset is True
        assert args.ignore == "a.A"


class TestMain:
    """End-to-end runs."""

    def test_writes_factories_for_named_model(self, cli_settings: Settings, output: Path, capsys):
        exit_code = main(["sample_app.models.User", "-F", str(output)], settings=cli_settings)
        assert exit_code == 0
        document = output.read_text()
        assert "class UserFactory(factory.Factory):" in document
        assert "ArticleFactory" not in document
        assert f"Model factories were written successfully to {output}" in capsys.readouterr().out

    def test_scans_model_directories(self, cli_settings: Settings, output: Path):
        """Without model names every class under the model dirs is considered."""
        assert main(["-F", str(output)], settings=cli_settings) == 0
        document = output.read_text()
        for name in ["User", "Article", "Tag", "Location", "Profile", "LedgerEntry"]:
            assert document.count(f"class {name}Factory(") == 1
        assert "ExplodingFactory" not in document
        assert "SlugHelperFactory" not in document

    def test_dir_option(self, cli_settings: Settings, output: Path):
        assert main(["-F", str(output), "-D", "nothing_here"], settings=cli_settings) == 0
        assert "class " not in output.read_text()

    def test_appends_on_second_run(self, cli_settings: Settings, output: Path):
        main(["sample_app.models.User", "-F", str(output)], settings=cli_settings)
        main(["sample_app.models.User,sample_app.models.Tag", "-F", str(output)], settings=cli_settings)
        document = output.read_text()
        assert document.count("class UserFactory(") == 1
        assert document.count("class TagFactory(") == 1

    def test_reset_discards_file(self, cli_settings: Settings, output: Path):
        output.parent.mkdir(parents=True)
        output.write_text("# stale content\n")
        main(["sample_app.models.Tag", "-F", str(output), "-R"], settings=cli_settings)
        document = output.read_text()
        assert "stale content" not in document
        assert "class TagFactory(" in document

    def test_ignore_option(self, cli_settings: Settings, output: Path):
        main(["-F", str(output), "-I", "sample_app.models.User,sample_app.models.Article"], settings=cli_settings)
        document = output.read_text()
        assert "UserFactory" not in document
        assert "ArticleFactory" not in document
        assert "class TagFactory(" in document

    def test_relative_filename_uses_project_root(self, cli_settings: Settings, tmp_path: Path):
        cli_settings.project_root = str(tmp_path)
        assert main(["sample_app.models.Tag", "-F", "generated/factories.py"], settings=cli_settings) == 0
        assert (tmp_path / "generated" / "factories.py").exists()

    def test_database_url_option(self, settings: Settings, database_url: str, output: Path):
        """--database-url overrides the configured database."""
        exit_code = main(
            ["sample_app.models.User", "-F", str(output), "--database-url", database_url],
            settings=settings,
        )
        assert exit_code == 0
        assert "class UserFactory(" in output.read_text()

    def test_write_failure_is_reported(self, cli_settings: Settings, tmp_path: Path, capsys):
        """A file where the output directory should be makes the write fail."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        exit_code = main(
            ["sample_app.models.User", "-F", str(blocker / "factories.py")],
            settings=cli_settings,
        )
        assert exit_code == 1
        assert "Failed to write model factories to" in capsys.readouterr().err

    def test_missing_file_reads_empty(self, tmp_path: Path):
        assert read_document(tmp_path / "missing.py") == ""


class TestLogging:
    """Root logger set up by the command."""

    def test_level_names_are_case_insensitive(self):
        assert resolve_level("info") == logging.INFO
        assert resolve_level("DEBUG") == logging.DEBUG

    @pytest.mark.parametrize("name", ["", None, "chatty"])
    def test_unknown_level_falls_back_to_warning(self, name):
        assert resolve_level(name) == logging.WARNING

    def test_single_stderr_handler(self):
        setup_logging("info")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_verbose_flag_reports_skipped_models(self, cli_settings: Settings, output: Path, capsys):
        main(
            ["sample_app.models.User", "-I", "sample_app.models.User", "-F", str(output), "-v"],
            settings=cli_settings,
        )
        err = capsys.readouterr().err
        assert "INFO factory_helper.services.generator: Ignoring model 'sample_app.models.User'" in err
