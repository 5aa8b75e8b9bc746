"""Tests for configuration, logging setup and the program entry point."""
import io
import logging

from bibmanager.__main__ import main
from bibmanager.config import Config
from bibmanager.utils.logging_setup import setup_logging


class TestConfig:

    def test_defaults(self):
        config = Config()

        assert config.REFERENCES_FILE == "references.csv"
        assert config.PROJECTS_FILE == "projects.csv"
        assert config.DEFAULT_REF_TYPE == "article"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BIBMANAGER_REFERENCES_FILE", "/data/refs.csv")
        monkeypatch.setenv("BIBMANAGER_PROJECTS_FILE", "/data/projs.csv")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        config = Config.from_env()

        assert config.REFERENCES_FILE == "/data/refs.csv"
        assert config.PROJECTS_FILE == "/data/projs.csv"
        assert config.LOG_LEVEL == "DEBUG"


class TestLogging:

    def test_creates_log_file(self, tmp_path):
        log_file = setup_logging(str(tmp_path / "logs"), "warning")

        logging.getLogger("bibmanager.test").warning("written")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.exists()
        assert "written" in log_file.read_text(encoding="utf-8")


class TestMain:

    def test_runs_and_exits(self, monkeypatch, capsys, tmp_path):
        monkeypatch.setattr("sys.stdin", io.StringIO("\n"))

        assert main() == 0

        out = capsys.readouterr().out
        assert "Reference manager" in out
        assert "Loaded 0 project(s)" in out
        assert "Exiting..." in out

    def test_creates_project_files(self, monkeypatch, capsys, tmp_path):
        script = "\n".join(["1", "0", "Thesis", "T1", "", "", ""]) + "\n"
        monkeypatch.setattr("sys.stdin", io.StringIO(script))

        assert main() == 0

        projects = (tmp_path / "projects.csv").read_text(encoding="utf-8")
        assert projects.splitlines() == ["id,title,references", "T1,Thesis"]

    def test_closed_input(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("1\n"))

        assert main() == 0
        assert "Input closed." in capsys.readouterr().out
