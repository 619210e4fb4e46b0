"""Tests for the run.py entry point."""

import logging

import anyio
import uvicorn

import run
from app.main import configure_logging
from config import Config


class TestParseArgs:
    def test_defaults_come_from_config(self) -> None:
        args = run.parse_args([])
        assert args.host == Config.HOST
        assert args.port == Config.PORT
        assert args.log_level == Config.LOG_LEVEL.lower()

    def test_overrides(self) -> None:
        args = run.parse_args(["--host", "127.0.0.1", "--port", "9000", "--log-level", "debug"])
        assert args.host == "127.0.0.1"
        assert args.port == 9000
        assert args.log_level == "debug"


class TestServer:
    def test_build_server(self) -> None:
        server = run.build_server(run.parse_args(["--port", "9001"]))
        assert isinstance(server, run.AnnouncingServer)
        assert server.config.port == 9001
        assert server.config.app == "app.main:app"

    def test_logs_running_once_started(self, monkeypatch, caplog) -> None:
        async def fake_startup(self, sockets=None):
            self.started = True

        monkeypatch.setattr(uvicorn.Server, "startup", fake_startup)
        server = run.build_server(run.parse_args([]))

        with caplog.at_level(logging.INFO, logger="run"):
            anyio.run(server.startup)

        assert [r.getMessage() for r in caplog.records if r.name == "run"] == ["Running"]

    def test_silent_when_startup_fails(self, monkeypatch, caplog) -> None:
        async def fake_startup(self, sockets=None):
            self.should_exit = True

        monkeypatch.setattr(uvicorn.Server, "startup", fake_startup)
        server = run.build_server(run.parse_args([]))

        with caplog.at_level(logging.INFO, logger="run"):
            anyio.run(server.startup)

        assert not [r for r in caplog.records if r.name == "run"]


class TestLogging:
    def test_server_log_file_after_earlier_basic_config(self, monkeypatch, tmp_path) -> None:
        log_file = tmp_path / "server.log"
        monkeypatch.setattr(Config, "SERVER_LOG_FILE", str(log_file))
        monkeypatch.setattr(Config, "LOG_LEVEL", "INFO")

        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        # run.py installs a stream handler before the app is imported
        logging.basicConfig(level=logging.INFO)
        try:
            configure_logging()
            logging.getLogger("app.main").warning("written to the server log")
            for handler in root.handlers:
                handler.flush()
            assert "written to the server log" in log_file.read_text()
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
