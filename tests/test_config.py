"""Tests for config.Config and the router settings model."""

import os

import pytest
from pydantic import ValidationError

from config import BASE_DIR, Config, parse_methods, variant_default
from app.models.schemas import RouterSettings


class TestVariantDefaults:
    def test_spa_preset(self) -> None:
        assert variant_default("spa", "PORT") == "8080"
        assert variant_default("spa", "FALLBACK_FILE") == "public_html/index.html"
        assert variant_default("spa", "FALLBACK_STATUS") == "200"

    def test_not_found_preset(self) -> None:
        assert variant_default("not_found", "PORT") == "80"
        assert variant_default("not_found", "FALLBACK_FILE") == "resources/404.html"
        assert variant_default("not_found", "FALLBACK_STATUS") == "404"
        assert variant_default("not_found", "FALLBACK_METHODS") == "GET"

    def test_unknown_variant_uses_spa(self) -> None:
        assert variant_default("bogus", "PORT") == "8080"

    def test_shipped_fallback_files_exist(self) -> None:
        for variant in ("spa", "not_found"):
            assert (BASE_DIR / variant_default(variant, "FALLBACK_FILE")).is_file()


class TestParseMethods:
    @pytest.mark.parametrize("value", ["", "*", "GET,*", None])
    def test_any_method(self, value) -> None:
        assert parse_methods(value) is None

    def test_list(self) -> None:
        assert parse_methods(" get, head ") == ["GET", "HEAD"]


class TestValidate:
    @pytest.fixture(autouse=True)
    def valid_config(self, monkeypatch):
        monkeypatch.setattr(Config, "SERVER_VARIANT", "spa")
        monkeypatch.setattr(Config, "PORT", 8080)
        monkeypatch.setattr(Config, "API_PREFIX", "/api")
        monkeypatch.setattr(Config, "FALLBACK_STATUS", 200)
        monkeypatch.setattr(Config, "ANALYSIS_BACKEND", "command")
        monkeypatch.setattr(Config, "ANALYSIS_TIMEOUT", 60.0)
        monkeypatch.setattr(Config, "LOG_LEVEL", "INFO")

    def test_valid(self) -> None:
        Config.validate()

    @pytest.mark.parametrize(
        "name, value, message",
        [
            ("SERVER_VARIANT", "canary", "SERVER_VARIANT"),
            ("PORT", 0, "PORT"),
            ("PORT", 70000, "PORT"),
            ("API_PREFIX", "api", "API_PREFIX"),
            ("API_PREFIX", "/", "API_PREFIX"),
            ("FALLBACK_STATUS", 999, "FALLBACK_STATUS"),
            ("ANALYSIS_BACKEND", "magic", "ANALYSIS_BACKEND"),
            ("ANALYSIS_TIMEOUT", 0, "ANALYSIS_TIMEOUT"),
            ("LOG_LEVEL", "LOUD", "LOG_LEVEL"),
        ],
    )
    def test_invalid(self, monkeypatch, name, value, message) -> None:
        monkeypatch.setattr(Config, name, value)
        with pytest.raises(ValueError, match=message):
            Config.validate()

    def test_reports_all_errors(self, monkeypatch) -> None:
        monkeypatch.setattr(Config, "PORT", 0)
        monkeypatch.setattr(Config, "LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError) as exc_info:
            Config.validate()
        assert "PORT" in str(exc_info.value)
        assert "LOG_LEVEL" in str(exc_info.value)


class TestRouterSettings:
    def test_from_config(self, monkeypatch) -> None:
        monkeypatch.setattr(Config, "API_PREFIX", "/analysis/")
        monkeypatch.setattr(Config, "STATIC_ROOT", "public_html")
        monkeypatch.setattr(Config, "FALLBACK_FILE", "resources/404.html")
        monkeypatch.setattr(Config, "FALLBACK_STATUS", 404)
        monkeypatch.setattr(Config, "FALLBACK_METHODS", ["GET"])

        settings = Config.router_settings()
        assert settings.api_prefix == "/analysis"
        assert settings.static_root == str(BASE_DIR / "public_html")
        assert settings.fallback_file == str(BASE_DIR / "resources" / "404.html")
        assert settings.fallback_status == 404
        assert settings.fallback_methods == ["GET"]

    def test_absolute_paths_are_kept(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setattr(Config, "STATIC_ROOT", str(tmp_path))
        assert Config.router_settings().static_root == str(tmp_path)
        assert os.path.isabs(Config.resolve_path("public_html"))

    def test_prefix_normalised(self) -> None:
        assert RouterSettings(api_prefix="api").api_prefix == "/api"
        assert RouterSettings(api_prefix="/api/").api_prefix == "/api"

    def test_root_prefix_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RouterSettings(api_prefix="/")

    def test_status_range(self) -> None:
        with pytest.raises(ValidationError):
            RouterSettings(fallback_status=700)

    def test_methods_upper_cased(self) -> None:
        assert RouterSettings(fallback_methods=["get"]).fallback_methods == ["GET"]

    def test_frozen(self) -> None:
        settings = RouterSettings()
        with pytest.raises(ValidationError):
            settings.fallback_status = 404
