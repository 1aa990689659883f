from __future__ import annotations

import json

import pytest

from armcosts import config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "ARMCOSTS_API_URL",
        "ARMCOSTS_CURRENCY",
        "ARMCOSTS_DISABLE_DETAILED_METRICS",
        "ARMCOSTS_HTTP_TIMEOUT",
        "ARMCOSTS_CAPACITY_TIERS",
        "AZ_BINARY",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    # keep .env files in the working tree out of the picture
    monkeypatch.setattr(config, "load_dotenv", lambda *a, **k: False)


def test_default_endpoint():
    assert config.resolve_endpoint() == "https://prices.azure.com/api/retail/prices"


def test_env_endpoint_strips_trailing_slash(monkeypatch):
    monkeypatch.setenv("ARMCOSTS_API_URL", "http://localhost:8080/prices/")
    assert config.resolve_endpoint() == "http://localhost:8080/prices"


def test_cli_override_wins(monkeypatch):
    monkeypatch.setenv("ARMCOSTS_API_URL", "http://a:1")
    assert config.resolve_endpoint("http://c:3") == "http://c:3"


def test_load_config_defaults():
    cfg = config.load_config()
    assert cfg.currency == "USD"
    assert cfg.disable_detailed_metrics is False
    assert cfg.no_color is False
    assert cfg.http_timeout == 30.0
    assert cfg.capacity_tiers_path is None
    assert cfg.az_binary == "az"


def test_load_config_reads_env(monkeypatch):
    monkeypatch.setenv("ARMCOSTS_CURRENCY", "EUR")
    monkeypatch.setenv("ARMCOSTS_DISABLE_DETAILED_METRICS", "true")
    monkeypatch.setenv("ARMCOSTS_HTTP_TIMEOUT", "5")
    monkeypatch.setenv("AZ_BINARY", "/opt/az")
    monkeypatch.setenv("NO_COLOR", "1")
    cfg = config.load_config()
    assert cfg.currency == "EUR"
    assert cfg.disable_detailed_metrics is True
    assert cfg.http_timeout == 5.0
    assert cfg.az_binary == "/opt/az"
    assert cfg.no_color is True


def test_cli_arguments_beat_env(monkeypatch):
    monkeypatch.setenv("ARMCOSTS_CURRENCY", "EUR")
    monkeypatch.setenv("ARMCOSTS_HTTP_TIMEOUT", "5")
    cfg = config.load_config(currency="PLN", http_timeout=12.5)
    assert cfg.currency == "PLN"
    assert cfg.http_timeout == 12.5


def test_bad_timeout_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("ARMCOSTS_HTTP_TIMEOUT", "soon")
    assert config.load_config().http_timeout == 30.0


def test_packaged_capacity_tiers():
    tiers = config.load_capacity_tiers()
    assert tiers.version
    meters = tiers.meters_for("Microsoft.AnalysisServices/servers")
    assert "S1 Scale-Out" in meters
    assert tiers.meters_for("Microsoft.Web/serverfarms") == frozenset()


def test_capacity_tiers_from_file(tmp_path):
    p = tmp_path / "tiers.json"
    p.write_text(json.dumps({"version": "test", "tiers": {"X/y": ["M1", "M2"]}}))
    tiers = config.load_capacity_tiers(p)
    assert tiers.version == "test"
    assert tiers.meters_for("X/y") == frozenset({"M1", "M2"})


def test_capacity_tiers_rejects_non_list(tmp_path):
    p = tmp_path / "tiers.json"
    p.write_text(json.dumps({"version": "test", "tiers": {"X/y": "M1"}}))
    with pytest.raises(ValueError):
        config.load_capacity_tiers(p)
