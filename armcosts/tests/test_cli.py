from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from armcosts import main as cli
from armcosts.errors import WhatIfCommandError
from armcosts.tests.mocks import FakeSession, item, items, rid

PIP = rid("Microsoft.Network/publicIPPrefixes/pip")
WIDGET = rid("Microsoft.Contoso/widgets/w1")

WHATIF = {
    "status": "Succeeded",
    "changes": [
        {"resourceId": PIP, "changeType": "Create", "before": None, "after": {"location": "eastus"}},
        {"resourceId": WIDGET, "changeType": "Create", "before": None, "after": {"location": "eastus"}},
    ],
}


@pytest.fixture
def session(monkeypatch):
    s = FakeSession(default=items(item("0.005", sku="Standard", product="Public IP Prefix", meter="Static")))
    real_client = cli.RetailPricesClient

    def _client(*args, **kwargs):
        kwargs["session"] = s
        return real_client(*args, **kwargs)

    monkeypatch.setattr(cli, "RetailPricesClient", _client)
    monkeypatch.setattr("armcosts.config.load_dotenv", lambda *a, **k: False)
    for name in ("ARMCOSTS_API_URL", "ARMCOSTS_CURRENCY", "ARMCOSTS_DISABLE_DETAILED_METRICS", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
    return s


@pytest.fixture
def whatif_file(tmp_path):
    p = tmp_path / "whatif.json"
    p.write_text(json.dumps(WHATIF))
    return str(p)


def test_text_report(session, whatif_file):
    result = CliRunner().invoke(cli.main, ["--whatif-json", whatif_file, "--no-color"])
    assert result.exit_code == 0, result.output
    assert "Estimations:" in result.output
    assert "+ pip" in result.output
    assert "-> Standard | Public IP Prefix | Static | 0.005 for 1 Hour" in result.output
    assert "w1 [Microsoft.Contoso/widgets]" in result.output
    assert "Total cost: 3.65 USD" in result.output
    assert len(session.calls) == 1


def test_disable_detailed_metrics_and_currency(session, whatif_file):
    result = CliRunner().invoke(
        cli.main,
        ["--whatif-json", whatif_file, "--no-color", "--disable-detailed-metrics", "--currency", "EUR"],
    )
    assert result.exit_code == 0, result.output
    assert "Aggregated metrics:" not in result.output
    assert "Total cost: 3.65 EUR" in result.output
    assert "currencyCode='EUR'" in session.calls[0]


def test_json_output_file(session, whatif_file, tmp_path):
    out_file = tmp_path / "out.json"
    result = CliRunner().invoke(
        cli.main,
        ["--whatif-json", whatif_file, "-o", "json", "--json-output", str(out_file), "--pretty"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(out_file.read_text())
    assert payload["totalCost"] == 3.65
    assert payload["delta"] == 3.65
    assert [r["name"] for r in payload["resources"]] == ["pip"]
    assert payload["unsupportedResources"][0]["name"] == "w1"


def test_table_output(session, whatif_file):
    result = CliRunner().invoke(cli.main, ["--whatif-json", whatif_file, "-o", "table", "--no-color"])
    assert result.exit_code == 0, result.output
    assert "TOTAL" in result.output


def test_api_url_override(session, whatif_file):
    result = CliRunner().invoke(cli.main, ["--whatif-json", whatif_file, "--api-url", "http://localhost:9000/prices/"])
    assert result.exit_code == 0, result.output
    assert session.calls[0].startswith("http://localhost:9000/prices?currencyCode='USD'")


def test_requires_an_input(session):
    result = CliRunner().invoke(cli.main, [])
    assert result.exit_code == 1
    assert "--whatif-json or --template" in result.output


def test_template_requires_one_scope(session, tmp_path):
    template = tmp_path / "main.json"
    template.write_text("{}")
    result = CliRunner().invoke(cli.main, ["--template", str(template)])
    assert result.exit_code == 1
    assert "--resource-group or --location" in result.output


def test_missing_file(session):
    result = CliRunner().invoke(cli.main, ["--whatif-json", "does-not-exist.json"])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_invalid_json(session, tmp_path):
    p = tmp_path / "bad.json"
    p.write_text("{nope")
    result = CliRunner().invoke(cli.main, ["--whatif-json", str(p)])
    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_template_runs_whatif(session, tmp_path, monkeypatch):
    template = tmp_path / "main.json"
    template.write_text("{}")
    seen = {}

    def _generate(options, binary=None):
        seen["options"] = options
        return json.dumps(WHATIF).encode("utf-8")

    monkeypatch.setattr(cli, "generate_whatif_json", _generate)
    result = CliRunner().invoke(cli.main, ["--template", str(template), "-g", "rg-test", "--no-color"])
    assert result.exit_code == 0, result.output
    assert seen["options"].resource_group == "rg-test"
    assert "+ pip" in result.output


def test_failed_whatif_exits_1(session, tmp_path, monkeypatch):
    template = tmp_path / "main.json"
    template.write_text("{}")

    def _generate(options, binary=None):
        raise WhatIfCommandError("az exited with status 1")

    monkeypatch.setattr(cli, "generate_whatif_json", _generate)
    result = CliRunner().invoke(cli.main, ["--template", str(template), "-l", "eastus"])
    assert result.exit_code == 1
    assert "az exited with status 1" in result.output


def test_malformed_state_exits_1(session, tmp_path):
    p = tmp_path / "bad-state.json"
    p.write_text(json.dumps({"changes": [{"resourceId": PIP, "changeType": "Create", "after": "eastus"}]}))
    result = CliRunner().invoke(cli.main, ["--whatif-json", str(p)])
    assert result.exit_code == 1
    assert "must be an object" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_unwritable_json_output_exits_1(session, whatif_file, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    result = CliRunner().invoke(
        cli.main,
        ["--whatif-json", whatif_file, "--json-output", str(blocker / "out.json")],
    )
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert isinstance(result.exception, SystemExit)
