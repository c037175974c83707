from __future__ import annotations

import json

from typer.testing import CliRunner

from cvlayout.main import app

runner = CliRunner()


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_plan_json(tmp_path, small_payload) -> None:
    resume = _write(tmp_path / "grace.json", small_payload)
    result = runner.invoke(app, ["plan", str(resume), "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["plan"] == {"interSectionSpacingMm": 40, "distributeSlack": True}
    assert data["pageBudgetMm"] == 207
    assert data["warnings"] == []


def test_plan_text_with_template_and_budget(tmp_path, full_payload) -> None:
    resume = _write(tmp_path / "ada.json", full_payload)
    result = runner.invoke(app, ["plan", str(resume), "--budget", "400"])
    assert result.exit_code == 0
    assert "Total: 248.0mm of 400.0mm" in result.stdout
    assert "Distribute slack: no" in result.stdout

    result = runner.invoke(app, ["plan", str(resume), "--template", "template-3"])
    assert "of 197.0mm" in result.stdout
    assert "Spacing: 10mm" in result.stdout
    assert "WARNING: Content exceeds the page budget" in result.stdout


def test_plan_missing_file(tmp_path) -> None:
    result = runner.invoke(app, ["plan", str(tmp_path / "missing.json")])
    assert result.exit_code == 1


def test_build_directory(tmp_path, small_payload, full_payload) -> None:
    inbox = tmp_path / "resumes"
    inbox.mkdir()
    _write(inbox / "grace.json", small_payload)
    _write(inbox / "ada.json", full_payload)
    out_dir = tmp_path / "out"

    result = runner.invoke(app, ["build", str(inbox), "--out", str(out_dir)])
    assert result.exit_code == 0
    assert "READY: 1" in result.stdout
    assert "TIGHT: ada-lovelace" in result.stdout
    assert (out_dir / "grace-hopper" / "a4.pdf").exists()


def test_templates_lists_budgets() -> None:
    result = runner.invoke(app, ["templates"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert any(line.startswith("template-3") and "budget 197mm" in line for line in lines)
    assert any(line.startswith("template-1") and "budget 207mm" in line for line in lines)
