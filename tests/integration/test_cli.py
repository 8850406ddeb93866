from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from civicreach.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_cli_rank_writes_report_and_export(tmp_path: Path, dataset_path: Path, runner: CliRunner) -> None:
    output_path = tmp_path / "report.json"
    export_path = tmp_path / "export.csv"

    result = runner.invoke(
        app,
        [
            "rank",
            "--dataset", str(dataset_path),
            "--output", str(output_path),
            "--export", str(export_path),
            "--columns", "proximity",
            "--engagement", "High",
            "--sort", "original_score",
            "--direction", "asc",
            "--log-level", "ERROR",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Ranked 2 candidates" in result.output
    report = json.loads(output_path.read_text(encoding="utf-8"))
    assert [r["candidate_id"] for r in report["results"]] == ["9", "1"]
    assert export_path.read_text(encoding="utf-8").split("\n")[1].startswith("9,Maria Gonzalez,92807")


def test_cli_rank_reports_unknown_region(tmp_path: Path, dataset_payload, runner: CliRunner) -> None:
    dataset_payload["candidates"][0]["zipCode"] = "99999"
    dataset_path = tmp_path / "orphans.json"
    dataset_path.write_text(json.dumps(dataset_payload), encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "rank",
            "--dataset", str(dataset_path),
            "--output", str(tmp_path / "report.json"),
            "--log-level", "ERROR",
        ],
    )

    assert result.exit_code == 1
    assert not (tmp_path / "report.json").exists()


def test_cli_rank_degrades_orphans_with_config(tmp_path: Path, dataset_payload, runner: CliRunner) -> None:
    dataset_payload["candidates"][0]["zipCode"] = "99999"
    dataset_path = tmp_path / "orphans.json"
    dataset_path.write_text(json.dumps(dataset_payload), encoding="utf-8")
    config_path = tmp_path / "config.yaml"
    config_path.write_text("engine:\n  orphan_policy: degrade\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "rank",
            "--dataset", str(dataset_path),
            "--output", str(tmp_path / "report.json"),
            "--config", str(config_path),
            "--log-level", "ERROR",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Ranked 4 candidates" in result.output


def test_cli_rank_rejects_unknown_filter_value(tmp_path: Path, dataset_path: Path, runner: CliRunner) -> None:
    result = runner.invoke(
        app,
        [
            "rank",
            "--dataset", str(dataset_path),
            "--output", str(tmp_path / "report.json"),
            "--distance", "nearby",
        ],
    )

    assert result.exit_code != 0


def test_cli_region_prints_json(dataset_path: Path, runner: CliRunner) -> None:
    result = runner.invoke(
        app,
        ["region", "--dataset", str(dataset_path), "--zip-code", "92604", "--log-level", "ERROR"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["zip_code"] == "92604"
    assert payload["stats"]["total"] == 2
    assert payload["total_institutions"] == 12


def test_cli_overview_prints_json(dataset_path: Path, runner: CliRunner) -> None:
    result = runner.invoke(app, ["overview", "--dataset", str(dataset_path), "--log-level", "ERROR"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["regions"]["region_count"] == 3
    assert payload["regions"]["avg_community_engagement"] == pytest.approx(8.7)
    assert payload["impact"]["avg_improvement"] == pytest.approx(2.1)


def test_cli_rank_reports_malformed_dataset(tmp_path: Path, runner: CliRunner) -> None:
    dataset_path = tmp_path / "broken.json"
    dataset_path.write_text("{invalid", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "rank",
            "--dataset", str(dataset_path),
            "--output", str(tmp_path / "report.json"),
            "--log-level", "ERROR",
        ],
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Error:" in result.output
    assert not (tmp_path / "report.json").exists()


@pytest.mark.parametrize(
    "config_text",
    ["scoring:\n  behavioral_weight: 0.9\n", "scoring: [unclosed\n"],
)
def test_cli_reports_invalid_config(
    tmp_path: Path, dataset_path: Path, runner: CliRunner, config_text: str
) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(config_text, encoding="utf-8")

    result = runner.invoke(
        app,
        ["overview", "--dataset", str(dataset_path), "--config", str(config_path), "--log-level", "ERROR"],
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Invalid config" in result.output
