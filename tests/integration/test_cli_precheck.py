from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from jobprecheck.cli import app
from jobprecheck.core import run_eligibility_precheck
from jobprecheck.schemas import Rule


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def write_json(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def test_cli_check_writes_report(tmp_path: Path, runner: CliRunner) -> None:
    jd_path = tmp_path / "jd.txt"
    profile_path = tmp_path / "profile.json"
    output_path = tmp_path / "out" / "report.json"
    audit_path = tmp_path / "audit.jsonl"

    jd_path.write_text(
        "Software Engineer Co-op\n"
        "Must be a Canadian citizen or permanent resident. No sponsorship available.\n",
        encoding="utf-8",
    )
    write_json(
        profile_path,
        {
            "workStatus": "temporary_resident",
            "needsSponsorship": "true",
            "countryOfResidence": "Canada",
            "regionCode": "CA",
            "trackCode": "COOP",
        },
    )

    result = runner.invoke(
        app,
        [
            "check",
            "--jd",
            str(jd_path),
            "--profile",
            str(profile_path),
            "--output",
            str(output_path),
            "--audit-log",
            str(audit_path),
            "--log-level",
            "WARNING",
        ],
    )

    assert result.exit_code == 0, result.output
    rendered = json.loads(output_path.read_text(encoding="utf-8"))
    assert rendered["metadata"]["pack"] == "CA_COOP"
    assert rendered["metadata"]["source"] == "job_card"
    assert rendered["result"]["status"] == "conflict"
    assert [rule["ruleId"] for rule in rendered["result"]["triggeredRules"]] == [
        "citizen_pr_requirement",
        "no_sponsorship",
    ]
    assert audit_path.exists()


def test_cli_check_without_profile_is_recommended(tmp_path: Path, runner: CliRunner) -> None:
    jd_path = tmp_path / "jd.txt"
    output_path = tmp_path / "report.json"
    jd_path.write_text("Candidates must be legally authorized to work in Canada.", encoding="utf-8")

    result = runner.invoke(
        app,
        ["check", "--jd", str(jd_path), "--source", "jd_snapshot", "--output", str(output_path)],
    )

    assert result.exit_code == 0, result.output
    rendered = json.loads(output_path.read_text(encoding="utf-8"))
    assert rendered["metadata"]["pack"] == "CA_NEW_GRAD"
    assert rendered["metadata"]["source"] == "jd_snapshot"
    assert rendered["result"]["status"] == "recommended"


def test_cli_check_rejects_unknown_source(tmp_path: Path, runner: CliRunner) -> None:
    jd_path = tmp_path / "jd.txt"
    jd_path.write_text("No sponsorship.", encoding="utf-8")

    result = runner.invoke(app, ["check", "--jd", str(jd_path), "--source", "email"])

    assert result.exit_code != 0


def test_cli_packs_lists_config_packs(tmp_path: Path, runner: CliRunner) -> None:
    packs_path = tmp_path / "packs.yaml"
    config_path = tmp_path / "config.yaml"
    packs_path.write_text(
        "packs:\n"
        "  - region_code: US\n"
        "    track_code: NEW_GRAD\n"
        "    label: United States - New Graduate\n"
        "    work_auth_rules: []\n",
        encoding="utf-8",
    )
    config_path.write_text(f"packs:\n  path: {packs_path}\n", encoding="utf-8")

    result = runner.invoke(app, ["packs", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert "CA_COOP" in result.output
    assert "CA_NEW_GRAD\tCanada — New Graduate (default)" in result.output
    assert "US_NEW_GRAD" in result.output


def test_rules_still_load_after_cli_run(tmp_path: Path, runner: CliRunner) -> None:
    jd_path = tmp_path / "jd.txt"
    jd_path.write_text("No sponsorship available.", encoding="utf-8")

    result = runner.invoke(app, ["check", "--jd", str(jd_path), "--region", "VN", "--track", "COOP"])
    assert result.exit_code == 0, result.output

    rule = Rule(id="broken", label="Broken", trigger_phrases=["no sponsorship"], condition="visa == h1b")
    precheck = run_eligibility_precheck("No sponsorship available.", None, [rule])

    assert rule.parsed_condition is None
    assert precheck.status == "recommended"
