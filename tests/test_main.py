"""
Tests for the command line interface.
"""

import json

import pytest

from violation_audit.main import main


ARTIFACTS = {
    "ConsoleMessages": [
        {
            "source": "violation",
            "text": "Added non-passive event listener to a scroll-blocking 'touchstart' event.",
            "url": "https://example.com/app.js",
            "lineNumber": 10,
            "columnNumber": 2,
        },
    ],
}


@pytest.fixture
def artifacts(tmp_path):
    path = tmp_path / "artifacts.json"
    path.write_text(json.dumps(ARTIFACTS), encoding="utf-8")
    return path


@pytest.mark.asyncio
async def test_run_writes_markdown_report(tmp_path, artifacts):
    out_dir = tmp_path / "reports"

    code = await main(["--artifacts", str(artifacts), "--output-dir", str(out_dir), "--no-summary"])

    assert code == 0
    reports = list(out_dir.glob("audit_report_*.md"))
    assert len(reports) == 1
    assert "https://example.com/app.js:10:2" in reports[0].read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_fail_on_violation(tmp_path, artifacts):
    code = await main([
        "--artifacts", str(artifacts),
        "--output-dir", str(tmp_path),
        "--audit", "uses-passive-event-listeners",
        "--fail-on-violation",
        "--no-summary",
    ])

    assert code == 1


@pytest.mark.asyncio
async def test_passing_audit_with_fail_on_violation(tmp_path, artifacts):
    code = await main([
        "--artifacts", str(artifacts),
        "--output-dir", str(tmp_path),
        "--audit", "geolocation-on-start",
        "--fail-on-violation",
        "--sequential",
    ])

    assert code == 0


@pytest.mark.asyncio
async def test_output_file_format_from_extension(tmp_path, artifacts):
    output = tmp_path / "out" / "report.json"

    code = await main([
        "--artifacts", str(artifacts),
        "--output-dir", str(tmp_path / "reports"),
        "--output-file", str(output),
        "--no-summary",
    ])

    assert code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["outcomes"][0]["audit_id"] == "uses-passive-event-listeners"


@pytest.mark.asyncio
async def test_missing_artifacts(tmp_path):
    code = await main(["--artifacts", str(tmp_path / "nope.json"), "--output-dir", str(tmp_path)])
    assert code == 1


@pytest.mark.asyncio
async def test_unknown_audit(tmp_path, artifacts):
    code = await main(["--artifacts", str(artifacts), "--audit", "nope", "--output-dir", str(tmp_path)])
    assert code == 2


@pytest.mark.asyncio
async def test_list(capsys):
    code = await main(["--list"])

    assert code == 0
    assert "uses-passive-event-listeners" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_invalid_environment_config(tmp_path, artifacts, monkeypatch):
    monkeypatch.setenv("VIOLATION_AUDIT_TIMEOUT", "0")

    code = await main(["--artifacts", str(artifacts), "--output-dir", str(tmp_path), "--no-summary"])

    assert code == 1
    assert list(tmp_path.glob("audit_report_*")) == []
