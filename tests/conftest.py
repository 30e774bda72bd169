"""
Pytest configuration and fixtures.

Использование:
    pytest tests/ -v
"""

import sys
from pathlib import Path

import pytest

# Добавить корень проекта в path
sys.path.insert(0, str(Path(__file__).parent.parent))

from violation_audit.config import AuditConfig
from violation_audit.core.models import DiagnosticRecord, DiagnosticSnapshot, Script
from violation_audit.core.source_maps import TableSourceMap


PASSIVE_WARNING = (
    "Added non-passive event listener to a scroll-blocking 'touchstart' event. "
    "Consider marking event handler as 'passive' to make the page more responsive."
)


# ═══════════════════════════════════════════════════════
# DIAGNOSTIC RECORDS
# ═══════════════════════════════════════════════════════

@pytest.fixture
def passive_record():
    """Предупреждение о non-passive listener."""
    return DiagnosticRecord(message=PASSIVE_WARNING, url="a.js", line=10, column=0, source="violation")


@pytest.fixture
def unrelated_record():
    return DiagnosticRecord(message="Some unrelated warning", url="a.js", line=5, column=0)


@pytest.fixture
def bundle_snapshot():
    """Снимок со скриптом-бандлом и source map для него."""
    records = (
        DiagnosticRecord(message=PASSIVE_WARNING, script_id="1", line=0, column=120, source="violation"),
        DiagnosticRecord(message="Some unrelated warning", url="b.js", line=1, column=1),
        DiagnosticRecord(message=PASSIVE_WARNING, url="https://cdn.example.com/vendor.js", line=3, column=7),
    )
    scripts = {
        "1": Script(script_id="1", url="https://example.com/bundle.js"),
    }
    source_maps = {
        "1": TableSourceMap(
            sources=["src/app.js", "src/scroll.js"],
            segments=[[0, 0, 0, 1, 0], [0, 100, 1, 41, 4]],
        ),
    }
    return DiagnosticSnapshot(records=records, scripts=scripts, source_maps=source_maps)


# ═══════════════════════════════════════════════════════
# CONFIGURATION
# ═══════════════════════════════════════════════════════

@pytest.fixture
def config(tmp_path):
    """Конфигурация с отчётами во временной директории."""
    return AuditConfig(
        artifacts_path=None,
        report_output_dir=tmp_path / "reports",
        default_timeout_seconds=5.0,
        max_parallel_audits=2,
    )

