"""
Report generator for audit outcomes.

Generates:
- Markdown reports for human reading
- JSON reports for machine processing
- Console summary (rich)
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable

from ..core.models import AuditDefinition, AuditOutcome, AuditReport, ItemType, ViolationMatch
from .strings import audit_title, display_value, get_string


class ReportGenerator:
    """Генератор отчётов аудита."""

    def __init__(
        self,
        output_dir: Optional[Path] = None,
        definitions: Optional[Sequence[AuditDefinition]] = None,
    ):
        """
        Args:
            output_dir: Директория для отчётов (по умолчанию audit_reports/)
            definitions: Определения аудитов (для заголовков и описаний)
        """
        self.output_dir = Path(output_dir) if output_dir else Path("audit_reports")
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.definitions: Dict[str, AuditDefinition] = {d.id: d for d in definitions or []}

    def create_report(
        self,
        outcomes: List[AuditOutcome],
        duration_seconds: float,
        artifacts_path: Optional[str] = None,
    ) -> AuditReport:
        """Создать объект AuditReport."""
        return AuditReport(
            timestamp=datetime.now(),
            outcomes=outcomes,
            duration_seconds=duration_seconds,
            artifacts_path=artifacts_path,
        )

    def generate_report(
        self,
        outcomes: List[AuditOutcome],
        duration_seconds: float,
        format: str = "markdown",
        artifacts_path: Optional[str] = None,
    ) -> str:
        """
        Генерация отчёта.

        Args:
            outcomes: Результаты аудитов
            duration_seconds: Длительность аудита
            format: Формат отчёта ("markdown" или "json")
            artifacts_path: Файл артефактов, по которому шёл аудит

        Returns:
            Путь к сгенерированному файлу
        """
        audit_report = self.create_report(outcomes, duration_seconds, artifacts_path)

        if format == "json":
            return self.generate_json_report(audit_report)
        return self.generate_markdown_report(audit_report)

    def _title(self, outcome: AuditOutcome) -> str:
        definition = self.definitions.get(outcome.audit_id)
        if definition is None:
            return outcome.audit_id
        return audit_title(definition, outcome.passed)

    def _description(self, outcome: AuditOutcome) -> Optional[str]:
        definition = self.definitions.get(outcome.audit_id)
        if definition is None or "description" not in definition.ui_strings:
            return None
        return get_string(definition, "description")

    @staticmethod
    def _cell(match: ViolationMatch, key: str, item_type: ItemType) -> str:
        value = getattr(match, key, None)
        if item_type is ItemType.SOURCE_LOCATION and value is not None:
            return f"`{value.display()}`"
        return "" if value is None else str(value)

    def generate_markdown_report(self, audit_report: AuditReport) -> str:
        """
        Генерация Markdown отчёта.

        Returns:
            Путь к файлу отчёта
        """
        timestamp_str = audit_report.timestamp.strftime("%Y%m%d_%H%M%S")
        filepath = self.output_dir / f"audit_report_{timestamp_str}.md"

        lines = []

        # Header
        lines.append("# Violation Audit Report")
        lines.append("")
        lines.append(f"**Date:** {audit_report.timestamp.strftime('%Y-%m-%d %H:%M:%S')}")
        if audit_report.artifacts_path:
            lines.append(f"**Artifacts:** `{audit_report.artifacts_path}`")
        lines.append("")

        # Summary
        failed = audit_report.get_failed()
        lines.append("## Summary")
        lines.append("")
        lines.append(f"- **Audits:** {len(audit_report.outcomes)}")
        lines.append(f"- ✅ **Passed:** {len(audit_report.outcomes) - len(failed)}")
        lines.append(f"- ❌ **Failed:** {len(failed)}")
        lines.append(f"- **Violations:** {audit_report.total_violations}")
        lines.append("")

        # Audits
        lines.append("## Audits")
        lines.append("")
        for outcome in audit_report.outcomes:
            status = "✅" if outcome.passed else "❌"
            lines.append(f"### {status} {self._title(outcome)}")
            lines.append("")
            lines.append(f"`{outcome.audit_id}`")
            lines.append("")

            if outcome.error is not None:
                lines.append(f"**Error:** {outcome.error}")
                lines.append("")
                continue

            lines.append(f"**Score:** {outcome.result.score}")
            if outcome.violation_count:
                lines.append(f"**Result:** {display_value(outcome.violation_count)}")
            lines.append("")

            description = self._description(outcome)
            if description:
                lines.append(description)
                lines.append("")

            table = outcome.result.details
            if table.rows:
                lines.append("| " + " | ".join(h.text for h in table.headings) + " |")
                lines.append("|" + "---|" * len(table.headings))
                for row in table.rows:
                    cells = [self._cell(row, h.key, h.item_type) for h in table.headings]
                    lines.append("| " + " | ".join(cells) + " |")
                lines.append("")

        # Footer
        lines.append("---")
        lines.append(f"*Report generated in {audit_report.duration_seconds:.2f} seconds*")

        with open(filepath, "w", encoding="utf-8") as f:
            f.write("\n".join(lines))

        return str(filepath)

    def generate_json_report(self, audit_report: AuditReport) -> str:
        """
        Генерация JSON отчёта.

        Returns:
            Путь к файлу отчёта
        """
        timestamp_str = audit_report.timestamp.strftime("%Y%m%d_%H%M%S")
        filepath = self.output_dir / f"audit_report_{timestamp_str}.json"

        report_dict: Dict[str, Any] = audit_report.to_dict()
        for outcome, entry in zip(audit_report.outcomes, report_dict["outcomes"]):
            entry["title"] = self._title(outcome)
            description = self._description(outcome)
            if description:
                entry["description"] = description

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(report_dict, f, indent=2, ensure_ascii=False)

        return str(filepath)

    def print_summary(self, audit_report: AuditReport, console: Optional[Console] = None):
        """Вывести краткую сводку в консоль."""
        console = console or Console()

        table = RichTable(title="Audit Summary")
        table.add_column("Audit")
        table.add_column("Status")
        table.add_column("Score", justify="right")
        table.add_column("Violations", justify="right")

        for outcome in audit_report.outcomes:
            if outcome.error is not None:
                status, score = "[yellow]ERROR[/]", "-"
            elif outcome.passed:
                status, score = "[green]PASSED[/]", str(outcome.result.score)
            else:
                status, score = "[red]FAILED[/]", str(outcome.result.score)
            table.add_row(outcome.audit_id, status, score, str(outcome.violation_count))

        console.print(table)
        console.print(
            f"Total violations: {audit_report.total_violations} | "
            f"Duration: {audit_report.duration_seconds:.2f}s"
        )

        for outcome in audit_report.get_failed():
            if outcome.result is None:
                continue
            for row in outcome.result.details.rows:
                console.print(f"  [dim]{outcome.audit_id}[/] {escape(row.source.display())}")

