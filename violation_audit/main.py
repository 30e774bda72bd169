"""
CLI interface for violation audits.

Usage:
    python -m violation_audit.main --artifacts artifacts.json
    python -m violation_audit.main --artifacts artifacts.json --audit uses-passive-event-listeners
    python -m violation_audit.main --artifacts artifacts.json --output-format json
    python -m violation_audit.main --list
"""

import argparse
import asyncio
import logging
import shutil
import sys
import time
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from violation_audit.artifacts import load_snapshot
from violation_audit.audits.registry import get_audit, list_audits
from violation_audit.config import AuditConfig
from violation_audit.core.errors import ArtifactMissingError, UnknownAuditError
from violation_audit.orchestrator import AuditOrchestrator
from violation_audit.reports.generator import ReportGenerator


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Настроить логирование."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def parse_args(argv: Optional[List[str]] = None):
    """Парсинг аргументов командной строки."""
    parser = argparse.ArgumentParser(
        description='Violation Audit Tool',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run all audits
  python -m violation_audit.main --artifacts artifacts.json

  # Run one audit
  python -m violation_audit.main --artifacts artifacts.json --audit uses-passive-event-listeners

  # Generate JSON report
  python -m violation_audit.main --artifacts artifacts.json --output-format json

  # Fail CI when violations are found
  python -m violation_audit.main --artifacts artifacts.json --fail-on-violation
        """
    )

    parser.add_argument(
        '--artifacts',
        type=str,
        help='Artifacts JSON file (default: $VIOLATION_AUDIT_ARTIFACTS)'
    )
    parser.add_argument(
        '--audit',
        action='append',
        dest='audits',
        metavar='ID',
        help='Audit id to run (repeatable, default: all)'
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='List available audits and exit'
    )

    # Output options
    parser.add_argument(
        '--output-format',
        choices=['markdown', 'json'],
        default='markdown',
        help='Output format (default: markdown)'
    )
    parser.add_argument(
        '--output-file',
        type=str,
        help='Output file path (default: auto-generated in audit_reports/)'
    )
    parser.add_argument(
        '--output-dir',
        type=str,
        help='Output directory (default: audit_reports/)'
    )

    # Other options
    parser.add_argument(
        '--sequential',
        action='store_true',
        help='Run audits one by one instead of in parallel'
    )
    parser.add_argument(
        '--violation-source-only',
        action='store_true',
        help='Only consider console entries with source "violation"'
    )
    parser.add_argument(
        '--fail-on-violation',
        action='store_true',
        help='Exit with code 1 when any audit fails'
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Verbose output'
    )
    parser.add_argument(
        '--no-summary',
        action='store_true',
        help='Skip printing summary to console'
    )

    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция. Возвращает код выхода."""
    env_path = Path.cwd() / '.env'
    if env_path.exists():
        load_dotenv(env_path)

    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.list:
        for definition in list_audits():
            print(f"{definition.id}\t{definition.ui_strings.get('title', '')}")
        return 0

    try:
        config = AuditConfig()
    except ValueError as e:
        logger.error(f"❌ Invalid configuration: {e}")
        return 1

    if args.artifacts:
        config.artifacts_path = Path(args.artifacts)
    if args.output_dir:
        config.report_output_dir = Path(args.output_dir)
    if args.audits:
        config.audit_ids = list(args.audits)
    if args.violation_source_only:
        config.violation_source_only = True
    if args.sequential:
        config.parallel_execution = False

    try:
        definitions = [get_audit(a) for a in config.audit_ids] if config.audit_ids else list_audits()
    except UnknownAuditError as e:
        logger.error(f"❌ {e}")
        return 2

    if config.artifacts_path is None:
        logger.error("❌ No artifacts file given (use --artifacts or VIOLATION_AUDIT_ARTIFACTS)")
        return 1

    try:
        snapshot = load_snapshot(config.artifacts_path)
    except ArtifactMissingError as e:
        logger.error(f"❌ {e}")
        return 1

    logger.info(f"Running {len(definitions)} audits over {config.artifacts_path}")
    start_time = time.time()

    orchestrator = AuditOrchestrator(config)
    outcomes = await orchestrator.run(definitions, snapshot)

    duration = time.time() - start_time

    generator = ReportGenerator(output_dir=config.report_output_dir, definitions=definitions)

    if args.output_file:
        output_path = Path(args.output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        # Формат по расширению файла
        if args.output_format == 'markdown' and output_path.suffix == '.json':
            format = 'json'
        elif args.output_format == 'json' and output_path.suffix == '.md':
            format = 'markdown'
        else:
            format = args.output_format

        temp_path = generator.generate_report(
            outcomes, duration, format=format, artifacts_path=str(config.artifacts_path)
        )
        shutil.move(temp_path, output_path)
        report_path = str(output_path)
    else:
        report_path = generator.generate_report(
            outcomes, duration, format=args.output_format, artifacts_path=str(config.artifacts_path)
        )

    logger.info("✅ Audit complete!")
    logger.info(f"   Duration: {duration:.2f}s")
    logger.info(f"   Report: {report_path}")

    audit_report = generator.create_report(outcomes, duration, str(config.artifacts_path))
    if not args.no_summary:
        generator.print_summary(audit_report)

    errored = audit_report.get_errored()
    if errored:
        logger.error(f"❌ {len(errored)} audits could not be completed")
        return 1

    failed = audit_report.get_failed()
    if failed and args.fail_on_violation:
        logger.error(f"❌ {len(failed)} audits failed")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
