"""Console entry point."""

import asyncio
import sys


def run():
    from violation_audit.main import main

    sys.exit(asyncio.run(main()))
