#!/usr/bin/env python3
"""
Command line job:
- fetch people through one client or both
- print a summary for logs
- exit 1 when the cycle ended with an error
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from .orchestrator import RequestOrchestrator
from .transformations import format_elapsed


async def run_comparison(
    orchestrator: RequestOrchestrator, client: str = "both",
) -> dict:
    """
    Run one fetch cycle and return metrics as a dict
    (so FastAPI or other callers can inspect the result).
    """
    if client == "both":
        await orchestrator.fetch_both()
    else:
        await orchestrator.fetch_via(client)

    snap = orchestrator.snapshot()
    return {
        "url": orchestrator.request_url(),
        "client": client,
        "error": snap.error,
        "rows_fetched": {path: len(slot.records) for path, slot in snap.outcomes.items()},
        "elapsed_ms": {path: slot.elapsed_ms for path, slot in snap.outcomes.items()},
    }


def print_summary(metrics: dict) -> None:
    # key=value lines, picked up by the shell wrapper's log
    print(f"api_url={metrics['url']}")
    print(f"client={metrics['client']}")
    for path, rows in metrics["rows_fetched"].items():
        elapsed = format_elapsed(metrics["elapsed_ms"][path]) or "n/a"
        print(f"{path}_rows={rows} {path}_elapsed={elapsed}")
    if metrics["error"]:
        print(f"error={metrics['error']}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch random people with requests and urllib.")
    parser.add_argument("--client", choices=("both", "requests", "urllib"), default="both")
    parser.add_argument("--gender", choices=("male", "female"), default=None)
    parser.add_argument("--country", default=None, help="two-letter nationality code, e.g. FR")
    return parser.parse_args(argv)


async def _main(args: argparse.Namespace) -> dict:
    orchestrator = RequestOrchestrator()
    # set the filter directly: the job runs exactly one explicit cycle
    current = orchestrator.state.filter
    if args.gender:
        current = current.with_value("gender", args.gender)
    if args.country:
        current = current.with_value("country", args.country.upper())
    orchestrator.state.set_filter(current)
    return await run_comparison(orchestrator, args.client)


def main(argv: Optional[List[str]] = None) -> int:
    metrics = asyncio.run(_main(parse_args(argv)))
    print_summary(metrics)
    return 1 if metrics["error"] else 0  # non-zero exit code for cron / the .sh wrapper


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
