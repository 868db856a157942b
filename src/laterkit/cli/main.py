# src/laterkit/cli/main.py

"""
CLI entrypoint.

Schedules one task through later(), optionally races it with a manual
start/cancel/reject after a delay, then prints the final state and outcome:

    laterkit timeout --duration 1 --value done --start-after 0.1
    laterkit idle --duration 0.5 --cancel-after 0.1
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from ..config import get_settings
from ..errors import LaterError
from ..logging_setup import setup_logging
from ..tasks.later_api import LaterMethod, LaterSpec, later
from ..tasks.later_task import LaterTask

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="laterkit", description="Run one deferred task and report its outcome.")
    parser.add_argument("method", help="one of: " + ", ".join(m.value for m in LaterMethod))
    parser.add_argument("--duration", type=float, default=None, help="seconds (timeout/idle)")
    parser.add_argument("--value", default="done", help="value returned by the task callback")
    race = parser.add_mutually_exclusive_group()
    race.add_argument("--start-after", type=float, metavar="S", help="start the task manually after S seconds")
    race.add_argument("--cancel-after", type=float, metavar="S", help="cancel the task after S seconds")
    race.add_argument("--reject-after", type=float, metavar="S", help="reject the task after S seconds")
    return parser


async def _run(spec: LaterSpec, args: argparse.Namespace) -> tuple[LaterTask[str], str]:
    loop = asyncio.get_running_loop()
    started_at = loop.time()

    def _work() -> str:
        logger.info("callback ran after %.3fs", loop.time() - started_at)
        return args.value

    task: LaterTask[str] = later(spec, _work)

    if args.start_after is not None:
        loop.call_later(args.start_after, task.start)
    elif args.cancel_after is not None:
        loop.call_later(args.cancel_after, task.cancel, "cancelled")
    elif args.reject_after is not None:
        loop.call_later(args.reject_after, task.reject, "rejected by caller")

    try:
        outcome = f"result={await task!r}"
    except Exception as exc:
        outcome = f"error={exc}"
    return task, outcome


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    args = _build_parser().parse_args(argv)

    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    raw_spec: str | dict[str, object] = args.method
    if args.duration is not None:
        raw_spec = {"type": args.method, "duration": args.duration}

    try:
        spec = LaterSpec.parse(raw_spec)
    except LaterError as exc:
        print(f"laterkit: {exc}", file=sys.stderr)
        return 2

    logger.debug("Running %s", spec)
    task, outcome = asyncio.run(_run(spec, args))
    print(f"state={task.state.value} {outcome}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
