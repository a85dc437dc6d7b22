"""
main.py — command-line entry point.

Reads reservation input from stdin and writes one result line per request,
followed by the number of seats still available:

    printf 'R1C1 R1C2\n3\n2\n' | python main.py --rows 3 --columns 11

The first input line lists already-reserved seats (it may be blank); every
following line is a seat-count request.

Start the HTTP API instead:
    python main.py --serve
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Optional, Sequence, TextIO

import uvicorn

from seatly.domain.constraints import parse_dimension
from seatly.domain.errors import ConfigError
from seatly.services.reservation_service import ReservationService
from seatly.utils.config import LOG_LEVELS, get_settings
from seatly.utils.logger import configure_logging, get_logger


HOST = "127.0.0.1"
PORT = 8000

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seatly",
        description="Allocate centered blocks of seats for each request read from stdin.",
    )
    parser.add_argument("-r", "--rows", help="Number of rows in the seating plan (default: 3)")
    parser.add_argument(
        "-c",
        "--columns",
        help="Number of columns in the seating plan (default: 11)",
    )
    parser.add_argument("-l", "--log-file", help="Append diagnostic logs to this file")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level: DEBUG, INFO, WARNING, ERROR or CRITICAL",
    )
    parser.add_argument(
        "--log-stack-traces",
        action="store_true",
        help="Include stack traces for skipped reservations and unavailable requests",
    )
    parser.add_argument("--serve", action="store_true", help="Start the HTTP API with uvicorn")
    parser.add_argument("--host", default=HOST, help=f"HTTP bind address (default: {HOST})")
    parser.add_argument("--port", type=int, default=PORT, help=f"HTTP port (default: {PORT})")
    return parser


def _serve(host: str, port: int) -> int:
    uvicorn.run("app:app", host=host, port=port, log_level="info")
    return 0


def run_cli(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
        rows = parse_dimension(args.rows, "rows") if args.rows is not None else None
        columns = (
            parse_dimension(args.columns, "columns") if args.columns is not None else None
        )
    except ConfigError as exc:
        print(str(exc), file=stderr)
        return 1

    settings = replace(
        settings,
        log_stack_traces=settings.log_stack_traces or args.log_stack_traces,
    )
    configure_logging(args.log_level, args.log_file)

    if args.serve:
        return _serve(args.host, args.port)

    lines = stdin.read().splitlines()
    if not lines:
        logger.warning("No input provided")
        return 0

    service = ReservationService(settings=settings)
    try:
        output = service.run_lines(lines, rows=rows, columns=columns)
    except ConfigError as exc:
        print(str(exc), file=stderr)
        return 1

    stdout.write("\n".join(output) + "\n")
    logger.info("Result | %s", " | ".join(output))
    return 0


def main() -> int:
    return run_cli()


if __name__ == "__main__":
    raise SystemExit(main())
