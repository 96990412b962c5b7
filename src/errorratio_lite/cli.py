"""errorratio-lite CLI entry point.

Usage: errorratio-lite [command]
       errorratio-lite INPUT OUTPUT    (same as: analyze INPUT OUTPUT)
"""
import argparse
import logging
import sys

log = logging.getLogger("errorratio_lite")

COMMANDS = ("analyze", "generate")


def _add_analyze_parser(subparsers: argparse._SubParsersAction) -> None:
    from errorratio_lite.engine.config import DEFAULT_BATCH_SIZE, DEFAULT_BUFFER_SIZE
    from errorratio_lite.store.compact_array import DEFAULT_GROWTH
    from errorratio_lite.store.user_table import LAYOUTS

    p = subparsers.add_parser(
        "analyze",
        help="Compute per-(user, endpoint) error ratios for an access log.",
    )
    p.add_argument("input", help="Access log to analyze")
    p.add_argument("output", help="Report file to write (tab separated)")
    p.add_argument(
        "--layout", choices=LAYOUTS, default="sparse",
        help="Counter layout: 'sparse' reports observed pairs only, "
             "'dense' reports every user x endpoint pair (default: sparse)",
    )
    p.add_argument(
        "--batch-size", type=int, default=DEFAULT_BATCH_SIZE,
        help=f"Report rows per write (default: {DEFAULT_BATCH_SIZE})",
    )
    p.add_argument(
        "--growth", type=float, default=DEFAULT_GROWTH,
        help=f"Growth multiplier for dense counter arrays (default: {DEFAULT_GROWTH})",
    )
    p.add_argument(
        "--buffer-size", type=int, default=DEFAULT_BUFFER_SIZE,
        help=f"Read buffer in bytes (default: {DEFAULT_BUFFER_SIZE})",
    )
    p.add_argument(
        "--progress-interval", type=float, default=1.0,
        help="Percent of progress between progress log lines (default: 1.0)",
    )
    p.add_argument(
        "--precision", type=int, default=7,
        help="Significant digits in the error_ratio column (default: 7)",
    )


def _add_generate_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "generate",
        help="Write a synthetic access log for testing.",
    )
    p.add_argument("output", help="Log file to write")
    p.add_argument(
        "--users", type=int, default=1000,
        help="Number of distinct users (default: 1000)",
    )
    p.add_argument(
        "--endpoints", type=int, default=300,
        help="Number of distinct endpoints (default: 300)",
    )
    p.add_argument(
        "--lines", type=int, default=100_000,
        help="Total lines to generate (default: 100000)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for reproducible files (default: 42)",
    )


def _run_analyze(args: argparse.Namespace) -> None:
    from errorratio_lite.engine.analyzer import analyze
    from errorratio_lite.engine.config import AnalyzerConfig
    from errorratio_lite.engine.summary import format_summary

    config = AnalyzerConfig(
        buffer_size=args.buffer_size,
        batch_size=args.batch_size,
        growth=args.growth,
        layout=args.layout,
        progress_interval=args.progress_interval,
        ratio_precision=args.precision,
    )
    result = analyze(args.input, args.output, config)
    print(format_summary(result))


def _run_generate(args: argparse.Namespace) -> None:
    from errorratio_lite.generator.log_generator import LogGenerator

    gen = LogGenerator(
        num_users=args.users,
        num_endpoints=args.endpoints,
        total_lines=args.lines,
        seed=args.seed,
    )
    gen.write(args.output)


def _default_to_analyze(argv: list[str]) -> list[str]:
    """Insert "analyze" when the first positional argument is not a command."""
    for i, arg in enumerate(argv):
        if arg.startswith("-"):
            continue
        if arg not in COMMANDS:
            return [*argv[:i], "analyze", *argv[i:]]
        break
    return argv


def _configure_logging(verbosity: int) -> None:
    level = logging.INFO
    if verbosity > 0:
        level = logging.DEBUG
    elif verbosity < 0:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: list[str] | None = None) -> None:
    from errorratio_lite.domain.errors import AnalysisError

    parser = argparse.ArgumentParser(
        prog="errorratio-lite",
        description="Per-user, per-endpoint error ratios for huge access logs.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", dest="verbosity", action="store_const", const=1, default=0,
        help="Log debug output.",
    )
    verbosity.add_argument(
        "-q", "--quiet", dest="verbosity", action="store_const", const=-1,
        help="Only log warnings and errors.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_analyze_parser(subparsers)
    _add_generate_parser(subparsers)

    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(_default_to_analyze(argv))
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbosity)

    try:
        if args.command == "analyze":
            _run_analyze(args)
        elif args.command == "generate":
            _run_generate(args)
    except (AnalysisError, OSError, ValueError) as exc:
        log.error("%s failed: %s", args.command, exc)
        sys.exit(1)
