"""Command-line runner: streams the decimal expansion of e to stdout."""

import argparse
import json
import logging
import sys
import time

from espigot.core.contracts.validators import export_snapshot
from espigot.core.math.errors import SpigotResourceExhausted
from espigot.engine.digit_engine import DigitEngine, SpigotConfig
from espigot.engine.preview import render_state_window
from espigot.engine.stream import DECIMAL_MARKER

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def _non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative number, got {number}")
    return number


def _growth_factor(value: str) -> float:
    number = _non_negative_float(value)
    if number < 1.0:
        raise argparse.ArgumentTypeError(f"expected a number >= 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="espigot",
        description="Stream the decimal digits of e, one digit at a time.",
        epilog="Example: espigot --digits 1000 --max-terms 100000",
    )
    parser.add_argument(
        "-n", "--digits",
        type=_positive_int,
        default=None,
        help="Number of digits to print (default: run until interrupted)",
    )
    parser.add_argument(
        "--max-passes",
        type=_positive_int,
        default=None,
        help="Maximum number of scale-and-carry passes before giving up",
    )
    parser.add_argument(
        "--max-terms",
        type=_positive_int,
        default=None,
        help="Maximum length of the state vector",
    )
    parser.add_argument(
        "--growth-factor",
        type=_growth_factor,
        default=2.0,
        help="Grow the state vector ahead to cover this many times the digits produced so far "
        "(default: 2.0; 1.0 grows one shortfall at a time)",
    )
    parser.add_argument(
        "--preview",
        nargs="?",
        const="text",
        default=None,
        choices=["text", "json"],
        help="After every digit print the engine state to stderr: "
        "the top of the state vector (text, default) or one JSON snapshot per line (json)",
    )
    parser.add_argument(
        "--delay",
        type=_non_negative_float,
        default=0.0,
        help="Delay in milliseconds between digits",
    )
    parser.add_argument(
        "--no-point",
        action="store_true",
        help="Omit the decimal point after the leading 2",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def run(args: argparse.Namespace, out=None, err=None) -> int:
    """Stream digits according to parsed arguments and return the exit code."""
    out = out or sys.stdout
    err = err or sys.stderr

    if args.delay and not args.preview:
        logger.warning("setting a delay without --preview only slows the computation down")

    engine = DigitEngine(SpigotConfig(
        max_terms=args.max_terms,
        max_passes=args.max_passes,
        growth_factor=args.growth_factor,
    ))
    marker = "" if args.no_point else DECIMAL_MARKER

    exit_code = 0
    start = time.perf_counter()
    try:
        while args.digits is None or engine.digits_emitted < args.digits:
            digit = engine.next_digit()
            if engine.digits_emitted == 2 and marker:
                out.write(marker)
            out.write(str(digit))
            out.flush()

            if args.preview == "json":
                data = export_snapshot(engine.snapshot())
                print(json.dumps(data, separators=(",", ":")), file=err)
            elif args.preview:
                print(render_state_window(engine.snapshot()), file=err)
            if args.delay:
                time.sleep(args.delay / 1000.0)
    except SpigotResourceExhausted as exc:
        logger.error("Stopped after %d digits: %s", engine.digits_emitted, exc)
        exit_code = 1
    except KeyboardInterrupt:
        logger.info("Interrupted after %d digits", engine.digits_emitted)

    elapsed_ms = (time.perf_counter() - start) * 1000.0
    out.write("\n")
    out.flush()
    print(f"performed {engine.passes} passes in {elapsed_ms:.1f}ms", file=err)
    return exit_code


def main(argv=None) -> int:
    """
    Parses command-line arguments and starts the digit stream.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - espigot - %(levelname)s - %(message)s",
    )

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
