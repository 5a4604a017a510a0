"""problem-matcher — extract problem records from linter and compiler output."""

import logging
import sys
from argparse import ArgumentParser

from problem_matcher.config import Config
from problem_matcher.engine import match
from problem_matcher.errors import ProblemMatcherError
from problem_matcher.formatter import FORMATS, get_formatter
from problem_matcher.loader import find_matcher, load_matchers

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="problem-matcher",
        description="Extract problem records from tool output using matcher definitions.",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        help="Tool output file(s) to scan; '-' or nothing reads stdin",
    )
    parser.add_argument(
        "--matcher",
        action="append",
        required=True,
        help="Matcher definition file (.json, .yaml, .yml); may be repeated",
    )
    parser.add_argument(
        "--owner",
        help="Only run the matcher with this owner",
    )
    parser.add_argument(
        "--output",
        choices=list(FORMATS),
        help="Output format (default: text, or $PROBLEM_MATCHER_OUTPUT)",
    )
    parser.add_argument(
        "--fail-on-error",
        action="store_true",
        default=None,
        help="Exit with status 1 if any record has severity 'error'",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: WARNING, or $PROBLEM_MATCHER_LOG_LEVEL)",
    )
    return parser


def read_inputs(paths: list[str]) -> list[str]:
    """Return the contents of each input, reading stdin for '-' or no paths."""
    if not paths:
        paths = ["-"]

    contents = []
    for path in paths:
        if path == "-":
            contents.append(sys.stdin.read())
            continue
        with open(path, "r", encoding="utf-8") as f:
            contents.append(f.read())
    return contents


def run(args, config: Config) -> int:
    """Load matchers, scan every input, print records. Returns the exit code."""
    formatter = get_formatter(args.output or config.output_format)
    fail_on_error = config.fail_on_error if args.fail_on_error is None else args.fail_on_error

    matchers = load_matchers(args.matcher)
    if args.owner:
        matchers = [find_matcher(matchers, args.owner)]

    contents = read_inputs(args.inputs)

    error_count = 0
    total = 0
    for matcher in matchers:
        for text in contents:
            for record in match(matcher, text):
                total += 1
                if record.get("severity", "").lower() == "error":
                    error_count += 1
                print(formatter(record, matcher.owner))

    logger.info("Found %d record(s), %d with severity error", total, error_count)
    if fail_on_error and error_count:
        return 1
    return 0


def main() -> int:
    args = build_parser().parse_args()
    config = Config.from_env()

    try:
        logging.basicConfig(
            level=(args.log_level or config.log_level).upper(),
            format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
            stream=sys.stderr,
        )
        return run(args, config)
    except (ProblemMatcherError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
