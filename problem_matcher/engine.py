"""Match engine: turns raw tool output into problem records.

A matcher is either a single pattern applied to every line, or a list of
context patterns followed by a final ``loop`` pattern:

  1. Single mode: each line is matched on its own.
  2. Loop mode: one line seeds the context, then the loop pattern consumes
     the following lines until one does not match. That line seeds the next
     context.

Configuration problems raise MatcherError. A line that simply does not
match is never an error.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from problem_matcher.errors import MatcherError
from problem_matcher.models import Matcher, Pattern

logger = logging.getLogger(__name__)

UNSUPPORTED_CONFIGURATION = (
    "Unsupported pattern configuration. We currently support single pattern "
    "and multi-line loop pattern configurations"
)

Record = dict[str, str]

# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _attr(matcher: Any, name: str) -> Any:
    if isinstance(matcher, Mapping):
        return matcher.get(name)
    return getattr(matcher, name, None)


def validate_matcher(matcher: Matcher | Mapping[str, Any] | None, input: str | None) -> None:
    """Raise MatcherError if the matcher or input is unusable.

    Accepts a Matcher or its plain mapping form. Checks run in a fixed
    order so the first problem found is the one reported.
    """
    if matcher is None:
        raise MatcherError("No matcher provided")
    if not _attr(matcher, "owner"):
        raise MatcherError("No matcher.owner provided")

    pattern = _attr(matcher, "pattern")
    if pattern is None:
        raise MatcherError("No matcher.pattern provided")
    if not isinstance(pattern, (list, tuple)) or len(pattern) < 1:
        raise MatcherError("matcher.pattern must be an array with at least one value")

    if input is None:
        raise MatcherError("No input provided")


def _compile(pattern: Pattern) -> re.Pattern:
    try:
        return re.compile(pattern.regexp)
    except re.error as exc:
        raise MatcherError(f"Invalid regexp {pattern.regexp!r}: {exc}") from exc


# ---------------------------------------------------------------------------
# Field projection
# ---------------------------------------------------------------------------


def _is_index(group: Any) -> bool:
    return isinstance(group, int) and not isinstance(group, bool)


def project(
    pattern: Pattern,
    line: str,
    matcher: Matcher,
    regex: re.Pattern | None = None,
) -> Record | None:
    """Project one line through a pattern's group mapping.

    Returns None when the regexp does not match. Raises MatcherError when
    it matches but a field points at group 0 or at a group with no text.
    """
    if regex is None:
        regex = _compile(pattern)

    found = regex.search(line)
    if not found:
        return None

    result: Record = {}
    for name, group in pattern.groups:
        if _is_index(group) and group == 0:
            raise MatcherError(
                "Group 0 is not a valid capture group (it contains the entire matched string)"
            )

        text = None
        if _is_index(group) and 0 < group <= regex.groups:
            text = found.group(group)
        if not text:
            raise MatcherError(
                f"Invalid capture group provided. Group {group} ({name}) does not exist in regexp"
            )

        result[name] = text.strip()

    if not result.get("severity"):
        result.pop("severity", None)
        if matcher.severity is not None:
            result["severity"] = matcher.severity

    return result


# ---------------------------------------------------------------------------
# Matching strategies
# ---------------------------------------------------------------------------


def single_match(matcher: Matcher, input: str) -> list[Record]:
    """Apply the lone pattern to every line independently."""
    pattern = matcher.pattern[0]
    regex = _compile(pattern)

    records = []
    for line in input.split("\n"):
        record = project(pattern, line, matcher, regex)
        if record is None:
            continue
        records.append(record)
    return records


def loop_match(matcher: Matcher, input: str) -> list[Record]:
    """Seed context from one line, then run the loop pattern over what follows.

    Every context pattern is matched against the same seed line. Loop fields
    override context fields, and a loop line without a severity takes the
    matcher default (or none) rather than the context's. Blank lines inside a
    loop are skipped. The first non-matching line ends the loop and
    stays unread, so it seeds the next context.
    """
    compiled = [(p, _compile(p)) for p in matcher.pattern]
    lines = input.split("\n")
    cursor = 0
    records = []

    while cursor < len(lines):
        context: Record = {}
        line = lines[cursor]
        cursor += 1

        for pattern, regex in compiled:
            if not pattern.loop:
                context.update(project(pattern, line, matcher, regex) or {})
                continue

            while cursor < len(lines):
                line = lines[cursor]
                if line == "":
                    cursor += 1
                    continue

                record = project(pattern, line, matcher, regex)
                if record is None:
                    break

                cursor += 1
                merged = {**context, **record}
                # severity comes from the loop line or the matcher default, never the context
                if "severity" not in record:
                    merged.pop("severity", None)
                records.append(merged)

    return records


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def match(matcher: Matcher | Mapping[str, Any] | None, input: str | None) -> list[Record]:
    """Run a matcher over raw tool output and return records in input order."""
    validate_matcher(matcher, input)
    if not isinstance(matcher, Matcher):
        matcher = Matcher.from_dict(matcher)

    if len(matcher.pattern) == 1:
        logger.debug("Matcher %s: single pattern mode", matcher.owner)
        records = single_match(matcher, input)
    elif matcher.pattern[-1].loop:
        logger.debug("Matcher %s: loop mode with %d patterns",
                     matcher.owner, len(matcher.pattern))
        records = loop_match(matcher, input)
    else:
        raise MatcherError(UNSUPPORTED_CONFIGURATION)

    logger.debug("Matcher %s produced %d record(s)", matcher.owner, len(records))
    return records
