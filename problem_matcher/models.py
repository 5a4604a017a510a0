"""Matcher and Pattern dataclasses built from the JSON object form."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from problem_matcher.errors import MatcherError

# Field names understood by downstream consumers (formatters, annotations).
# Patterns may still map any other key to a capture group.
FIELD_NAMES = ("file", "fromPath", "line", "column", "severity", "code", "message")

RESERVED_KEYS = frozenset({"regexp", "loop"})


def _group_index(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True)
class Pattern:
    regexp: str
    groups: tuple[tuple[str, Any], ...] = ()  # (field name, group index) pairs
    loop: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Pattern:
        """Build a Pattern from its JSON object form.

        Every key except ``regexp`` and ``loop`` is a field mapping; key
        order is preserved. Integral floats (``1.0``) are read as ints.
        """
        if not isinstance(data, Mapping):
            raise MatcherError(
                f"matcher.pattern entries must be objects, got {type(data).__name__}"
            )
        regexp = data.get("regexp")
        if not isinstance(regexp, str):
            raise MatcherError("No regexp provided for matcher.pattern entry")
        groups = tuple(
            (k, _group_index(v)) for k, v in data.items() if k not in RESERVED_KEYS
        )
        return cls(regexp=regexp, groups=groups, loop=bool(data.get("loop", False)))

    @property
    def field_map(self) -> dict[str, Any]:
        return dict(self.groups)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"regexp": self.regexp, **self.field_map}
        if self.loop:
            data["loop"] = True
        return data


@dataclass(frozen=True)
class Matcher:
    owner: str | None
    pattern: tuple[Pattern, ...] | None
    severity: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Matcher:
        """Build a Matcher from its JSON object form.

        Missing keys are kept as None; the engine reports them when the
        matcher is run.
        """
        patterns = data.get("pattern")
        if patterns is not None:
            patterns = tuple(Pattern.from_dict(p) for p in patterns)
        return cls(
            owner=data.get("owner"),
            pattern=patterns,
            severity=data.get("severity"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"owner": self.owner}
        if self.severity is not None:
            data["severity"] = self.severity
        data["pattern"] = [p.to_dict() for p in self.pattern or ()]
        return data
