"""Tests for problem_matcher.models."""

from __future__ import annotations

import dataclasses

import pytest

from problem_matcher.errors import MatcherError
from problem_matcher.models import FIELD_NAMES, Matcher, Pattern


class TestPatternFromDict:
    def test_splits_groups_from_reserved_keys(self) -> None:
        pattern = Pattern.from_dict({"regexp": "^(a)(b)$", "file": 1, "line": 2, "loop": True})
        assert pattern.regexp == "^(a)(b)$"
        assert pattern.groups == (("file", 1), ("line", 2))
        assert pattern.field_map == {"file": 1, "line": 2}
        assert pattern.loop is True

    def test_loop_defaults_false(self) -> None:
        assert Pattern.from_dict({"regexp": "x"}).loop is False

    def test_group_order_preserved(self) -> None:
        pattern = Pattern.from_dict({"message": 3, "regexp": "x", "file": 1, "line": 2})
        assert [name for name, _ in pattern.groups] == ["message", "file", "line"]

    def test_missing_regexp(self) -> None:
        with pytest.raises(MatcherError, match="No regexp provided"):
            Pattern.from_dict({"file": 1})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(MatcherError, match="got list"):
            Pattern.from_dict(["^x$"])

    def test_to_dict_round_trip_shape(self) -> None:
        data = {"regexp": "^(a)$", "file": 1, "loop": True}
        assert Pattern.from_dict(data).to_dict() == data


class TestMatcherFromDict:
    def test_builds_patterns(self) -> None:
        matcher = Matcher.from_dict({
            "owner": "tsc",
            "severity": "error",
            "pattern": [{"regexp": "^(.*)$", "message": 1}],
        })
        assert matcher.owner == "tsc"
        assert matcher.severity == "error"
        assert matcher.pattern == (Pattern(regexp="^(.*)$", groups=(("message", 1),)),)

    def test_missing_keys_kept_as_none(self) -> None:
        matcher = Matcher.from_dict({})
        assert matcher.owner is None
        assert matcher.pattern is None
        assert matcher.severity is None

    def test_to_dict_omits_unset_severity(self) -> None:
        matcher = Matcher.from_dict({"owner": "x", "pattern": [{"regexp": "y"}]})
        assert matcher.to_dict() == {"owner": "x", "pattern": [{"regexp": "y"}]}


class TestFrozen:
    def test_matcher_is_immutable(self) -> None:
        matcher = Matcher(owner="x", pattern=(Pattern(regexp="y"),))
        with pytest.raises(dataclasses.FrozenInstanceError):
            matcher.owner = "z"

    def test_pattern_is_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Pattern(regexp="y").loop = True


def test_field_names_cover_annotation_fields() -> None:
    for name in ("file", "line", "column", "severity", "message", "code"):
        assert name in FIELD_NAMES


class TestHashable:
    def test_pattern_hashable(self) -> None:
        pattern = Pattern.from_dict({"regexp": "^(a)$", "file": 1})
        assert hash(pattern) == hash(Pattern.from_dict({"regexp": "^(a)$", "file": 1}))

    def test_matcher_hashable(self) -> None:
        matcher = Matcher.from_dict({"owner": "x", "pattern": [{"regexp": "^(a)$", "file": 1}]})
        assert matcher in {matcher}


class TestGroupIndexes:
    def test_integral_float_read_as_int(self) -> None:
        pattern = Pattern.from_dict({"regexp": "^(a)$", "file": 1.0})
        assert pattern.groups == (("file", 1),)
        assert type(pattern.groups[0][1]) is int

    def test_fractional_float_kept(self) -> None:
        pattern = Pattern.from_dict({"regexp": "^(a)$", "file": 1.5})
        assert pattern.groups == (("file", 1.5),)
