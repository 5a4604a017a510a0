"""Shared pytest fixtures for the problem-matcher test suite."""

from __future__ import annotations

import os

import pytest

ROOT = os.path.join(os.path.dirname(__file__), "..")


@pytest.fixture()
def valid_matcher() -> dict:
    return {
        "owner": "test-matcher",
        "severity": "Error",
        "pattern": [
            {
                "regexp": "^([^:]+):([^:]+):([^:]+)$",
                "message": 1,
                "file": 2,
                "line": 3,
            },
        ],
    }


@pytest.fixture()
def eslint_compact_matcher() -> dict:
    return {
        "owner": "eslint-compact",
        "pattern": [
            {
                "regexp": r"^(.+):\sline\s(\d+),\scol\s(\d+),\s(Error|Warning|Info)\s-\s(.+)\s\((.+)\)$",
                "file": 1,
                "line": 2,
                "column": 3,
                "severity": 4,
                "message": 5,
                "code": 6,
            },
        ],
    }


@pytest.fixture()
def eslint_stylish_matcher() -> dict:
    return {
        "owner": "eslint-stylish",
        "pattern": [
            {
                # File name line
                "regexp": r"^([^\s].*)$",
                "file": 1,
            },
            {
                # Indented problem lines; file comes from the line above
                "regexp": r"^\s+(\d+):(\d+)\s+(error|warning|info)\s+(.*)\s\s+(.*)$",
                "line": 1,
                "column": 2,
                "severity": 3,
                "message": 4,
                "code": 5,
                "loop": True,
            },
        ],
    }


@pytest.fixture()
def stylish_output() -> str:
    return (
        "test.js\n"
        "  1:0   error  Missing \"use strict\" statement                 strict\n"
        "  5:10  error  'addOne' is defined but never used             no-unused-vars\n"
        "\n"
        "foo.js\n"
        "  36:10  error  Expected parentheses around arrow function argument  arrow-parens\n"
        "  37:13  error  Expected parentheses around arrow function argument  arrow-parens\n"
        "\n"
        "✖ 4 problems (4 errors, 0 warnings)"
    )


@pytest.fixture()
def matchers_dir() -> str:
    return os.path.join(ROOT, "matchers")


@pytest.fixture()
def samples_dir() -> str:
    return os.path.join(ROOT, "samples")
