"""Load matcher definitions from JSON or YAML documents.

A document may hold a single matcher object, a list of matchers, or the
``{"problemMatcher": [...]}`` wrapper CI runners use. Structure is checked
against the schemas below; required keys are left to the engine's own
validation so its error messages reach the user unchanged.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Iterable

import jsonschema
from jsonschema.exceptions import best_match
import yaml

from problem_matcher.errors import MatcherFileError
from problem_matcher.models import Matcher

logger = logging.getLogger(__name__)

_MATCHER_SCHEMA = {
    "type": "object",
    "properties": {
        "owner": {"type": "string"},
        "severity": {"type": "string"},
        "pattern": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "regexp": {"type": "string"},
                    "loop": {"type": "boolean"},
                },
                "required": ["regexp"],
                "additionalProperties": {"type": "integer"},
            },
        },
    },
}

MATCHER_LIST_SCHEMA = {"type": "array", "items": _MATCHER_SCHEMA}

# Wrapper form: {"problemMatcher": [...]}
MATCHER_DOCUMENT_SCHEMA = {
    "type": "object",
    "properties": {"problemMatcher": MATCHER_LIST_SCHEMA},
    "required": ["problemMatcher"],
}

_matcher_validator = jsonschema.Draft202012Validator(_MATCHER_SCHEMA)
_list_validator = jsonschema.Draft202012Validator(MATCHER_LIST_SCHEMA)
_document_validator = jsonschema.Draft202012Validator(MATCHER_DOCUMENT_SCHEMA)

_PARSERS = {
    ".json": json.loads,
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
}


def _read_document(path: str) -> Any:
    ext = os.path.splitext(path)[1].lower()
    parse = _PARSERS.get(ext)
    if parse is None:
        raise MatcherFileError(
            f"{path}: unsupported matcher file type '{ext}' (expected .json, .yaml or .yml)"
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse(f.read())
    except FileNotFoundError:
        raise MatcherFileError(f"{path}: matcher file not found") from None
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise MatcherFileError(f"{path}: could not parse matcher file: {exc}") from exc


def parse_document(document: Any, source: str = "<document>") -> list[Matcher]:
    """Validate a decoded matcher document and convert it to Matchers."""
    if isinstance(document, list):
        validator = _list_validator
    elif isinstance(document, dict) and "problemMatcher" in document:
        validator = _document_validator
    elif isinstance(document, dict):
        validator = _matcher_validator
    else:
        raise MatcherFileError(
            f"{source}: expected a matcher object or a list of matchers, "
            f"got {type(document).__name__}"
        )

    error = best_match(validator.iter_errors(document))
    if error is not None:
        location = "/".join(str(p) for p in error.absolute_path) or "<root>"
        raise MatcherFileError(f"{source}: {location}: {error.message}")

    if isinstance(document, list):
        entries = document
    elif "problemMatcher" in document:
        entries = document["problemMatcher"]
    else:
        entries = [document]

    return [Matcher.from_dict(entry) for entry in entries]


def load_matcher_file(path: str) -> list[Matcher]:
    """Read one matcher file and return the matchers it defines."""
    matchers = parse_document(_read_document(path), source=path)
    logger.info("Loaded %d matcher(s) from %s", len(matchers), path)
    return matchers


def load_matchers(paths: Iterable[str]) -> list[Matcher]:
    """Load several matcher files, keeping file order."""
    matchers = []
    for path in paths:
        matchers.extend(load_matcher_file(path))
    return matchers


def find_matcher(matchers: Iterable[Matcher], owner: str) -> Matcher:
    """Return the matcher registered under ``owner``."""
    for matcher in matchers:
        if matcher.owner == owner:
            return matcher
    raise MatcherFileError(f"No matcher with owner '{owner}' was loaded")
