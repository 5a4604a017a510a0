"""Output formatters — text, JSON (NDJSON), CI workflow-command annotations."""

import json
from typing import Callable

Formatter = Callable[[dict, str], str]

# Severity (lowercased) -> annotation command
ANNOTATION_KINDS = {
    "warning": "warning",
    "warn": "warning",
    "info": "notice",
    "notice": "notice",
}


def format_text(record: dict, owner: str) -> str:
    """Return ``file:line:column: severity: message [code]``."""
    location = record.get("file") or record.get("fromPath") or "<unknown>"
    for key in ("line", "column"):
        if record.get(key):
            location += f":{record[key]}"

    parts = [location]
    if record.get("severity"):
        parts.append(record["severity"])
    parts.append(record.get("message", ""))

    text = ": ".join(parts)
    if record.get("code"):
        text += f" [{record['code']}]"
    return text


def format_json(record: dict, owner: str) -> str:
    """Return NDJSON — one JSON object per line, compatible with jq."""
    return json.dumps({**record, "owner": owner}, sort_keys=True)


def annotation_kind(severity: str | None) -> str:
    """Map a record severity onto error, warning or notice."""
    return ANNOTATION_KINDS.get((severity or "").strip().lower(), "error")


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_annotation(record: dict, owner: str) -> str:
    """Return a workflow command, e.g. ``::error file=a.js,line=3::msg``."""
    props = []
    file = record.get("file") or record.get("fromPath")
    if file:
        props.append(f"file={_escape_property(file)}")
    if record.get("line"):
        props.append(f"line={_escape_property(record['line'])}")
    if record.get("column"):
        props.append(f"col={_escape_property(record['column'])}")
    if record.get("code"):
        props.append(f"title={_escape_property(record['code'])}")

    kind = annotation_kind(record.get("severity"))
    head = f"::{kind} {','.join(props)}" if props else f"::{kind}"
    return f"{head}::{_escape_data(record.get('message', ''))}"


FORMATS = {
    "text": format_text,
    "json": format_json,
    "annotation": format_annotation,
}


def get_formatter(name: str = "text") -> Formatter:
    """Factory that returns the formatter registered under ``name``."""
    try:
        return FORMATS[name]
    except KeyError:
        raise ValueError(
            f"Unknown output format '{name}' (choose from {', '.join(FORMATS)})"
        ) from None
