"""
loader.py: load rule sets and records from YAML or JSON files.

A rule-set file has two top-level mappings::

    rules:
      password:
        required: true
        rangeLength: [6, 20]
      confirmPassword:
        equalTo: {$field: password}
    messages:
      password:
        required: Password is required

Rule values become RuleSpec variants: lists become ArgList, a ``{$field: name}``
mapping reads another field of the record, anything else is a Literal.

The file structure is checked against a JSON Schema before conversion.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from recordcheck.rules import RuleSet
from recordcheck.types import ArgList, Literal, RuleSetFileError, RuleSpec, field_value

logger = logging.getLogger(__name__)

FIELD_REF_KEY = "$field"

RULE_SET_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "rules": {
            "type": "object",
            "additionalProperties": {"type": "object"},
        },
        "messages": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "additionalProperties": {"type": "string"},
            },
        },
    },
}


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def read_document(path: Path) -> Any:
    """Parse a YAML or JSON file (chosen by suffix, YAML otherwise).

    Raises:
        RuleSetFileError: If the file cannot be read or parsed
    """
    try:
        with path.open(encoding="utf-8") as fh:
            if path.suffix.lower() == ".json":
                return json.load(fh)
            return yaml.safe_load(fh)
    except OSError as exc:
        raise RuleSetFileError(f"{path}: cannot read file: {exc}") from exc
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise RuleSetFileError(f"{path}: parse error: {exc}") from exc


def _to_rule_spec(raw: Any) -> RuleSpec:
    if isinstance(raw, dict) and set(raw) == {FIELD_REF_KEY}:
        return field_value(str(raw[FIELD_REF_KEY]))
    if isinstance(raw, list):
        return ArgList(raw)
    return Literal(raw)


def rule_set_from_document(doc: Any, source: str = "<document>") -> RuleSet:
    """Build a RuleSet from a parsed rule-set document.

    Raises:
        RuleSetFileError: If the document does not match the rule-set schema
    """
    if doc is None:
        doc = {}
    errors = sorted(Draft202012Validator(RULE_SET_SCHEMA).iter_errors(doc), key=lambda e: e.path)
    if errors:
        error = errors[0]
        loc = _json_path(error)
        where = f" at {loc}" if loc else ""
        raise RuleSetFileError(f"{source}{where}: {error.message}")

    rules = {
        field_name: {rule: _to_rule_spec(raw) for rule, raw in (field_rules or {}).items()}
        for field_name, field_rules in (doc.get("rules") or {}).items()
    }
    logger.debug("Loaded %d field(s) from %s", len(rules), source)
    return RuleSet.create(rules=rules, messages=doc.get("messages"))


def load_rule_set(path: Path) -> RuleSet:
    """Load a rule set from a YAML or JSON file."""
    return rule_set_from_document(read_document(path), source=str(path))


def load_record(path: Path) -> dict[str, Any]:
    """Load a record (field name -> value) from a YAML or JSON file.

    Raises:
        RuleSetFileError: If the file does not contain a mapping
    """
    doc = read_document(path)
    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise RuleSetFileError(f"{path}: a record must be a mapping, got {type(doc).__name__}")
    return doc
