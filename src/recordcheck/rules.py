"""Rule set configuration for recordcheck.

A RuleSet holds, per validator instance:
- rules: field -> rule name -> RuleSpec
- messages: field -> rule name -> message template
- on_message: the instance's notifier (optional)

Raw rule values are coerced into RuleSpec variants once, when they enter the
rule set, so evaluation never has to inspect shapes.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from recordcheck.registry import PredicateRegistry
from recordcheck.types import InvalidArgumentError, Notifier, RuleSpec, as_rule_spec

logger = logging.getLogger(__name__)

FieldRuleMap = dict[str, dict[str, RuleSpec]]
FieldMessageMap = dict[str, dict[str, str]]


def normalize_rules(rules: Mapping[str, Mapping[str, Any]] | None) -> FieldRuleMap:
    """Coerce a raw field -> rule -> value mapping into RuleSpec variants.

    Insertion order of fields and rules is preserved.
    """
    if not rules:
        return {}
    return {
        field_name: {rule: as_rule_spec(raw) for rule, raw in (field_rules or {}).items()}
        for field_name, field_rules in rules.items()
    }


def normalize_messages(messages: Mapping[str, Mapping[str, str]] | None) -> FieldMessageMap:
    if not messages:
        return {}
    return {field_name: dict(field_messages) for field_name, field_messages in messages.items()}


@dataclass
class RuleSet:
    """Rules and messages for one validator instance.

    Attributes:
        rules: Field name -> rule name -> RuleSpec, in evaluation order
        messages: Field name -> rule name -> message template
        on_message: Per-instance notifier, or None
    """

    rules: FieldRuleMap = field(default_factory=dict)
    messages: FieldMessageMap = field(default_factory=dict)
    on_message: Notifier | None = None

    @classmethod
    def create(
        cls,
        rules: Mapping[str, Mapping[str, Any]] | None = None,
        messages: Mapping[str, Mapping[str, str]] | None = None,
        on_message: Notifier | None = None,
    ) -> "RuleSet":
        """Create a RuleSet from raw options; missing options take empty defaults."""
        return cls(
            rules=normalize_rules(rules),
            messages=normalize_messages(messages),
            on_message=on_message,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RuleSet":
        """Create a RuleSet from an options dict (``rules``, ``messages``, ``on_message``)."""
        return cls.create(
            rules=data.get("rules"),
            messages=data.get("messages"),
            on_message=data.get("on_message"),
        )

    def merge(
        self,
        rules: Mapping[str, Mapping[str, Any]] | None = None,
        messages: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        """Shallow-merge rules and messages.

        A field present in both the existing and the new mapping is replaced
        as a whole; its rules are not merged one by one.
        """
        self.rules.update(normalize_rules(rules))
        self.messages.update(normalize_messages(messages))

    def remove(self, names: Any) -> None:
        """Delete the rules of each named field.

        Messages of removed fields are kept. Unknown names are ignored.

        Raises:
            InvalidArgumentError: If names is not a list or tuple
        """
        if not isinstance(names, (list, tuple)):
            raise InvalidArgumentError(
                f"remove_rules expects a list of field names, got {type(names).__name__}"
            )
        for name in names:
            self.rules.pop(name, None)

    def message_for(self, field_name: str, rule: str) -> str | None:
        """Return the message for (field, rule), or None if there is none."""
        message = self.messages.get(field_name, {}).get(rule)
        return message or None


def check_rules(rule_set: RuleSet, registry: PredicateRegistry) -> set[tuple[str, str]]:
    """Find rule names in a rule set that have no registered predicate.

    Each unknown rule is logged as a warning. Nothing is removed or raised;
    the returned (field, rule) pairs are skipped during evaluation.

    Returns:
        Set of (field name, rule name) pairs with no predicate
    """
    invalid: set[tuple[str, str]] = set()
    for field_name, field_rules in rule_set.rules.items():
        for rule in field_rules:
            if not registry.has(rule):
                logger.warning("Unknown rule '%s' on field '%s', skipping", rule, field_name)
                invalid.add((field_name, rule))
    return invalid
