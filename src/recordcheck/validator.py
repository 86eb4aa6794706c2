"""Record validation for recordcheck.

RecordValidator evaluates a record against its RuleSet:
- fields, then rules per field, are visited in insertion order
- unknown rules are skipped
- evaluation stops at the first failing rule, whose message (if configured)
  is dispatched to a notifier
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from recordcheck.notify import NotifierChain
from recordcheck.registry import PredicateRegistry
from recordcheck.rules import RuleSet, check_rules
from recordcheck.runtime import default_notifiers, default_registry
from recordcheck.types import FailureReport, Notifier, Predicate, RegistrationResult

logger = logging.getLogger(__name__)


class RecordValidator:
    """Validates records against per-field rules.

    Example:
        validator = RecordValidator(
            rules={"age": {"required": True, "number": True}},
            messages={"age": {"required": "Age is required"}},
        )
        validator.check_data({"age": ""})  # False, "Age is required" is dispatched
        validator.is_valid({"age": "30"})  # True
    """

    def __init__(
        self,
        rules: Mapping[str, Mapping[str, Any]] | None = None,
        messages: Mapping[str, Mapping[str, str]] | None = None,
        on_message: Notifier | None = None,
        *,
        registry: PredicateRegistry | None = None,
        notifiers: NotifierChain | None = None,
    ):
        """Initialize the validator.

        Args:
            rules: Field name -> rule name -> rule value (RuleSpec or raw value)
            messages: Field name -> rule name -> message template
            on_message: Per-instance notifier
            registry: Predicate registry (defaults to the shared registry)
            notifiers: Notifier chain (defaults to the shared chain)
        """
        self.registry = registry if registry is not None else default_registry()
        self.notifiers = notifiers if notifiers is not None else default_notifiers()
        self.rule_set = RuleSet.create(rules, messages, on_message)
        self.last_dispatch_result: Any = None
        self._invalid_rules = check_rules(self.rule_set, self.registry)

    @classmethod
    def from_rule_set(
        cls,
        rule_set: RuleSet,
        *,
        registry: PredicateRegistry | None = None,
        notifiers: NotifierChain | None = None,
    ) -> "RecordValidator":
        return cls(
            rule_set.rules,
            rule_set.messages,
            rule_set.on_message,
            registry=registry,
            notifiers=notifiers,
        )

    @classmethod
    def from_file(cls, path: Path | str, **kwargs: Any) -> "RecordValidator":
        """Create a validator from a YAML or JSON rule-set file."""
        from recordcheck.loader import load_rule_set

        rule_set = load_rule_set(Path(path))
        if "on_message" in kwargs:
            rule_set.on_message = kwargs.pop("on_message")
        return cls.from_rule_set(rule_set, **kwargs)

    @property
    def rules(self) -> dict[str, dict[str, Any]]:
        return self.rule_set.rules

    @property
    def messages(self) -> dict[str, dict[str, str]]:
        return self.rule_set.messages

    @property
    def invalid_rules(self) -> set[tuple[str, str]]:
        """(field, rule) pairs whose rule had no predicate when last checked."""
        return set(self._invalid_rules)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def add_rule(self, name: str, predicate: Predicate) -> RegistrationResult:
        """Register a predicate with this validator's registry."""
        result = self.registry.register(name, predicate)
        if result is RegistrationResult.REGISTERED:
            self._invalid_rules = check_rules(self.rule_set, self.registry)
        return result

    def add_rules(
        self,
        rules: Mapping[str, Mapping[str, Any]] | None = None,
        messages: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        """Merge rules and messages; a field present in both is replaced whole."""
        self.rule_set.merge(rules, messages)
        self._invalid_rules = check_rules(self.rule_set, self.registry)

    def remove_rules(self, names: list[str] | tuple[str, ...]) -> None:
        """Remove all rules of the named fields.

        Raises:
            InvalidArgumentError: If names is not a list or tuple
        """
        self.rule_set.remove(names)
        self._invalid_rules = {
            pair for pair in self._invalid_rules if pair[0] in self.rule_set.rules
        }

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def check_data(
        self,
        data: Mapping[str, Any],
        on_message: Notifier | None = None,
        emit_messages: bool = True,
    ) -> bool:
        """Validate a record, stopping at the first failing rule.

        Args:
            data: The record (field name -> value)
            on_message: Notifier for this call, ahead of all others in precedence
            emit_messages: If False, failures are never dispatched

        Returns:
            True if every rule passed or was skipped, False otherwise
        """
        for field_name, field_rules in self.rule_set.rules.items():
            for rule, spec in field_rules.items():
                predicate = self.registry.get(rule)
                if predicate is None:
                    logger.debug("Rule '%s' on field '%s' has no predicate", rule, field_name)
                    continue

                value = data[field_name] if field_name in data else ""
                param = spec.resolve(value, data)

                if predicate(value, *param):
                    continue

                logger.debug("Field '%s' failed rule '%s'", field_name, rule)
                message = self.rule_set.message_for(field_name, rule)
                if emit_messages and message is not None:
                    report = FailureReport(
                        name=field_name,
                        value=value,
                        param=param,
                        rule=rule,
                        msg=message,
                    )
                    self.last_dispatch_result = self.notifiers.dispatch(
                        report,
                        call_notifier=on_message,
                        instance_notifier=self.rule_set.on_message,
                    )
                return False
        return True

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        """Validate a record without dispatching any message."""
        return self.check_data(data, None, False)
