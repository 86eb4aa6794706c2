"""recordcheck: declarative record validation.

Validates a record (field name -> value) against per-field rules and reports
the first failing rule with a user-facing message.

Usage:
    from recordcheck import RecordValidator, add_rule, field_value

    add_rule("even", lambda value, *args: int(value) % 2 == 0)

    validator = RecordValidator(
        rules={
            "password": {"required": True, "rangeLength": [6, 20]},
            "confirmPassword": {"equalTo": field_value("password")},
        },
        messages={
            "password": {"required": "Password is required"},
            "confirmPassword": {"equalTo": "Passwords do not match"},
        },
        on_message=lambda report: print(report.msg),
    )
    validator.check_data({"password": "secret1", "confirmPassword": "secret2"})
"""

from recordcheck.builtins import BUILTIN_PREDICATES, register_builtin_predicates
from recordcheck.loader import load_record, load_rule_set
from recordcheck.notify import NotifierChain, echo_notifier, log_notifier
from recordcheck.registry import PredicateRegistry, predicate
from recordcheck.rules import RuleSet, check_rules
from recordcheck.runtime import (
    add_rule,
    default_notifiers,
    default_registry,
    set_fallback_notifier,
    set_global_notifier,
)
from recordcheck.types import (
    ArgList,
    Computed,
    FailureReport,
    InvalidArgumentError,
    Literal,
    RecordCheckError,
    RegistrationResult,
    RuleSetFileError,
    RuleSpec,
    as_rule_spec,
    field_value,
)
from recordcheck.validator import RecordValidator

__all__ = [
    # Types
    "ArgList",
    "Computed",
    "FailureReport",
    "Literal",
    "RegistrationResult",
    "RuleSpec",
    "as_rule_spec",
    "field_value",
    # Errors
    "InvalidArgumentError",
    "RecordCheckError",
    "RuleSetFileError",
    # Registry
    "BUILTIN_PREDICATES",
    "PredicateRegistry",
    "add_rule",
    "default_registry",
    "predicate",
    "register_builtin_predicates",
    # Rules
    "RecordValidator",
    "RuleSet",
    "check_rules",
    "load_record",
    "load_rule_set",
    # Notifiers
    "NotifierChain",
    "default_notifiers",
    "echo_notifier",
    "log_notifier",
    "set_fallback_notifier",
    "set_global_notifier",
]
