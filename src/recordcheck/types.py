"""Core types for the recordcheck validation engine.

This module defines the foundational types shared by every layer:
- RuleSpec variants (Literal, Computed, ArgList) describing predicate arguments
- FailureReport, the payload handed to notifiers
- RegistrationResult, the outcome of registering a predicate
- The exception hierarchy
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

# Predicate signature: (value, *args) -> bool
Predicate = Callable[..., Any]

# Computed spec signature: (value, record) -> extra argument
ComputeFn = Callable[[Any, Mapping[str, Any]], Any]


class RecordCheckError(Exception):
    """Base class for recordcheck errors."""


class InvalidArgumentError(RecordCheckError, TypeError):
    """Raised when a mutation operation receives an argument of the wrong shape."""


class RuleSetFileError(RecordCheckError, ValueError):
    """Raised when a rule-set file cannot be parsed or has the wrong structure."""


class RegistrationResult(Enum):
    """Outcome of PredicateRegistry.register.

    REGISTERED: The predicate was installed
    ALREADY_EXISTS: A predicate with that name exists; the original stays active
    REJECTED: The value was not callable
    """

    REGISTERED = "registered"
    ALREADY_EXISTS = "already_exists"
    REJECTED = "rejected"

    def __bool__(self) -> bool:
        return self is RegistrationResult.REGISTERED


# =============================================================================
# Rule specifications
# =============================================================================


@dataclass(frozen=True)
class Literal:
    """A fixed value passed as the predicate's sole extra argument."""

    value: Any

    def resolve(self, value: Any, record: Mapping[str, Any]) -> list[Any]:
        return [self.value]


@dataclass(frozen=True)
class Computed:
    """A function of (value, record) whose result is the sole extra argument.

    Used for cross-field rules, e.g. a confirmation field that must equal
    another field of the same record.
    """

    fn: ComputeFn

    def resolve(self, value: Any, record: Mapping[str, Any]) -> list[Any]:
        return [self.fn(value, record)]


@dataclass(frozen=True)
class ArgList:
    """An ordered sequence of extra arguments spread after the field value."""

    args: tuple[Any, ...] = ()

    def __init__(self, args: Any = ()):
        object.__setattr__(self, "args", tuple(args))

    def resolve(self, value: Any, record: Mapping[str, Any]) -> list[Any]:
        return list(self.args)


RuleSpec = Union[Literal, Computed, ArgList]

RULE_SPEC_TYPES = (Literal, Computed, ArgList)


def as_rule_spec(raw: Any) -> RuleSpec:
    """Coerce a raw rule value into a RuleSpec variant.

    Explicit variants pass through unchanged. Otherwise callables become
    Computed, lists and tuples become ArgList and anything else is a Literal.
    """
    if isinstance(raw, RULE_SPEC_TYPES):
        return raw
    if callable(raw):
        return Computed(raw)
    if isinstance(raw, (list, tuple)):
        return ArgList(raw)
    return Literal(raw)


def field_value(name: str) -> Computed:
    """Build a Computed spec that reads another field of the record.

    Example:
        rules = {"confirmPassword": {"equalTo": field_value("password")}}
    """
    return Computed(lambda value, record: record.get(name))


# =============================================================================
# Failure reporting
# =============================================================================


@dataclass(frozen=True)
class FailureReport:
    """The first failing (field, rule) pair of an evaluation.

    Attributes:
        name: Field name
        value: The value the predicate was evaluated against
        param: Normalized extra arguments passed to the predicate
        rule: Rule name
        msg: Message template configured for (name, rule)
    """

    name: str
    value: Any
    param: tuple[Any, ...] = ()
    rule: str = ""
    msg: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "param", tuple(self.param))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "param": list(self.param),
            "rule": self.rule,
            "msg": self.msg,
        }


Notifier = Callable[[FailureReport], Any]
