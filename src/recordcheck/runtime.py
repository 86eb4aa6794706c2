"""Composition root for recordcheck.

Holds the shared default PredicateRegistry (seeded with the built-in
predicates) and the shared NotifierChain. Validators use these unless a
registry or chain is injected explicitly.
"""

from recordcheck.builtins import register_builtin_predicates
from recordcheck.notify import NotifierChain, log_notifier
from recordcheck.registry import PredicateRegistry
from recordcheck.types import Notifier, Predicate, RegistrationResult

_registry: PredicateRegistry | None = None
_notifiers: NotifierChain | None = None


def default_registry() -> PredicateRegistry:
    """Return the shared registry, creating and seeding it on first use."""
    global _registry
    if _registry is None:
        _registry = PredicateRegistry()
        register_builtin_predicates(_registry)
    return _registry


def default_notifiers() -> NotifierChain:
    """Return the shared notifier chain (log fallback unless configured)."""
    global _notifiers
    if _notifiers is None:
        _notifiers = NotifierChain(fallback=log_notifier)
    return _notifiers


def add_rule(name: str, predicate: Predicate) -> RegistrationResult:
    """Register a predicate with the shared registry."""
    return default_registry().register(name, predicate)


def set_global_notifier(notifier: Notifier | None) -> None:
    """Set the process-wide notifier (third in dispatch precedence)."""
    default_notifiers().global_notifier = notifier


def set_fallback_notifier(notifier: Notifier | None) -> None:
    """Set the host fallback notifier (last in dispatch precedence)."""
    default_notifiers().fallback = notifier


def reset() -> None:
    """Drop the shared registry and notifier chain. Primarily for testing."""
    global _registry, _notifiers
    _registry = None
    _notifiers = None
