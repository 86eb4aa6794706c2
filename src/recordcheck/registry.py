"""Predicate registry for recordcheck.

Maps rule names to predicate functions. Built-in predicates are seeded from
a library mapping; applications register their own at startup or at runtime.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable

from recordcheck.types import Predicate, RegistrationResult

logger = logging.getLogger(__name__)


class PredicateRegistry:
    """Registry for validation predicates.

    A predicate is called as ``predicate(value, *args)`` where ``args`` are
    the normalized extra arguments of the rule. Extra arguments are always
    spread positionally, for built-in and runtime-registered predicates alike.

    Registration never raises: the first registration of a name wins and
    non-callable values are ignored. The returned RegistrationResult tells
    the caller which of those happened.

    Example:
        registry = PredicateRegistry()
        registry.register("even", lambda value, flag=True: int(value) % 2 == 0)

        registry.call("even", "4")  # True
    """

    def __init__(self, library: Mapping[str, Predicate] | None = None):
        self._predicates: dict[str, Predicate] = {}
        if library:
            self.seed(library)

    def register(self, name: str, predicate: Predicate) -> RegistrationResult:
        """Register a predicate by name.

        Idempotent - re-registering an existing name is a no-op.

        Args:
            name: Rule name as used in rule sets (e.g., "required", "minLength")
            predicate: Callable taking (value, *args) and returning a truthy result

        Returns:
            REGISTERED, ALREADY_EXISTS or REJECTED
        """
        if name in self._predicates:
            logger.debug("Predicate '%s' already registered, keeping original", name)
            return RegistrationResult.ALREADY_EXISTS
        if not callable(predicate):
            logger.debug("Predicate '%s' rejected: %r is not callable", name, predicate)
            return RegistrationResult.REJECTED
        self._predicates[name] = predicate
        return RegistrationResult.REGISTERED

    def seed(self, library: Mapping[str, Predicate]) -> None:
        """Register every (name, predicate) pair of a predicate library."""
        for name, predicate in library.items():
            self.register(name, predicate)

    def has(self, name: str) -> bool:
        """Check if a predicate is registered."""
        return name in self._predicates

    def get(self, name: str) -> Predicate | None:
        """Get a registered predicate, or None if the name is unknown."""
        return self._predicates.get(name)

    def call(self, name: str, value: Any, *args: Any) -> Any:
        """Call a registered predicate.

        Raises:
            KeyError: If the predicate is not registered
        """
        if name not in self._predicates:
            raise KeyError(f"Unknown predicate: {name}")
        return self._predicates[name](value, *args)

    def list_registered(self) -> list[str]:
        """List all registered predicate names."""
        return sorted(self._predicates.keys())

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._predicates.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._predicates

    def __len__(self) -> int:
        return len(self._predicates)


def predicate(
    name: str, registry: PredicateRegistry | None = None
) -> Callable[[Predicate], Predicate]:
    """Decorator to register a predicate function.

    Registers with the shared default registry unless one is given.

    Usage:
        @predicate("postcode")
        def postcode(value, *args):
            ...
    """

    def decorator(fn: Predicate) -> Predicate:
        target = registry
        if target is None:
            from recordcheck.runtime import default_registry

            target = default_registry()
        target.register(name, fn)
        return fn

    return decorator
