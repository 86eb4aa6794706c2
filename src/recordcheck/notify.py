"""Failure notification for recordcheck.

A failure report is handed to exactly one notifier, resolved in this order:
1. the callback passed to check_data
2. the validator instance's on_message
3. the process-wide notifier (NotifierChain.global_notifier)
4. the host fallback injected at the composition root
"""

import logging
from typing import Any

import click

from recordcheck.types import FailureReport, Notifier

logger = logging.getLogger(__name__)


def log_notifier(report: FailureReport) -> None:
    """Fallback notifier that writes the failure message to the log."""
    logger.info("%s (field '%s', rule '%s')", report.msg, report.name, report.rule)


def echo_notifier(report: FailureReport) -> None:
    """Fallback notifier for terminals: prints the message to stderr."""
    click.echo(click.style(report.msg, fg="red"), err=True)


class NotifierChain:
    """Ordered notifier hooks with a host-supplied fallback.

    Example:
        chain = NotifierChain(fallback=echo_notifier)
        chain.dispatch(report, call_notifier=None, instance_notifier=None)
    """

    def __init__(
        self,
        global_notifier: Notifier | None = None,
        fallback: Notifier | None = log_notifier,
    ):
        self.global_notifier = global_notifier
        self.fallback = fallback

    def candidates(
        self,
        call_notifier: Notifier | None = None,
        instance_notifier: Notifier | None = None,
    ) -> list[Notifier | None]:
        """Return the hooks in precedence order (unset entries included)."""
        return [call_notifier, instance_notifier, self.global_notifier, self.fallback]

    def resolve(
        self,
        call_notifier: Notifier | None = None,
        instance_notifier: Notifier | None = None,
    ) -> Notifier | None:
        """Return the first callable hook, or None if there is none."""
        for candidate in self.candidates(call_notifier, instance_notifier):
            if callable(candidate):
                return candidate
        return None

    def dispatch(
        self,
        report: FailureReport,
        call_notifier: Notifier | None = None,
        instance_notifier: Notifier | None = None,
    ) -> Any:
        """Invoke the resolved notifier once with the report.

        Returns:
            The notifier's return value, or None if no notifier is available.
            Exceptions raised by the notifier propagate to the caller.
        """
        notifier = self.resolve(call_notifier, instance_notifier)
        if notifier is None:
            logger.debug("No notifier available for rule '%s' on '%s'", report.rule, report.name)
            return None
        return notifier(report)
