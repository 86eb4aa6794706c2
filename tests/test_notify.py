"""Tests for notifier precedence and dispatch."""

import logging
from unittest.mock import MagicMock

import pytest

from recordcheck import runtime
from recordcheck.notify import NotifierChain, echo_notifier, log_notifier
from recordcheck.types import FailureReport
from recordcheck.validator import RecordValidator


@pytest.fixture(autouse=True)
def reset_runtime():
    runtime.reset()
    yield
    runtime.reset()


@pytest.fixture
def report():
    return FailureReport(name="age", value="", param=[True], rule="required", msg="Age is required")


class TestNotifierChain:
    def test_call_notifier_wins(self, report):
        call, instance, global_, fallback = MagicMock(), MagicMock(), MagicMock(), MagicMock()
        chain = NotifierChain(global_notifier=global_, fallback=fallback)

        chain.dispatch(report, call_notifier=call, instance_notifier=instance)

        call.assert_called_once_with(report)
        instance.assert_not_called()
        global_.assert_not_called()
        fallback.assert_not_called()

    def test_instance_notifier_second(self, report):
        instance, global_, fallback = MagicMock(), MagicMock(), MagicMock()
        chain = NotifierChain(global_notifier=global_, fallback=fallback)

        chain.dispatch(report, instance_notifier=instance)

        instance.assert_called_once_with(report)
        global_.assert_not_called()
        fallback.assert_not_called()

    def test_global_notifier_third(self, report):
        global_, fallback = MagicMock(), MagicMock()
        chain = NotifierChain(global_notifier=global_, fallback=fallback)

        chain.dispatch(report)

        global_.assert_called_once_with(report)
        fallback.assert_not_called()

    def test_fallback_last(self, report):
        fallback = MagicMock()
        chain = NotifierChain(fallback=fallback)

        chain.dispatch(report)

        fallback.assert_called_once_with(report)

    def test_non_callable_candidates_are_skipped(self, report):
        fallback = MagicMock()
        chain = NotifierChain(global_notifier="not callable", fallback=fallback)

        chain.dispatch(report, call_notifier=42)

        fallback.assert_called_once_with(report)

    def test_returns_notifier_result(self, report):
        chain = NotifierChain(fallback=None)
        assert chain.dispatch(report, call_notifier=lambda r: r.msg) == "Age is required"

    def test_no_notifier_returns_none(self, report):
        chain = NotifierChain(fallback=None)
        assert chain.resolve() is None
        assert chain.dispatch(report) is None

    def test_candidates_order(self):
        call, instance, global_, fallback = object(), object(), object(), object()
        chain = NotifierChain(global_notifier=global_, fallback=fallback)
        assert chain.candidates(call, instance) == [call, instance, global_, fallback]


class TestBuiltinNotifiers:
    def test_log_notifier(self, report, caplog):
        with caplog.at_level(logging.INFO, logger="recordcheck.notify"):
            log_notifier(report)
        assert "Age is required" in caplog.text

    def test_echo_notifier(self, report, capsys):
        echo_notifier(report)
        assert "Age is required" in capsys.readouterr().err


class TestSharedChain:
    def make_validator(self, on_message=None):
        return RecordValidator(
            rules={"age": {"required": True}},
            messages={"age": {"required": "Age is required"}},
            on_message=on_message,
        )

    def test_default_fallback_logs(self, caplog):
        with caplog.at_level(logging.INFO, logger="recordcheck.notify"):
            assert self.make_validator().check_data({}) is False
        assert "Age is required" in caplog.text

    def test_set_global_notifier(self):
        global_ = MagicMock()
        runtime.set_global_notifier(global_)

        self.make_validator().check_data({})

        global_.assert_called_once()
        assert global_.call_args.args[0].msg == "Age is required"

    def test_instance_beats_global(self):
        global_, instance = MagicMock(), MagicMock()
        runtime.set_global_notifier(global_)

        self.make_validator(on_message=instance).check_data({})

        instance.assert_called_once()
        global_.assert_not_called()

    def test_set_fallback_notifier(self):
        fallback = MagicMock()
        runtime.set_fallback_notifier(fallback)

        self.make_validator().check_data({})

        fallback.assert_called_once()
