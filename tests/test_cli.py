"""Tests for recordcheck CLI commands."""

import textwrap

import pytest
from click.testing import CliRunner

from recordcheck import runtime
from recordcheck.cli.main import cli


@pytest.fixture(autouse=True)
def reset_runtime(monkeypatch):
    runtime.reset()
    monkeypatch.delenv("RECORDCHECK_RULES", raising=False)
    monkeypatch.delenv("RECORDCHECK_STRICT", raising=False)
    monkeypatch.delenv("RECORDCHECK_LOG_LEVEL", raising=False)
    yield
    runtime.reset()


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / "age.yaml"
    path.write_text(
        textwrap.dedent(
            """\
            rules:
              age:
                required: true
                number: true
            messages:
              age:
                required: Age is required
                number: Age must be numeric
            """
        )
    )
    return path


@pytest.fixture
def unknown_rules_file(tmp_path):
    path = tmp_path / "unknown.yaml"
    path.write_text("rules:\n  name:\n    required: true\n    foo: 1\n")
    return path


def write_record(tmp_path, text):
    path = tmp_path / "record.yaml"
    path.write_text(text)
    return path


class TestCheck:
    def test_valid_record(self, runner, rules_file, tmp_path):
        record = write_record(tmp_path, "age: '30'\n")
        result = runner.invoke(cli, ["check", str(record), "--rules", str(rules_file)])
        assert result.exit_code == 0
        assert "Record is valid" in result.output

    def test_invalid_record_prints_message(self, runner, rules_file, tmp_path):
        record = write_record(tmp_path, "age: abc\n")
        result = runner.invoke(cli, ["check", str(record), "--rules", str(rules_file)])
        assert result.exit_code == 1
        assert "Age must be numeric" in result.output

    def test_missing_field(self, runner, rules_file, tmp_path):
        record = write_record(tmp_path, "name: Jane\n")
        result = runner.invoke(cli, ["check", str(record), "--rules", str(rules_file)])
        assert result.exit_code == 1
        assert "Age is required" in result.output

    def test_rules_from_env(self, runner, rules_file, tmp_path, monkeypatch):
        monkeypatch.setenv("RECORDCHECK_RULES", str(rules_file))
        record = write_record(tmp_path, "age: 30\n")
        result = runner.invoke(cli, ["check", str(record)])
        assert result.exit_code == 0

    def test_no_rules_is_usage_error(self, runner, tmp_path):
        record = write_record(tmp_path, "age: 30\n")
        result = runner.invoke(cli, ["check", str(record)])
        assert result.exit_code == 2
        assert "RECORDCHECK_RULES" in result.output

    def test_invalid_record_without_message(self, runner, tmp_path):
        rules = tmp_path / "plain.yaml"
        rules.write_text("rules:\n  age:\n    required: true\n")
        record = write_record(tmp_path, "name: Jane\n")
        result = runner.invoke(cli, ["check", str(record), "--rules", str(rules)])
        assert result.exit_code == 1
        assert "Record is invalid" in result.output

    def test_invalid_utf8_record(self, runner, rules_file, tmp_path):
        record = tmp_path / "record.json"
        record.write_bytes(b'{"age": "\xff"}')
        result = runner.invoke(cli, ["check", str(record), "--rules", str(rules_file)])
        assert result.exit_code == 2
        assert "parse error" in result.output

    def test_unknown_log_level_falls_back(self, runner, rules_file, tmp_path, monkeypatch):
        monkeypatch.setenv("RECORDCHECK_LOG_LEVEL", "verbose")
        record = write_record(tmp_path, "age: 30\n")
        result = runner.invoke(cli, ["check", str(record), "--rules", str(rules_file)])
        assert result.exit_code == 0

    def test_bad_record_file(self, runner, rules_file, tmp_path):
        record = write_record(tmp_path, "- just\n- a list\n")
        result = runner.invoke(cli, ["check", str(record), "--rules", str(rules_file)])
        assert result.exit_code == 2
        assert "must be a mapping" in result.output


class TestRulesCheck:
    def test_known_rules(self, runner, rules_file):
        result = runner.invoke(cli, ["rules", "check", "--rules", str(rules_file)])
        assert result.exit_code == 0
        assert "1 field(s), 2 rule(s), 0 unknown" in result.output

    def test_unknown_rules_reported(self, runner, unknown_rules_file):
        result = runner.invoke(cli, ["rules", "check", "--rules", str(unknown_rules_file)])
        assert result.exit_code == 0
        assert "Unknown rule 'foo' on field 'name'" in result.output

    def test_strict_fails_on_unknown(self, runner, unknown_rules_file):
        result = runner.invoke(
            cli, ["rules", "check", "--rules", str(unknown_rules_file), "--strict"]
        )
        assert result.exit_code == 1

    def test_strict_from_env(self, runner, unknown_rules_file, monkeypatch):
        monkeypatch.setenv("RECORDCHECK_STRICT", "true")
        result = runner.invoke(cli, ["rules", "check", "--rules", str(unknown_rules_file)])
        assert result.exit_code == 1


class TestPredicates:
    def test_lists_builtins(self, runner):
        result = runner.invoke(cli, ["predicates"])
        assert result.exit_code == 0
        names = result.output.split()
        assert "required" in names
        assert "minLength" in names
        assert names == sorted(names)
