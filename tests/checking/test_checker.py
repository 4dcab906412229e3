"""
Tests for checking command line ASTs against grammar rules.

This module tests:
- Valid and invalid command lines for each diagnostic kind
- Per-rule and per-level command quantifiers
- Diagnostic ordering, rendering and result unwrapping
"""

import pytest

from cmdtree.checking.checker import CmdLineChecker, check
from cmdtree.checking.diagnostics import Diagnostic, DiagnosticKind, Invalid, Valid
from cmdtree.core.span import Span
from cmdtree.exceptions.core import CommandLineValidationError
from cmdtree.parsing.parser import parse
from cmdtree.rules.model import CmdLineRules, CommandRule, OptionRule
from cmdtree.rules.quantifier import CommandQuantifier


def _check(text: str, rules: CmdLineRules):
    return check(parse(text), rules)


class TestValidCommandLines:
    """Tests for command lines satisfying their rules."""

    def test_scenario_valid(self, build_rules):
        """Test a top-level flag followed by a command with its option."""
        result = _check("tool --verbose build --target=release", build_rules)

        assert isinstance(result, Valid)
        assert result.is_valid
        assert result.diagnostics == ()
        assert result.root.commands[0].name == "build"

    def test_alias_accepted(self, build_rules):
        """Test that aliases satisfy their option rule."""
        assert _check("tool -v build --target=x -j=4", build_rules).is_valid

    def test_repeatable_option(self, nested_rules):
        """Test that repeatable options may occur several times."""
        result = _check("tool remote add --name=origin --tag:a --tag:b", nested_rules)
        assert result.is_valid

    def test_empty_rules_accept_bare_program(self):
        """Test that an empty grammar accepts a lone program name."""
        assert _check("tool", CmdLineRules()).is_valid

    def test_checker_is_idempotent(self, build_rules):
        """Test that checking twice yields equal results."""
        root = parse("tool deploy --x")
        checker = CmdLineChecker()
        assert checker.check(root, build_rules) == checker.check(root, build_rules)


class TestCommandDiagnostics:
    """Tests for command-level diagnostics."""

    def test_scenario_unknown_and_missing(self, build_rules):
        """Test an unknown command reported alongside the missing one."""
        result = _check("tool deploy", build_rules)

        assert isinstance(result, Invalid)
        assert result.kinds == [DiagnosticKind.MISSING_COMMAND, DiagnosticKind.UNKNOWN_COMMAND]
        missing, unknown = result.diagnostics
        assert missing.name == "build"
        assert missing.span == Span(0, 11)
        assert missing.message == "Missing required command 'build'"
        assert unknown.name == "deploy"
        assert unknown.span == Span(5, 6)
        assert unknown.message == "Unknown command 'deploy'"

    def test_duplicate_command(self, build_rules):
        """Test a command given more often than its quantifier allows."""
        result = _check("tool build --target=a build --target=b", build_rules)

        assert result.kinds == [DiagnosticKind.DUPLICATE_COMMAND]
        (duplicate,) = result.diagnostics
        assert duplicate.span == Span(22, 16)
        assert duplicate.message == "Command 'build' is given for the 2nd time, exactly one allowed"

    def test_forbidden_command(self):
        """Test a command whose quantifier is ZERO."""
        rules = CmdLineRules(commands=[CommandRule("legacy", CommandQuantifier.ZERO), CommandRule("run")])
        result = _check("tool legacy", rules)

        assert result.kinds == [DiagnosticKind.UNEXPECTED_COMMAND]
        assert result.diagnostics[0].span == Span(5, 6)
        assert result.diagnostics[0].message == "Command 'legacy' is not allowed here"

    def test_unknown_command_contents_not_checked(self, build_rules):
        """Test that nothing below an unknown command is reported."""
        result = _check("tool build --target=x deploy --anything", build_rules)
        assert result.kinds == [DiagnosticKind.UNKNOWN_COMMAND]

    def test_missing_nested_command_in_set(self, nested_rules):
        """Test a command set requiring one of several sub-commands."""
        result = _check("tool remote", nested_rules)

        (missing,) = result.diagnostics
        assert missing.kind is DiagnosticKind.MISSING_COMMAND
        assert missing.name is None
        assert missing.span == Span(5, 6)
        assert missing.message == "Expected exactly one command(s) here, got 0"

    def test_too_many_commands_in_set(self, nested_rules):
        """Test a command set allowing only one sub-command."""
        result = _check("tool remote add --name=a remove", nested_rules)

        (unexpected,) = result.diagnostics
        assert unexpected.kind is DiagnosticKind.UNEXPECTED_COMMAND
        assert unexpected.name == "remove"
        assert unexpected.span == Span(25, 6)
        assert unexpected.message == "Command 'remove' exceeds the exactly one command(s) allowed here"

    def test_set_check_skips_flagged_commands(self, nested_rules):
        """Test that an unknown command is not reported twice."""
        result = _check("tool remote add --name=a rename", nested_rules)
        assert result.kinds == [DiagnosticKind.UNKNOWN_COMMAND]

    def test_flagged_commands_do_not_use_up_set_limit(self):
        """Test that a forbidden command does not push an allowed one past the set limit."""
        rules = CmdLineRules(
            command_quantifier=CommandQuantifier.ONE,
            commands=[CommandRule("legacy", CommandQuantifier.ZERO), CommandRule("run")],
        )
        result = _check("tool legacy -f run", rules)

        (unexpected,) = result.diagnostics
        assert unexpected.kind is DiagnosticKind.UNEXPECTED_COMMAND
        assert unexpected.name == "legacy"
        assert unexpected.message == "Command 'legacy' is not allowed here"

    def test_flagged_commands_do_not_meet_set_minimum(self, nested_rules):
        """Test that only recognized commands count toward a required command set."""
        result = _check("tool remote rename", nested_rules)

        assert result.kinds == [DiagnosticKind.MISSING_COMMAND, DiagnosticKind.UNKNOWN_COMMAND]
        missing, unknown = result.diagnostics
        assert missing.name is None
        assert missing.message == "Expected exactly one command(s) here, got 0"
        assert unknown.name == "rename"

    @pytest.mark.parametrize("quantifier", list(CommandQuantifier))
    @pytest.mark.parametrize("count", [0, 1, 2, 3])
    def test_quantifier_law(self, quantifier, count):
        """Test that a command line is valid exactly when counts satisfy quantifiers."""
        rules = CmdLineRules(
            commands=[CommandRule("run", quantifier, options=[OptionRule("x", required=True)])]
        )
        text = "tool" + " run -x" * count

        result = _check(text, rules)
        assert result.is_valid == quantifier.is_satisfied(count)


class TestOptionDiagnostics:
    """Tests for option-level diagnostics."""

    def test_scenario_missing_value(self, build_rules):
        """Test an option that requires a value given without one."""
        result = _check("tool build --target", build_rules)

        assert result.kinds == [DiagnosticKind.MISSING_OPTION_VALUE]
        assert result.diagnostics[0].span == Span(11, 8)
        assert result.diagnostics[0].message == "Option 'target' requires a value"

    def test_missing_required_option(self, build_rules):
        """Test a required option reported at its owning command."""
        result = _check("tool build", build_rules)

        (missing,) = result.diagnostics
        assert missing.kind is DiagnosticKind.MISSING_OPTION
        assert missing.name == "target"
        assert missing.span == Span(5, 5)

    def test_unknown_option(self, build_rules):
        """Test an option that no rule declares."""
        result = _check("tool build --target=x --bogus", build_rules)

        (unknown,) = result.diagnostics
        assert unknown.kind is DiagnosticKind.UNKNOWN_OPTION
        assert unknown.span == Span(22, 7)

    def test_option_at_wrong_level(self, build_rules):
        """Test that a command's option is unknown at the top level."""
        result = _check("tool --target=x build --target=y", build_rules)
        assert result.kinds == [DiagnosticKind.UNKNOWN_OPTION]
        assert result.diagnostics[0].span.position == 5

    def test_duplicate_option(self, build_rules):
        """Test a non-repeatable option given twice."""
        result = _check("tool build --target=x --target=y", build_rules)

        (duplicate,) = result.diagnostics
        assert duplicate.kind is DiagnosticKind.DUPLICATE_OPTION
        assert duplicate.span == Span(22, 10)
        assert duplicate.message == "Option 'target' is given for the 2nd time"

    def test_duplicate_through_alias(self, build_rules):
        """Test that an alias and its name count as the same option."""
        result = _check("tool -v --verbose build --target=x", build_rules)

        (duplicate,) = result.diagnostics
        assert duplicate.kind is DiagnosticKind.DUPLICATE_OPTION
        assert duplicate.name == "verbose"

    def test_unexpected_value(self, build_rules):
        """Test a flag given a value, reported at the value."""
        result = _check("tool --verbose=yes build --target=x", build_rules)

        (unexpected,) = result.diagnostics
        assert unexpected.kind is DiagnosticKind.UNEXPECTED_OPTION_VALUE
        assert unexpected.span == Span(15, 3)

    def test_nested_option_problems(self, nested_rules):
        """Test option checks two levels below the root."""
        result = _check("tool remote add --tag --bogus", nested_rules)
        assert result.kinds == [
            DiagnosticKind.MISSING_OPTION,
            DiagnosticKind.MISSING_OPTION_VALUE,
            DiagnosticKind.UNKNOWN_OPTION,
        ]


class TestResults:
    """Tests for diagnostic ordering, rendering and unwrapping."""

    def test_diagnostics_sorted_by_position(self, build_rules):
        """Test that diagnostics from different levels come out in source order."""
        result = _check("tool --bogus build --jobs", build_rules)

        assert result.kinds == [
            DiagnosticKind.UNKNOWN_OPTION,
            DiagnosticKind.MISSING_OPTION,
            DiagnosticKind.MISSING_OPTION_VALUE,
        ]
        positions = [d.span.position for d in result.diagnostics]
        assert positions == [5, 13, 19]

    def test_all_problems_reported(self, build_rules):
        """Test that checking continues past the first problem."""
        result = _check("tool --x build --y --target", build_rules)
        assert len(result.diagnostics) == 3

    def test_render_diagnostic(self, build_rules):
        """Test rendering a diagnostic with a caret excerpt."""
        text = "tool deploy"
        unknown = _check(text, build_rules).diagnostics[1]

        assert unknown.render(text) == (
            "Unknown command: Unknown command 'deploy'\n"
            "tool deploy\n"
            "     ^^^^^^"
        )

    def test_render_all(self, build_rules):
        """Test rendering every diagnostic of an invalid result."""
        text = "tool deploy"
        rendered = _check(text, build_rules).render(text)

        assert rendered.startswith("Missing command: Missing required command 'build'")
        assert rendered.count("tool deploy") == 2
        assert "\n\n" in rendered

    def test_unwrap_valid(self, build_rules):
        """Test that a valid result yields its root."""
        result = _check("tool build --target=x", build_rules)
        assert result.unwrap() is result.root

    def test_unwrap_invalid(self, build_rules):
        """Test that an invalid result raises with its diagnostics."""
        result = _check("tool deploy", build_rules)

        with pytest.raises(CommandLineValidationError) as exc_info:
            result.unwrap()
        assert exc_info.value.diagnostics == list(result.diagnostics)
        assert "2 problem(s)" in str(exc_info.value)

    def test_diagnostic_labels(self):
        """Test readable kind labels."""
        assert DiagnosticKind.MISSING_OPTION_VALUE.label == "Missing option value"
        assert DiagnosticKind.UNKNOWN_COMMAND.label == "Unknown command"

    def test_custom_template(self):
        """Test overriding a kind's message template."""
        diagnostic = Diagnostic.create(
            DiagnosticKind.UNKNOWN_OPTION, Span(0, 1), "x", template="No such flag: {name}"
        )
        assert diagnostic.message == "No such flag: x"
