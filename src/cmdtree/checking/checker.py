"""
Checker matching command line ASTs against grammar rules.

The checker walks the tree one nesting level at a time from a worklist and
collects every violation it finds instead of stopping at the first one.
It holds no state between calls, so one checker and one rule set can serve
any number of concurrent checks.
"""

import logging
from collections import deque
from dataclasses import dataclass

from inflection import ordinalize

from cmdtree.checking.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    Invalid,
    Valid,
    ValidationResult,
)
from cmdtree.core.span import Span
from cmdtree.parsing.ast import CommandNode, OptionNode, RootNode
from cmdtree.rules.model import (
    CmdLineRules,
    CommandRule,
    OptionRule,
    find_command_rule,
    find_option_rule,
)
from cmdtree.rules.quantifier import CommandQuantifier

logger = logging.getLogger(__name__)

SET_MISSING_TEMPLATE = "Expected {expected} command(s) here, got {count}"
SET_UNEXPECTED_TEMPLATE = "Command '{name}' exceeds the {expected} command(s) allowed here"


@dataclass(frozen=True)
class _Level:
    """One nesting level to check: AST siblings paired with rule siblings."""

    owner_span: Span
    commands: tuple[CommandNode, ...]
    options: tuple[OptionNode, ...]
    command_rules: tuple[CommandRule, ...]
    option_rules: tuple[OptionRule, ...]
    command_quantifier: CommandQuantifier


class CmdLineChecker:
    """Validates parsed command lines against a rule set."""

    def check(self, root: RootNode, rules: CmdLineRules) -> ValidationResult:
        """
        Check a parsed command line against a rule set.

        Params:
            root: Root node of the parsed command line
            rules: The grammar to check against

        Returns:
            Valid(root) if every rule is satisfied, otherwise Invalid with all
            diagnostics ordered by source position
        """
        diagnostics: list[Diagnostic] = []
        worklist = deque(
            [
                _Level(
                    owner_span=root.span,
                    commands=root.commands,
                    options=root.options,
                    command_rules=rules.commands,
                    option_rules=rules.options,
                    command_quantifier=rules.command_quantifier,
                )
            ]
        )

        while worklist:
            level = worklist.popleft()
            diagnostics.extend(self._check_commands(level, worklist))
            diagnostics.extend(self._check_options(level))

        if not diagnostics:
            logger.debug("Command line '%s' is valid", root.text)
            return Valid(root)

        diagnostics.sort(key=lambda diagnostic: diagnostic.span.position)
        logger.debug(
            "Command line '%s' has %d diagnostics", root.text, len(diagnostics)
        )
        return Invalid(tuple(diagnostics))

    def _check_commands(self, level: _Level, worklist: deque) -> list[Diagnostic]:
        """Check command names and counts, queueing recognized commands."""
        diagnostics = []
        flagged: set[int] = set()
        missing_reported = False

        occurrences: dict[str, list[CommandNode]] = {}
        for command in level.commands:
            occurrences.setdefault(command.name, []).append(command)

        for name, commands in occurrences.items():
            if find_command_rule(level.command_rules, name) is None:
                for command in commands:
                    diagnostics.append(
                        Diagnostic.create(
                            DiagnosticKind.UNKNOWN_COMMAND, command.span, name
                        )
                    )
                    flagged.add(id(command))

        for rule in level.command_rules:
            commands = occurrences.get(rule.name, [])
            quantifier = rule.quantifier

            if quantifier is CommandQuantifier.ZERO:
                for command in commands:
                    diagnostics.append(
                        Diagnostic.create(
                            DiagnosticKind.UNEXPECTED_COMMAND, command.span, rule.name
                        )
                    )
                    flagged.add(id(command))
                continue

            if len(commands) < quantifier.min_count:
                diagnostics.append(
                    Diagnostic.create(
                        DiagnosticKind.MISSING_COMMAND, level.owner_span, rule.name
                    )
                )
                missing_reported = True

            if quantifier.max_count is not None:
                for index, command in enumerate(
                    commands[quantifier.max_count :], start=quantifier.max_count + 1
                ):
                    diagnostics.append(
                        Diagnostic.create(
                            DiagnosticKind.DUPLICATE_COMMAND,
                            command.span,
                            rule.name,
                            ordinal=ordinalize(index),
                            allowed=quantifier.describe(),
                        )
                    )
                    flagged.add(id(command))

            for command in commands:
                worklist.append(
                    _Level(
                        owner_span=command.span,
                        commands=command.commands,
                        options=command.options,
                        command_rules=rule.commands,
                        option_rules=rule.options,
                        command_quantifier=rule.command_quantifier,
                    )
                )

        diagnostics.extend(self._check_command_set(level, flagged, missing_reported))
        return diagnostics

    def _check_command_set(
        self, level: _Level, flagged: set[int], missing_reported: bool
    ) -> list[Diagnostic]:
        """Check the total number of commands at a level, ignoring flagged ones."""
        diagnostics = []
        quantifier = level.command_quantifier
        accepted = [command for command in level.commands if id(command) not in flagged]
        count = len(accepted)

        if count < quantifier.min_count and not missing_reported:
            diagnostics.append(
                Diagnostic.create(
                    DiagnosticKind.MISSING_COMMAND,
                    level.owner_span,
                    template=SET_MISSING_TEMPLATE,
                    expected=quantifier.describe(),
                    count=count,
                )
            )

        if quantifier.max_count is not None:
            for command in accepted[quantifier.max_count :]:
                diagnostics.append(
                    Diagnostic.create(
                        DiagnosticKind.UNEXPECTED_COMMAND,
                        command.span,
                        command.name,
                        template=SET_UNEXPECTED_TEMPLATE,
                        expected=quantifier.describe(),
                    )
                )
        return diagnostics

    def _check_options(self, level: _Level) -> list[Diagnostic]:
        """Check option names, repetition and values at a level."""
        diagnostics = []
        counts: dict[str, int] = {}

        for option in level.options:
            rule = find_option_rule(level.option_rules, option.name)
            if rule is None:
                diagnostics.append(
                    Diagnostic.create(DiagnosticKind.UNKNOWN_OPTION, option.span, option.name)
                )
                continue

            counts[rule.name] = counts.get(rule.name, 0) + 1
            if counts[rule.name] > 1 and not rule.repeatable:
                diagnostics.append(
                    Diagnostic.create(
                        DiagnosticKind.DUPLICATE_OPTION,
                        option.span,
                        rule.name,
                        ordinal=ordinalize(counts[rule.name]),
                    )
                )

            if rule.expects_value and option.value is None:
                diagnostics.append(
                    Diagnostic.create(
                        DiagnosticKind.MISSING_OPTION_VALUE, option.span, rule.name
                    )
                )
            elif not rule.expects_value and option.value is not None:
                diagnostics.append(
                    Diagnostic.create(
                        DiagnosticKind.UNEXPECTED_OPTION_VALUE, option.value.span, rule.name
                    )
                )

        for rule in level.option_rules:
            if rule.required and rule.name not in counts:
                diagnostics.append(
                    Diagnostic.create(
                        DiagnosticKind.MISSING_OPTION, level.owner_span, rule.name
                    )
                )

        return diagnostics


def check(root: RootNode, rules: CmdLineRules) -> ValidationResult:
    """
    Convenience function to check a parsed command line.

    Params:
        root: Root node of the parsed command line
        rules: The grammar to check against

    Returns:
        Valid or Invalid validation result
    """
    checker = CmdLineChecker()
    return checker.check(root, rules)
