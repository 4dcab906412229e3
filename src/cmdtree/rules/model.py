"""
Declarative grammar model for command lines.

Rules are immutable attrs classes validated once at construction. A rule set
that is contradictory (duplicate sibling names, requirements that can never be
met) is rejected with a RuleDefinitionError instead of failing later during
checking.
"""

from collections import Counter
from collections.abc import Iterable

from attrs import field, frozen
from attrs.validators import instance_of

from cmdtree.core.types import is_command_name, is_option_name
from cmdtree.exceptions.core import RuleDefinitionError, RuleErrorKind
from cmdtree.rules.quantifier import CommandQuantifier


def _as_tuple(value: Iterable | str) -> tuple:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@frozen
class OptionRule:
    """
    Describes an allowed option.

    Params:
        name: Option name without prefix
        required: The option must occur at least once
        expects_value: The option must carry a value; if False it must not
        repeatable: The option may occur more than once
        aliases: Alternate names resolving to this rule (e.g. 'v' for 'verbose')
        description: Help text
    """

    name: str
    required: bool = False
    expects_value: bool = False
    repeatable: bool = False
    aliases: tuple[str, ...] = field(default=(), converter=_as_tuple)
    description: str = ""

    def __attrs_post_init__(self):
        for name in self.names:
            if not isinstance(name, str) or not is_option_name(name):
                raise RuleDefinitionError(
                    RuleErrorKind.INVALID_RULE_NAME,
                    str(name),
                    "option names must be '?' or start with a letter",
                )

    @property
    def names(self) -> tuple[str, ...]:
        """The name followed by all aliases."""
        return (self.name, *self.aliases)


@frozen
class CommandRule:
    """
    Describes an allowed command and what it may contain.

    Params:
        name: Command name
        quantifier: How many times this command may occur among its siblings
        commands: Rules for nested sub-commands
        options: Rules for options following this command
        command_quantifier: How many sub-commands may occur in total
        description: Help text
    """

    name: str
    quantifier: CommandQuantifier = field(
        default=CommandQuantifier.ZERO_OR_ONE, validator=instance_of(CommandQuantifier)
    )
    commands: tuple["CommandRule", ...] = field(default=(), converter=tuple)
    options: tuple[OptionRule, ...] = field(default=(), converter=tuple)
    command_quantifier: CommandQuantifier = field(
        default=CommandQuantifier.ZERO_OR_MULTIPLE,
        validator=instance_of(CommandQuantifier),
    )
    description: str = ""

    def __attrs_post_init__(self):
        if not isinstance(self.name, str) or not is_command_name(self.name):
            raise RuleDefinitionError(
                RuleErrorKind.INVALID_RULE_NAME,
                str(self.name),
                "command names must start with a letter and contain only word characters or '-'",
            )
        validate_level(self.commands, self.options, self.command_quantifier, self.name)

        if self.quantifier is CommandQuantifier.ZERO:
            for option in self.options:
                if not option.required:
                    raise RuleDefinitionError(
                        RuleErrorKind.UNSATISFIABLE_RULE,
                        option.name,
                        f"optional option is nested under command '{self.name}' which may never occur",
                    )


@frozen
class CmdLineRules:
    """
    Top-level grammar for a command line.

    Params:
        commands: Rules for top-level commands
        options: Rules for options before the first command
        command_quantifier: How many top-level commands may occur in total
    """

    commands: tuple[CommandRule, ...] = field(default=(), converter=tuple)
    options: tuple[OptionRule, ...] = field(default=(), converter=tuple)
    command_quantifier: CommandQuantifier = field(
        default=CommandQuantifier.ZERO_OR_MULTIPLE,
        validator=instance_of(CommandQuantifier),
    )

    def __attrs_post_init__(self):
        validate_level(self.commands, self.options, self.command_quantifier, None)


def validate_level(
    commands: tuple[CommandRule, ...],
    options: tuple[OptionRule, ...],
    command_quantifier: CommandQuantifier,
    owner: str | None,
) -> None:
    """
    Validate one nesting level of a rule set.

    Params:
        commands: Sibling command rules
        options: Sibling option rules
        command_quantifier: Quantifier for the sibling command set as a whole
        owner: Name of the owning command rule, None for the top level

    Raises:
        RuleDefinitionError: On duplicate sibling names or unsatisfiable quantifiers
        TypeError: If a sibling is not a rule of the expected type
    """
    where = "at top level" if owner is None else f"in command '{owner}'"

    for rule in commands:
        if not isinstance(rule, CommandRule):
            raise TypeError(f"Expected CommandRule {where}, got {type(rule).__name__}")
    for rule in options:
        if not isinstance(rule, OptionRule):
            raise TypeError(f"Expected OptionRule {where}, got {type(rule).__name__}")

    _reject_duplicates([rule.name for rule in commands], "command", where)
    _reject_duplicates([name for rule in options for name in rule.names], "option", where)

    if commands and command_quantifier is CommandQuantifier.ZERO:
        raise RuleDefinitionError(
            RuleErrorKind.UNSATISFIABLE_RULE,
            owner,
            f"command rules are declared {where} but no command may occur",
        )
    if not commands and command_quantifier.min_count > 0:
        raise RuleDefinitionError(
            RuleErrorKind.UNSATISFIABLE_RULE,
            owner,
            f"a command is required {where} but no command rules are declared",
        )

    required = sum(rule.quantifier.min_count for rule in commands)
    limit = command_quantifier.max_count
    if limit is not None and required > limit:
        raise RuleDefinitionError(
            RuleErrorKind.UNSATISFIABLE_RULE,
            owner,
            f"{required} commands are required {where} but {command_quantifier.describe()} may occur",
        )


def _reject_duplicates(names: list[str], rule_kind: str, where: str) -> None:
    for name, count in Counter(names).items():
        if count > 1:
            raise RuleDefinitionError(
                RuleErrorKind.DUPLICATE_RULE_NAME,
                name,
                f"{rule_kind} name is declared {count} times {where}",
            )


def find_command_rule(rules: tuple[CommandRule, ...], name: str) -> CommandRule | None:
    """Find the command rule with the given name."""
    for rule in rules:
        if rule.name == name:
            return rule
    return None


def find_option_rule(rules: tuple[OptionRule, ...], name: str) -> OptionRule | None:
    """Find the option rule with the given name or alias."""
    for rule in rules:
        if name in rule.names:
            return rule
    return None
