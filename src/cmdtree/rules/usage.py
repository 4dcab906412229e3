"""
Usage text rendering for rule sets.

Produces indented help text listing every option and command a rule set
accepts, nested commands indented under their parent.
"""

from cmdtree.rules.model import CmdLineRules, CommandRule, OptionRule
from cmdtree.rules.quantifier import CommandQuantifier

INDENT = "  "
DESCRIPTION_COLUMN = 28


def render_usage(rules: CmdLineRules, program_name: str) -> str:
    """
    Render help text for a rule set.

    Params:
        rules: The grammar to describe
        program_name: Name shown in the usage line

    Returns:
        Multi-line usage text
    """
    lines = [f"Usage: {_usage_line(rules, program_name)}"]

    if rules.options:
        lines.append("")
        lines.append("Options:")
        lines.extend(_option_lines(rules.options, depth=1))

    if rules.commands:
        lines.append("")
        lines.append("Commands:")
        for command in rules.commands:
            lines.extend(_command_lines(command, depth=1))

    return "\n".join(lines)


def _usage_line(rules: CmdLineRules, program_name: str) -> str:
    parts = [program_name]
    if rules.options:
        parts.append("[options]")
    if rules.commands:
        if rules.command_quantifier.min_count > 0:
            parts.append("<command>")
        else:
            parts.append("[command]")
        if rules.command_quantifier.max_count != 1:
            parts.append("...")
    return " ".join(parts)


def _option_lines(options: tuple[OptionRule, ...], depth: int) -> list[str]:
    lines = []
    for option in options:
        label = ", ".join(_option_label(name, option) for name in option.names)
        notes = []
        if option.required:
            notes.append("required")
        if option.repeatable:
            notes.append("repeatable")
        lines.append(_entry(label, option.description, notes, depth))
    return lines


def _option_label(name: str, option: OptionRule) -> str:
    prefix = "-" if len(name) == 1 else "--"
    label = f"{prefix}{name}"
    if option.expects_value:
        label += "=<value>"
    return label


def _command_lines(command: CommandRule, depth: int) -> list[str]:
    notes = []
    if command.quantifier is not CommandQuantifier.ZERO_OR_ONE:
        notes.append(command.quantifier.describe())

    lines = [_entry(command.name, command.description, notes, depth)]
    lines.extend(_option_lines(command.options, depth + 1))
    for sub_command in command.commands:
        lines.extend(_command_lines(sub_command, depth + 1))
    return lines


def _entry(label: str, description: str, notes: list[str], depth: int) -> str:
    text = description
    if notes:
        text = f"{text} ({', '.join(notes)})" if text else f"({', '.join(notes)})"

    head = f"{INDENT * depth}{label}"
    if not text:
        return head
    if len(head) < DESCRIPTION_COLUMN:
        return head.ljust(DESCRIPTION_COLUMN) + text
    return f"{head}  {text}"
