"""
cmdtree grammar model.

This package provides the declarative rule classes callers compose to
describe which commands and options a command line may contain.
"""

from cmdtree.rules.model import (
    CmdLineRules,
    CommandRule,
    OptionRule,
    find_command_rule,
    find_option_rule,
)
from cmdtree.rules.quantifier import CommandQuantifier
from cmdtree.rules.usage import render_usage

__all__ = [
    "CmdLineRules",
    "CommandQuantifier",
    "CommandRule",
    "OptionRule",
    "find_command_rule",
    "find_option_rule",
    "render_usage",
]
