"""
Core type definitions for the cmdtree framework.

This module contains the enumerations and name patterns shared by the lexer,
the AST, and the grammar model.
"""

import re
from enum import Enum


class OptionPrefix(Enum):
    """Prefix form an option was written with."""

    SHORT = "-"
    LONG = "--"
    SLASH = "/"


class NodeKind(Enum):
    """Closed set of AST node variants."""

    ROOT = "root"
    VALUE = "value"
    COMMAND = "command"
    OPTION = "option"


# A bare word is a command name when it starts with a letter or underscore
COMMAND_NAME_PATTERN = re.compile(r"[^\W\d][\w-]*")

# '?' is accepted as a help option name (-? or /?)
OPTION_NAME_PATTERN = re.compile(r"\?|[^\W\d][\w.-]*")


def is_command_name(word: str) -> bool:
    """Check whether a bare word can name a command."""
    return bool(COMMAND_NAME_PATTERN.fullmatch(word))


def is_option_name(word: str) -> bool:
    """Check whether a word can name an option."""
    return bool(OPTION_NAME_PATTERN.fullmatch(word))
