"""
Core cmdtree components.

This package provides the fundamental building blocks shared by the lexer,
parser, grammar model, and checker: source spans, configuration, and common
type definitions.
"""

from cmdtree.core.settings import DEFAULT_SETTINGS, ParserSettings
from cmdtree.core.span import Span, highlight
from cmdtree.core.types import (
    NodeKind,
    OptionPrefix,
    is_command_name,
    is_option_name,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "NodeKind",
    "OptionPrefix",
    "ParserSettings",
    "Span",
    "highlight",
    "is_command_name",
    "is_option_name",
]
