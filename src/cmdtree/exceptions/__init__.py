"""
cmdtree exception classes.

This package provides all exception types used throughout the cmdtree
framework for consistent error handling and reporting.
"""

from cmdtree.exceptions.core import (
    CmdTreeError,
    CommandLineValidationError,
    ErrorContext,
    ErrorLevel,
    LexError,
    LexErrorKind,
    ParseError,
    ParseErrorKind,
    RuleDefinitionError,
    RuleErrorKind,
    SourceError,
)

__all__ = [
    "CmdTreeError",
    "CommandLineValidationError",
    "ErrorContext",
    "ErrorLevel",
    "LexError",
    "LexErrorKind",
    "ParseError",
    "ParseErrorKind",
    "RuleDefinitionError",
    "RuleErrorKind",
    "SourceError",
]
