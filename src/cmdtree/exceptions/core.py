"""
Exception classes for cmdtree command-line processing.

This module defines specific exception types for the error conditions that
abort lexing, parsing, or grammar construction. Validation problems found by
the checker are not raised; they are collected as diagnostics instead.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from cmdtree.core.span import Span, highlight

if TYPE_CHECKING:
    from cmdtree.checking.diagnostics import Diagnostic


class ErrorLevel(Enum):
    """Error message detail level for end users vs developers."""

    USER = "user"  # Caret excerpt only
    DEVELOPER = "developer"  # Adds raw span coordinates


@dataclass
class ErrorContext:
    """
    Context information for error messages.

    Captures where an error occurred in the command line text and formats it
    at different detail levels for user-facing vs developer debugging.

    Params:
        text: The full command line being processed
        span: The span of the offending text
    """

    text: str
    span: Span

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string with appropriate detail level
        """
        lines = [f"  {line}" for line in highlight(self.text, self.span).split("\n")]

        if error_level == ErrorLevel.DEVELOPER:
            lines.append(
                f"  at position {self.span.position}, length {self.span.length}"
            )

        return "\n".join(lines)


class LexErrorKind(Enum):
    """Kinds of lexical failure."""

    UNTERMINATED_QUOTE = "unterminated_quote"
    MISPLACED_QUOTE = "misplaced_quote"
    MALFORMED_OPTION = "malformed_option"


class ParseErrorKind(Enum):
    """Kinds of structural failure while building the AST."""

    UNEXPECTED_TOKEN = "unexpected_token"
    UNEXPECTED_END = "unexpected_end"
    NESTING_TOO_DEEP = "nesting_too_deep"


class RuleErrorKind(Enum):
    """Kinds of grammar definition failure."""

    DUPLICATE_RULE_NAME = "duplicate_rule_name"
    UNSATISFIABLE_RULE = "unsatisfiable_rule"
    INVALID_RULE_NAME = "invalid_rule_name"


class CmdTreeError(Exception):
    """Base exception for all cmdtree errors."""

    pass


class SourceError(CmdTreeError):
    """Base exception for failures located in the command line text."""

    def __init__(
        self,
        message: str,
        text: str,
        span: Span,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            message: Description of the failure
            text: The command line being processed
            span: Span of the text that triggered the failure
            error_level: Level of detail to show in error message
        """
        self.reason = message
        self.text = text
        self.span = span
        self.context = ErrorContext(text=text, span=span)
        self.error_level = error_level

        location_info = self.context.format_location(error_level)
        super().__init__(f"{message}\n{location_info}")


class LexError(SourceError):
    """Raised when the command line cannot be split into tokens."""

    def __init__(
        self,
        kind: LexErrorKind,
        message: str,
        text: str,
        span: Span,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            kind: The kind of lexical failure
            message: Description of the failure
            text: The command line being tokenized
            span: Span of the offending characters
            error_level: Level of detail to show in error message
        """
        self.kind = kind
        super().__init__(message, text, span, error_level)


class ParseError(SourceError):
    """Raised when the token stream does not form a command line."""

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        text: str,
        span: Span,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            kind: The kind of structural failure
            message: Description of the failure
            text: The command line being parsed
            span: Span of the offending token
            error_level: Level of detail to show in error message
        """
        self.kind = kind
        super().__init__(message, text, span, error_level)


class RuleDefinitionError(CmdTreeError):
    """Raised when a grammar rule set is contradictory or malformed."""

    def __init__(self, kind: RuleErrorKind, rule_name: str | None, reason: str):
        """
        Initialize the exception.

        Params:
            kind: The kind of definition failure
            rule_name: The rule that triggered the failure, if any
            reason: Why the definition is rejected
        """
        self.kind = kind
        self.rule_name = rule_name
        self.reason = reason
        if rule_name is None:
            super().__init__(f"Invalid rule set: {reason}")
        else:
            super().__init__(f"Invalid rule '{rule_name}': {reason}")


class CommandLineValidationError(CmdTreeError):
    """Raised when an invalid validation result is unwrapped."""

    def __init__(self, diagnostics: "list[Diagnostic]"):
        """
        Initialize the exception.

        Params:
            diagnostics: Every problem found in the command line
        """
        self.diagnostics = list(diagnostics)
        issue_summary = "; ".join(d.message for d in self.diagnostics)
        super().__init__(
            f"Command line has {len(self.diagnostics)} problem(s): {issue_summary}"
        )
