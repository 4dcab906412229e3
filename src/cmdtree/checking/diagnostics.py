"""
Diagnostics and validation results produced by the checker.

A diagnostic reports one rule violation with its kind, a readable message and
the span of the offending text. Diagnostics are collected, never raised; the
caller receives them all at once inside an Invalid result.
"""

from dataclasses import dataclass
from enum import Enum

from inflection import humanize

from cmdtree.core.span import Span, highlight
from cmdtree.exceptions.core import CommandLineValidationError
from cmdtree.parsing.ast import RootNode


class DiagnosticKind(Enum):
    """Kinds of rule violation found while checking a command line."""

    UNKNOWN_COMMAND = "unknown_command"
    UNEXPECTED_COMMAND = "unexpected_command"
    MISSING_COMMAND = "missing_command"
    DUPLICATE_COMMAND = "duplicate_command"
    UNKNOWN_OPTION = "unknown_option"
    MISSING_OPTION = "missing_option"
    DUPLICATE_OPTION = "duplicate_option"
    MISSING_OPTION_VALUE = "missing_option_value"
    UNEXPECTED_OPTION_VALUE = "unexpected_option_value"

    @property
    def label(self) -> str:
        """Short title, e.g. 'Missing option value'."""
        return humanize(self.value)

    @property
    def template(self) -> str:
        """Message template filled with the diagnostic's parameters."""
        return MESSAGE_TEMPLATES[self]


MESSAGE_TEMPLATES: dict[DiagnosticKind, str] = {
    DiagnosticKind.UNKNOWN_COMMAND: "Unknown command '{name}'",
    DiagnosticKind.UNEXPECTED_COMMAND: "Command '{name}' is not allowed here",
    DiagnosticKind.MISSING_COMMAND: "Missing required command '{name}'",
    DiagnosticKind.DUPLICATE_COMMAND: "Command '{name}' is given for the {ordinal} time, {allowed} allowed",
    DiagnosticKind.UNKNOWN_OPTION: "Unknown option '{name}'",
    DiagnosticKind.MISSING_OPTION: "Missing required option '{name}'",
    DiagnosticKind.DUPLICATE_OPTION: "Option '{name}' is given for the {ordinal} time",
    DiagnosticKind.MISSING_OPTION_VALUE: "Option '{name}' requires a value",
    DiagnosticKind.UNEXPECTED_OPTION_VALUE: "Option '{name}' does not take a value",
}


@dataclass(frozen=True)
class Diagnostic:
    """
    One rule violation.

    Params:
        kind: What went wrong
        message: Human-readable description
        span: Location of the offending text, or of the enclosing node for
            missing elements
        name: Command or option name concerned, None for problems with a
            command set as a whole
    """

    kind: DiagnosticKind
    message: str
    span: Span
    name: str | None = None

    @classmethod
    def create(
        cls,
        kind: DiagnosticKind,
        span: Span,
        name: str | None = None,
        template: str | None = None,
        **params,
    ) -> "Diagnostic":
        """
        Build a diagnostic with its message filled from a template.

        Params:
            kind: What went wrong
            span: Location to report
            name: Command or option name concerned
            template: Message template overriding the kind's default
            **params: Extra template parameters

        Returns:
            The new diagnostic
        """
        message = (template or kind.template).format(name=name, **params)
        return cls(kind=kind, message=message, span=span, name=name)

    def render(self, text: str) -> str:
        """
        Format the diagnostic with a caret excerpt of the source text.

        Params:
            text: The command line the diagnostic was produced for
        """
        return f"{self.kind.label}: {self.message}\n{highlight(text, self.span)}"


@dataclass(frozen=True)
class Valid:
    """The command line satisfies every rule."""

    root: RootNode

    @property
    def is_valid(self) -> bool:
        return True

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return ()

    def unwrap(self) -> RootNode:
        """Return the validated root node."""
        return self.root


@dataclass(frozen=True)
class Invalid:
    """The command line violates at least one rule."""

    diagnostics: tuple[Diagnostic, ...]

    @property
    def is_valid(self) -> bool:
        return False

    @property
    def kinds(self) -> list[DiagnosticKind]:
        return [diagnostic.kind for diagnostic in self.diagnostics]

    def unwrap(self) -> RootNode:
        """
        Raise the collected diagnostics as one exception.

        Raises:
            CommandLineValidationError: Always
        """
        raise CommandLineValidationError(list(self.diagnostics))

    def render(self, text: str) -> str:
        """Format every diagnostic, separated by blank lines."""
        return "\n\n".join(diagnostic.render(text) for diagnostic in self.diagnostics)


ValidationResult = Valid | Invalid
