"""
cmdtree - A command-line grammar engine

cmdtree parses raw command-line text into a positioned syntax tree and checks
that tree against declarative command and option rules, reporting every
violation with the span of the offending text.
"""

from importlib.metadata import version

from cmdtree.checking import (
    CmdLineChecker,
    Diagnostic,
    DiagnosticKind,
    Invalid,
    Valid,
    ValidationResult,
    check,
)
from cmdtree.core import ParserSettings, Span
from cmdtree.exceptions import (
    CmdTreeError,
    CommandLineValidationError,
    LexError,
    ParseError,
    RuleDefinitionError,
)
from cmdtree.parsing import CmdLineParser, RootNode, parse
from cmdtree.rules import (
    CmdLineRules,
    CommandQuantifier,
    CommandRule,
    OptionRule,
    render_usage,
)

__version__ = version("cmdtree")


def validate(
    text: str, rules: CmdLineRules, settings: ParserSettings | None = None
) -> ValidationResult:
    """
    Parse a command line and check it against a rule set.

    Params:
        text: The raw command line, program name included
        rules: The grammar to check against
        settings: Optional parser configuration

    Returns:
        Valid or Invalid validation result

    Raises:
        LexError: If the text cannot be tokenized
        ParseError: If the tokens do not form a command line
    """
    return check(parse(text, settings), rules)


__all__ = [
    "__version__",
    "CmdLineChecker",
    "CmdLineParser",
    "CmdLineRules",
    "CmdTreeError",
    "CommandLineValidationError",
    "CommandQuantifier",
    "CommandRule",
    "Diagnostic",
    "DiagnosticKind",
    "Invalid",
    "LexError",
    "OptionRule",
    "ParseError",
    "ParserSettings",
    "RootNode",
    "RuleDefinitionError",
    "Span",
    "Valid",
    "ValidationResult",
    "check",
    "parse",
    "render_usage",
    "validate",
]
