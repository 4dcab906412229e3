"""
cmdtree checking components.

This package provides the checker that validates parsed command lines
against a grammar, and the diagnostics it reports.
"""

from cmdtree.checking.checker import CmdLineChecker, check
from cmdtree.checking.diagnostics import (
    MESSAGE_TEMPLATES,
    Diagnostic,
    DiagnosticKind,
    Invalid,
    Valid,
    ValidationResult,
)

__all__ = [
    "CmdLineChecker",
    "Diagnostic",
    "DiagnosticKind",
    "Invalid",
    "MESSAGE_TEMPLATES",
    "Valid",
    "ValidationResult",
    "check",
]
