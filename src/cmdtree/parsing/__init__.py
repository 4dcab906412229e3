"""
cmdtree parsing components.

This package provides the lexer, the AST node model, and the parser that
turns raw command-line text into a positioned tree.
"""

from cmdtree.parsing.ast import (
    AstNode,
    CommandNode,
    Node,
    OptionNode,
    RootNode,
    ValueNode,
    walk,
)
from cmdtree.parsing.lexer import Lexer, Token, TokenKind, tokenize
from cmdtree.parsing.parser import CmdLineParser, parse

__all__ = [
    "AstNode",
    "CmdLineParser",
    "CommandNode",
    "Lexer",
    "Node",
    "OptionNode",
    "RootNode",
    "Token",
    "TokenKind",
    "ValueNode",
    "parse",
    "tokenize",
    "walk",
]
