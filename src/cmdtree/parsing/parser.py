"""
Parser building command line ASTs from the token stream.

This module turns the lexer's tokens into a single RootNode in one forward
pass with one token of lookahead. No grammar is consulted: the parser only
builds a structurally well-formed tree.

Token grammar:
    cmdline := PROGRAM_NAME option* command*
    command := COMMAND ( command | option+ )?

Consecutive command tokens nest (``tool group action``). Options after a
command belong to the innermost open command; a command token that follows
those options becomes a sibling of that command.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from cmdtree.core.settings import DEFAULT_SETTINGS, ParserSettings
from cmdtree.core.span import Span
from cmdtree.exceptions.core import ParseError, ParseErrorKind
from cmdtree.parsing.ast import CommandNode, OptionNode, RootNode, ValueNode
from cmdtree.parsing.lexer import Lexer, Token, TokenKind

logger = logging.getLogger(__name__)


@dataclass
class _OpenCommand:
    """A command whose children are still being collected."""

    token: Token
    commands: list[CommandNode] = field(default_factory=list)
    options: list[OptionNode] = field(default_factory=list)


class _TokenCursor:
    """One-token lookahead over a lazy token iterator."""

    def __init__(self, tokens: Iterator[Token]):
        self._tokens = tokens
        self._next = next(self._tokens, None)

    def peek(self) -> Token | None:
        return self._next

    def advance(self) -> Token:
        token = self._next
        self._next = next(self._tokens, None)
        return token


class CmdLineParser:
    """Parser for raw command lines."""

    def __init__(self, settings: ParserSettings | None = None):
        self.settings = settings or DEFAULT_SETTINGS

    def parse(self, text: str) -> RootNode:
        """
        Parse a command line into its AST.

        Params:
            text: The raw command line, program name included

        Returns:
            The root node spanning the whole input

        Raises:
            LexError: On an unterminated quotation or a malformed option
            ParseError: On an empty command line, a value in command position,
                or sub-commands nested deeper than the configured maximum
        """
        cursor = _TokenCursor(iter(Lexer(text, self.settings)))

        first = cursor.peek()
        if first is None:
            raise ParseError(
                ParseErrorKind.UNEXPECTED_END,
                "Command line is empty, expected a program name",
                text,
                Span(len(text), 0),
            )
        program_name = self._value_node(text, cursor.advance())

        root_options = []
        while self._at(cursor, TokenKind.OPTION):
            root_options.append(self._parse_option(text, cursor))

        # Stack of open commands, outermost first; siblings at depth 0 go to the root
        root_commands: list[CommandNode] = []
        stack: list[_OpenCommand] = []

        while cursor.peek() is not None:
            token = cursor.peek()
            if token.kind == TokenKind.COMMAND:
                cursor.advance()
                if stack and stack[-1].options:
                    self._close(text, stack, root_commands)
                if len(stack) >= self.settings.max_depth:
                    raise ParseError(
                        ParseErrorKind.NESTING_TOO_DEEP,
                        f"Command '{token.text}' exceeds the maximum nesting depth of {self.settings.max_depth}",
                        text,
                        token.span,
                    )
                stack.append(_OpenCommand(token))
            elif token.kind == TokenKind.OPTION:
                stack[-1].options.append(self._parse_option(text, cursor))
            else:
                raise ParseError(
                    ParseErrorKind.UNEXPECTED_TOKEN,
                    f"Unexpected value '{token.text}', expected a command or an option",
                    text,
                    token.span,
                )

        while stack:
            self._close(text, stack, root_commands)

        root = RootNode(
            text=text,
            span=Span(0, len(text)),
            program_name=program_name,
            commands=tuple(root_commands),
            options=tuple(root_options),
        )
        logger.debug(
            "Parsed command line with %d commands and %d options at root",
            len(root.commands),
            len(root.options),
        )
        return root

    def _at(self, cursor: _TokenCursor, kind: TokenKind) -> bool:
        token = cursor.peek()
        return token is not None and token.kind == kind

    def _close(
        self, text: str, stack: list[_OpenCommand], root_commands: list[CommandNode]
    ) -> None:
        """Finish the innermost open command and attach it to its parent."""
        current = stack.pop()
        node = self._command_node(text, current)
        if stack:
            stack[-1].commands.append(node)
        else:
            root_commands.append(node)

    def _command_node(self, text: str, current: _OpenCommand) -> CommandNode:
        token = current.token
        last_span = token.span
        for child in (*current.options, *current.commands):
            if child.span.end > last_span.end:
                last_span = child.span

        return CommandNode(
            text=text,
            span=Span.cover(token.span, last_span),
            name=token.text,
            name_span=token.span,
            commands=tuple(current.commands),
            options=tuple(current.options),
        )

    def _parse_option(self, text: str, cursor: _TokenCursor) -> OptionNode:
        token = cursor.advance()
        value = None

        if token.has_attached_value:
            value = self._value_node(text, cursor.advance())
        elif self.settings.consume_next_value:
            following = cursor.peek()
            if following is not None and following.kind in (
                TokenKind.VALUE,
                TokenKind.COMMAND,
            ):
                value = self._value_node(text, cursor.advance())

        span = token.span if value is None else Span.cover(token.span, value.span)
        return OptionNode(
            text=text,
            span=span,
            name=token.text,
            name_span=token.name_span,
            prefix=token.prefix,
            value=value,
        )

    def _value_node(self, text: str, token: Token) -> ValueNode:
        return ValueNode(text=text, span=token.span, value=token.text, quoted=token.quoted)


def parse(text: str, settings: ParserSettings | None = None) -> RootNode:
    """
    Convenience function to parse a command line.

    Params:
        text: The raw command line
        settings: Optional parser configuration

    Returns:
        The root node of the AST

    Raises:
        LexError: If the text cannot be tokenized
        ParseError: If the tokens do not form a command line
    """
    parser = CmdLineParser(settings)
    return parser.parse(text)
