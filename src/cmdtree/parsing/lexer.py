"""
Lexical scanner for command lines.

Splits raw command-line text into program name, command, option and value
tokens. Whitespace outside quotes separates tokens and is never emitted.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from cmdtree.core.settings import DEFAULT_SETTINGS, ParserSettings
from cmdtree.core.span import Span
from cmdtree.core.types import OptionPrefix, is_command_name, is_option_name
from cmdtree.exceptions.core import LexError, LexErrorKind

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    """Type of token produced by the lexer."""

    PROGRAM_NAME = "program_name"
    COMMAND = "command"
    OPTION = "option"
    VALUE = "value"


@dataclass(frozen=True)
class Token:
    """
    A lexical token with its source location.

    Params:
        kind: The kind of token
        span: Location of the token in the source text
        text: Unescaped value for value-like tokens, the name for options
        quoted: True if the token was delimited by the quote character
        prefix: Option prefix form, options only
        separator: Character attaching a value to the option, if any
    """

    kind: TokenKind
    span: Span
    text: str
    quoted: bool = False
    prefix: OptionPrefix | None = None
    separator: str | None = None

    @property
    def has_attached_value(self) -> bool:
        """Check if an attached value token follows this option token."""
        return self.separator is not None

    @property
    def name_span(self) -> Span:
        """Span of the option name without prefix and separator."""
        if self.prefix is None:
            return self.span
        return Span(self.span.position + len(self.prefix.value), len(self.text))


class Lexer:
    """
    Restartable token stream over a command line.

    Each iteration scans the text from the beginning, so the same lexer can
    be traversed any number of times. Scanning is lazy: a lexical error is
    raised when the offending token is reached.
    """

    def __init__(self, text: str, settings: ParserSettings | None = None):
        self.text = text
        self.settings = settings or DEFAULT_SETTINGS

    def __iter__(self) -> Iterator[Token]:
        return self._scan()

    def _scan(self) -> Iterator[Token]:
        text = self.text
        position = self._skip_whitespace(0)

        if position < len(text):
            token = self._scan_value(position, TokenKind.PROGRAM_NAME)
            yield token
            position = self._skip_whitespace(token.span.end)

        while position < len(text):
            if text[position] == self.settings.quote_char:
                token = self._scan_quoted(position, TokenKind.VALUE)
                yield token
            elif self._starts_option(position):
                option, value = self._scan_option(position)
                yield option
                token = option
                if value is not None:
                    yield value
                    token = value
            else:
                token = self._scan_word(position)
                yield token
            position = self._skip_whitespace(token.span.end)

    def _skip_whitespace(self, position: int) -> int:
        while position < len(self.text) and self.text[position].isspace():
            position += 1
        return position

    def _word_end(self, position: int, stop: str = "") -> int:
        """Find the end of a bare word; words end at whitespace or the quote character."""
        stop += self.settings.quote_char
        while position < len(self.text):
            char = self.text[position]
            if char.isspace() or char in stop:
                break
            position += 1
        return position

    def _starts_option(self, position: int) -> bool:
        char = self.text[position]
        if char == "-":
            # '-5' is a negative number, not an option
            return not self.text[position + 1 : position + 2].isdigit()
        return char == "/" and self.settings.allow_slash_options

    def _scan_value(self, position: int, kind: TokenKind) -> Token:
        """Scan a quoted value or a bare run of non-whitespace characters."""
        if self.text[position] == self.settings.quote_char:
            return self._scan_quoted(position, kind)
        end = self._word_end(position)
        self._reject_glued_quote(end)
        return Token(kind, Span.between(position, end), self.text[position:end])

    def _scan_quoted(self, start: int, kind: TokenKind) -> Token:
        """
        Scan a quote-delimited value starting at the opening quote.

        Raises:
            LexError: If the closing quote is missing or is directly followed
                by more text
        """
        end, value = self._closing_quote(start)
        after = end + 1
        if after < len(self.text) and not self.text[after].isspace():
            raise LexError(
                LexErrorKind.MISPLACED_QUOTE,
                "Closing quotation must be followed by whitespace",
                self.text,
                Span(end, 1),
            )
        return Token(kind, Span.between(start, after), value, quoted=True)

    def _closing_quote(self, start: int) -> tuple[int, str]:
        """
        Find the quote closing the one at start.

        A doubled quote character inside the value stands for one literal
        quote character.

        Returns:
            Offset of the closing quote and the unescaped value

        Raises:
            LexError: If the closing quote is missing
        """
        quote = self.settings.quote_char
        text = self.text
        chars = []
        position = start + 1

        while position < len(text):
            char = text[position]
            if char == quote:
                if position + 1 < len(text) and text[position + 1] == quote:
                    chars.append(quote)
                    position += 2
                    continue
                return position, "".join(chars)
            chars.append(char)
            position += 1

        raise LexError(
            LexErrorKind.UNTERMINATED_QUOTE,
            f"Unterminated quotation starting at position {start}",
            text,
            Span.between(start, len(text)),
        )

    def _reject_glued_quote(self, position: int) -> None:
        """
        Reject a quote character that directly follows a bare word.

        Raises:
            LexError: UNTERMINATED_QUOTE if the quote is never closed,
                MISPLACED_QUOTE otherwise
        """
        if position >= len(self.text) or self.text[position] != self.settings.quote_char:
            return
        self._closing_quote(position)
        raise LexError(
            LexErrorKind.MISPLACED_QUOTE,
            "Quotation must be separated from the preceding text by whitespace",
            self.text,
            Span(position, 1),
        )

    def _scan_option(self, start: int) -> tuple[Token, Token | None]:
        """
        Scan an option and its attached value, if any.

        Raises:
            LexError: If the option has no valid name or a separator has no value,
                or a quote character is glued to the option
        """
        text = self.text
        if text.startswith("--", start):
            prefix = OptionPrefix.LONG
        elif text[start] == "-":
            prefix = OptionPrefix.SHORT
        else:
            prefix = OptionPrefix.SLASH

        name_start = start + len(prefix.value)
        name_end = self._word_end(name_start, stop="".join(self.settings.value_separators))
        name = text[name_start:name_end]

        if not name:
            raise LexError(
                LexErrorKind.MALFORMED_OPTION,
                f"Option prefix '{prefix.value}' is not followed by a name",
                text,
                Span.between(start, self._word_end(start)),
            )
        if not is_option_name(name):
            raise LexError(
                LexErrorKind.MALFORMED_OPTION,
                f"Invalid option name '{name}'",
                text,
                Span.between(start, name_end),
            )
        self._reject_glued_quote(name_end)

        at_separator = name_end < len(text) and self.settings.is_separator(text[name_end])
        if not at_separator:
            token = Token(TokenKind.OPTION, Span.between(start, name_end), name, prefix=prefix)
            return token, None

        separator = text[name_end]
        value_start = name_end + 1
        if value_start >= len(text) or text[value_start].isspace():
            raise LexError(
                LexErrorKind.MALFORMED_OPTION,
                f"Option '{name}' has no value after '{separator}'",
                text,
                Span.between(start, value_start),
            )

        token = Token(
            TokenKind.OPTION,
            Span.between(start, value_start),
            name,
            prefix=prefix,
            separator=separator,
        )
        return token, self._scan_value(value_start, TokenKind.VALUE)

    def _scan_word(self, start: int) -> Token:
        end = self._word_end(start)
        self._reject_glued_quote(end)
        word = self.text[start:end]
        kind = TokenKind.COMMAND if is_command_name(word) else TokenKind.VALUE
        return Token(kind, Span.between(start, end), word)


def tokenize(text: str, settings: ParserSettings | None = None) -> list[Token]:
    """
    Tokenize a command line into a list of tokens.

    Params:
        text: The raw command line, program name included
        settings: Optional lexer configuration

    Returns:
        All tokens in source order

    Raises:
        LexError: On an unterminated quotation or a malformed option
    """
    tokens = list(Lexer(text, settings))
    logger.debug("Tokenized %d characters into %d tokens", len(text), len(tokens))
    return tokens
