"""
Parser configuration for the cmdtree framework.

Settings are validated once at construction and are immutable afterwards, so
a single instance can be shared by every lexer and parser in a program.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_QUOTE_CHAR = '"'
DEFAULT_VALUE_SEPARATORS = ("=", ":")
DEFAULT_MAX_DEPTH = 32

# Characters that would make option detection ambiguous
RESERVED_CHARACTERS = frozenset({"-", "/"})


class ParserSettings(BaseModel):
    """
    Lexer and parser configuration.

    Params:
        quote_char: Character delimiting opaque values
        value_separators: Characters attaching a value to an option name
        allow_slash_options: Accept '/name' as an option in addition to '-' and '--'
        consume_next_value: Let a value-less option take the following word as its value.
            A dash followed by a digit (e.g. -5) is read as a value, so negative
            numbers can be consumed; option names never start with a digit
        max_depth: Maximum nesting depth of sub-commands
    """

    model_config = ConfigDict(frozen=True)

    quote_char: str = DEFAULT_QUOTE_CHAR
    value_separators: tuple[str, ...] = DEFAULT_VALUE_SEPARATORS
    allow_slash_options: bool = False
    consume_next_value: bool = False
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)

    @field_validator("quote_char")
    @classmethod
    def _validate_quote_char(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"quote_char must be a single character, got {value!r}")
        if value.isspace() or value in RESERVED_CHARACTERS:
            raise ValueError(f"quote_char cannot be whitespace, '-' or '/', got {value!r}")
        return value

    @field_validator("value_separators")
    @classmethod
    def _validate_value_separators(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for separator in value:
            if len(separator) != 1:
                raise ValueError(
                    f"value separators must be single characters, got {separator!r}"
                )
            if separator.isspace() or separator.isalnum() or separator in RESERVED_CHARACTERS:
                raise ValueError(f"Invalid value separator {separator!r}")
        return value

    @model_validator(mode="after")
    def _validate_quote_not_separator(self) -> "ParserSettings":
        if self.quote_char in self.value_separators:
            raise ValueError(
                f"quote_char {self.quote_char!r} cannot also be a value separator"
            )
        return self

    def is_separator(self, char: str) -> bool:
        """Check if a character attaches a value to an option."""
        return char in self.value_separators


DEFAULT_SETTINGS = ParserSettings()
