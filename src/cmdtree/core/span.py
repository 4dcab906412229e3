"""
Source span utilities for the cmdtree framework.

A span locates a substring of the original command line by position and
length. Every token and AST node carries one so that errors and diagnostics
can point at the exact text that caused them.
"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Span:
    """
    A (position, length) pair over the original input text.

    Params:
        position: Zero-based offset of the first character
        length: Number of characters covered
    """

    position: int
    length: int

    def __post_init__(self):
        """Reject negative coordinates."""
        if self.position < 0:
            raise ValueError(f"Span position must be non-negative, got {self.position}")
        if self.length < 0:
            raise ValueError(f"Span length must be non-negative, got {self.length}")

    def __str__(self) -> str:
        return f"[{self.position}:{self.end}]"

    @property
    def end(self) -> int:
        """Offset one past the last covered character."""
        return self.position + self.length

    @property
    def slice(self) -> slice:
        """Slice selecting the covered characters from the text."""
        return slice(self.position, self.end)

    def contains(self, other: "Span") -> bool:
        """Check whether another span lies entirely within this one."""
        return self.position <= other.position and other.end <= self.end

    def fits(self, text: str) -> bool:
        """Check whether this span lies within the given text."""
        return self.end <= len(text)

    def extract(self, text: str) -> str:
        """Return the substring of text covered by this span."""
        return text[self.slice]

    @classmethod
    def between(cls, start: int, end: int) -> "Span":
        """Create a span from start and end offsets."""
        return cls(position=start, length=end - start)

    @classmethod
    def cover(cls, first: "Span", last: "Span") -> "Span":
        """Create the smallest span containing both spans."""
        start = min(first.position, last.position)
        return cls.between(start, max(first.end, last.end))


def highlight(text: str, span: Span, marker: str = "^") -> str:
    """
    Render the line of text holding a span with a caret underline beneath it.

    Multi-line input is reduced to the line where the span starts; the
    underline is clipped to that line. Zero-length spans get a single caret.

    Params:
        text: The full source text
        span: The span to highlight
        marker: Character used for the underline

    Returns:
        Two lines: the source line and the underline

    Examples:
        highlight("tool --x", Span(5, 3)) -> "tool --x\\n     ^^^"
    """
    line_start = text.rfind("\n", 0, span.position) + 1
    line_end = text.find("\n", span.position)
    if line_end == -1:
        line_end = len(text)

    line = text[line_start:line_end]
    column = span.position - line_start
    width = max(1, min(span.end, line_end) - span.position)
    return f"{line}\n{' ' * column}{marker * width}"
