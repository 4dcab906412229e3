"""
Command quantifiers for the cmdtree grammar model.
"""

from enum import Enum


class CommandQuantifier(Enum):
    """How many times a command, or a set of sibling commands, may occur."""

    ZERO = "zero"
    ZERO_OR_ONE = "zero_or_one"
    ONE = "one"
    ONE_OR_MULTIPLE = "one_or_multiple"
    ZERO_OR_MULTIPLE = "zero_or_multiple"

    @property
    def min_count(self) -> int:
        """Fewest occurrences that satisfy the quantifier."""
        return _BOUNDS[self][0]

    @property
    def max_count(self) -> int | None:
        """Most occurrences that satisfy the quantifier, None when unbounded."""
        return _BOUNDS[self][1]

    def is_satisfied(self, count: int) -> bool:
        """
        Check whether an occurrence count satisfies the quantifier.

        Params:
            count: Number of occurrences

        Returns:
            True if count lies within the quantifier's bounds
        """
        if count < self.min_count:
            return False
        return self.max_count is None or count <= self.max_count

    def describe(self) -> str:
        """Human-readable bounds, e.g. 'at least one'."""
        return _DESCRIPTIONS[self]


_BOUNDS: dict[CommandQuantifier, tuple[int, int | None]] = {
    CommandQuantifier.ZERO: (0, 0),
    CommandQuantifier.ZERO_OR_ONE: (0, 1),
    CommandQuantifier.ONE: (1, 1),
    CommandQuantifier.ONE_OR_MULTIPLE: (1, None),
    CommandQuantifier.ZERO_OR_MULTIPLE: (0, None),
}

_DESCRIPTIONS: dict[CommandQuantifier, str] = {
    CommandQuantifier.ZERO: "none",
    CommandQuantifier.ZERO_OR_ONE: "at most one",
    CommandQuantifier.ONE: "exactly one",
    CommandQuantifier.ONE_OR_MULTIPLE: "at least one",
    CommandQuantifier.ZERO_OR_MULTIPLE: "any number",
}
