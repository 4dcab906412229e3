"""
Abstract syntax tree for parsed command lines.

Nodes are immutable and carry the source text plus their own span. The node
set is closed: RootNode, ValueNode, CommandNode and OptionNode. Construction
checks that each node fits the text, contains its children, and that the
children are ordered and non-overlapping.
"""

from collections.abc import Iterator
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator

from cmdtree.core.span import Span
from cmdtree.core.types import NodeKind, OptionPrefix


class AstNode(BaseModel):
    """
    Base class for all command line AST nodes.

    Params:
        text: The full source text the node was parsed from (shared, read-only)
        span: Location of the node in the source text
    """

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[NodeKind]
    text: str
    span: Span

    @property
    def children(self) -> tuple["AstNode", ...]:
        """Direct child nodes in source order."""
        return ()

    @property
    def source(self) -> str:
        """The exact source substring this node was parsed from."""
        return self.span.extract(self.text)

    @model_validator(mode="after")
    def _check_spans(self) -> "AstNode":
        if not self.span.fits(self.text):
            raise ValueError(
                f"{self.kind.value} span {self.span} exceeds text of length {len(self.text)}"
            )

        previous = None
        for child in self.children:
            if not self.span.contains(child.span):
                raise ValueError(
                    f"{child.kind.value} span {child.span} is outside {self.kind.value} span {self.span}"
                )
            if previous is not None and child.span.position < previous.span.end:
                raise ValueError(
                    f"{child.kind.value} span {child.span} overlaps or precedes {previous.span}"
                )
            previous = child

        for sequence in self._sequences():
            positions = [node.span.position for node in sequence]
            if positions != sorted(positions):
                raise ValueError(f"{self.kind.value} children are not in source order")
        return self

    def _sequences(self) -> tuple[tuple["AstNode", ...], ...]:
        return ()


class ValueNode(AstNode):
    """A quoted or unquoted literal value."""

    kind: ClassVar[NodeKind] = NodeKind.VALUE
    value: str
    quoted: bool = False


class OptionNode(AstNode):
    """
    An option with an optional value.

    Params:
        name: Option name without prefix
        name_span: Location of the name
        prefix: Prefix form the option was written with
        value: Attached or consumed value, if any
    """

    kind: ClassVar[NodeKind] = NodeKind.OPTION
    name: str
    name_span: Span
    prefix: OptionPrefix = OptionPrefix.LONG
    value: ValueNode | None = None

    @property
    def children(self) -> tuple[AstNode, ...]:
        return (self.value,) if self.value is not None else ()

    @property
    def has_value(self) -> bool:
        """Check if the option carries a value."""
        return self.value is not None


class CommandNode(AstNode):
    """
    A command with nested sub-commands and options.

    Params:
        name: Command name
        name_span: Location of the name
        commands: Sub-commands in source order
        options: Options in source order
    """

    kind: ClassVar[NodeKind] = NodeKind.COMMAND
    name: str
    name_span: Span
    commands: tuple["CommandNode", ...] = ()
    options: tuple[OptionNode, ...] = ()

    @property
    def children(self) -> tuple[AstNode, ...]:
        return _in_source_order(self.options, self.commands)

    def _sequences(self) -> tuple[tuple[AstNode, ...], ...]:
        return (self.commands, self.options)


class RootNode(AstNode):
    """
    Root of the command line AST.

    Params:
        program_name: Program name value node
        commands: Top-level commands in source order
        options: Top-level options in source order
    """

    kind: ClassVar[NodeKind] = NodeKind.ROOT
    program_name: ValueNode
    commands: tuple[CommandNode, ...] = ()
    options: tuple[OptionNode, ...] = ()

    @property
    def children(self) -> tuple[AstNode, ...]:
        return (self.program_name, *_in_source_order(self.options, self.commands))

    def _sequences(self) -> tuple[tuple[AstNode, ...], ...]:
        return (self.commands, self.options)


Node = RootNode | CommandNode | OptionNode | ValueNode


def _in_source_order(*groups: tuple[AstNode, ...]) -> tuple[AstNode, ...]:
    merged = [node for group in groups for node in group]
    return tuple(sorted(merged, key=lambda node: node.span.position))


def walk(node: AstNode) -> Iterator[AstNode]:
    """
    Yield a node and all its descendants, depth first in source order.

    Params:
        node: The node to start from
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
