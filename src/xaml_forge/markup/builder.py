"""Tree builder: element events to a validated ControlNode tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from xaml_forge.errors import (
    ContentModelError,
    MarkupSyntaxError,
    MismatchedTagError,
    ParseError,
    SourcePosition,
    TruncatedInputError,
)
from xaml_forge.markup.events import (
    CloseTag,
    EmptyTag,
    EndOfInput,
    MarkupEvent,
    OpenTag,
)
from xaml_forge.markup.nodes import ControlNode
from xaml_forge.markup.tokenizer import iter_events
from xaml_forge.schema.registry import (
    ELEMENT_REGISTRY,
    ContentModel,
    ElementRegistry,
    ElementSchema,
)
from xaml_forge.schema.types import PropertyValue

logger = logging.getLogger(__name__)


@dataclass
class _PendingNode:
    """An open element still collecting children."""

    schema: ElementSchema
    properties: dict[str, PropertyValue]
    position: SourcePosition | None
    children: list[ControlNode] = field(default_factory=list)


class TreeBuilder:
    """Assembles markup events into a single validated ControlNode.

    Each element name is resolved through the registry, each attribute is
    parsed with the type its element declares, and every node's children
    are checked against its content model when the node completes. The
    first problem found is raised; no partial tree is ever returned.
    """

    def __init__(self, registry: ElementRegistry = ELEMENT_REGISTRY):
        self.registry = registry

    def build(self, events: Iterable[MarkupEvent]) -> ControlNode:
        """Build the tree for one document.

        Args:
            events: Events of exactly one document, as produced by ``iter_events``.

        Returns:
            The root ControlNode.

        Raises:
            ParseError: For the first syntax, schema or grammar error.
        """
        stack: list[_PendingNode] = []
        root: ControlNode | None = None
        end_position: SourcePosition | None = None

        for event in self._events(events):
            if isinstance(event, (OpenTag, EmptyTag)):
                if root is not None:
                    raise MarkupSyntaxError(
                        f"Unexpected element <{event.name}> after the root element",
                        event.position,
                    )
                pending = self._start(event)
                if isinstance(event, OpenTag):
                    stack.append(pending)
                    continue
                node = self._finish(pending)
            elif isinstance(event, CloseTag):
                if not stack:
                    raise MarkupSyntaxError(
                        f"Close tag </{event.name}> has no matching open tag",
                        event.position,
                    )
                pending = stack.pop()
                if pending.schema.name != event.name:
                    raise MismatchedTagError(pending.schema.name, event.name, event.position)
                node = self._finish(pending)
            elif isinstance(event, EndOfInput):
                end_position = event.position
                break
            else:
                raise TypeError(f"Unexpected markup event: {event!r}")

            if stack:
                stack[-1].children.append(node)
            else:
                root = node

        if stack:
            raise TruncatedInputError(
                f"Unexpected end of input: <{stack[-1].schema.name}> is not closed",
                end_position,
            )
        if root is None:
            raise TruncatedInputError("No root element found", end_position)

        logger.debug("Built <%s> tree with %d nodes", root.name, root.node_count)
        return root

    def _events(self, events: Iterable[MarkupEvent]) -> Iterator[MarkupEvent]:
        # A syntax error inside a start tag comes after the element and
        # attribute names read before it.
        iterator = iter(events)
        while True:
            try:
                event = next(iterator)
            except StopIteration:
                return
            except MarkupSyntaxError as exc:
                if exc.incomplete_tag is not None:
                    self._start(exc.incomplete_tag)
                raise
            yield event

    def _start(self, event: OpenTag | EmptyTag) -> _PendingNode:
        try:
            schema = self.registry.get_by_name(event.name)
        except ParseError as exc:
            raise exc.locate(event.position)

        properties: dict[str, PropertyValue] = {}
        for attribute in event.attributes:
            position = attribute.position or event.position
            try:
                spec = schema.attribute(attribute.name)
                properties[attribute.name] = spec.parse(attribute.value)
            except ParseError as exc:
                raise exc.locate(position)
        return _PendingNode(schema, properties, event.position)

    def _finish(self, pending: _PendingNode) -> ControlNode:
        schema = pending.schema
        children = pending.children
        if children:
            if schema.content is ContentModel.EMPTY:
                raise ContentModelError(
                    schema.name, "element does not accept child elements", children[0].position
                )
            if schema.content is ContentModel.SINGLE and len(children) > 1:
                raise ContentModelError(
                    schema.name, "element accepts a single child element", children[1].position
                )
            for child in children:
                if not schema.accepts_child(child.kind):
                    raise ContentModelError(
                        schema.name, f"<{child.name}> is not an allowed child", child.position
                    )
        return ControlNode(
            kind=schema.kind,
            properties=pending.properties,
            children=tuple(children),
            position=pending.position,
        )


def build_tree(events: Iterable[MarkupEvent], registry: ElementRegistry = ELEMENT_REGISTRY) -> ControlNode:
    """Build a ControlNode tree from an event stream."""
    return TreeBuilder(registry).build(events)


def parse_markup(markup: str, registry: ElementRegistry = ELEMENT_REGISTRY) -> ControlNode:
    """Tokenize and build ``markup`` into a validated ControlNode tree."""
    return TreeBuilder(registry).build(iter_events(markup))
