"""Runtime interpretation backend.

Walks a validated ControlNode tree and drives a UiBackend directly, in the
same call order the generated construction code uses.
"""

from __future__ import annotations

import logging

from xaml_forge.backends.base import BackendError, ControlHandle, UiBackend
from xaml_forge.errors import BackendConstructionError
from xaml_forge.markup.nodes import ControlNode

logger = logging.getLogger(__name__)


class Interpreter:
    """Builds live controls for a ControlNode tree through a UiBackend."""

    def __init__(self, backend: UiBackend):
        self.backend = backend
        self.calls = 0

    def build(self, node: ControlNode) -> ControlHandle:
        """Construct ``node`` and its subtree, returning the root handle.

        Each control is constructed and given its properties before its
        children are built, and is appended to its parent once its own
        subtree is complete.

        Raises:
            BackendConstructionError: At the first call the backend rejects.
                Nothing after the failing call is applied.
        """
        root_handle = self._open(node)
        # (node, handle, children still to build) for every open control
        stack = [(node, root_handle, iter(node.children))]
        while stack:
            parent, handle, children = stack[-1]
            child = next(children, None)
            if child is not None:
                stack.append((child, self._open(child), iter(child.children)))
                continue
            stack.pop()
            if stack:
                self._append(stack[-1][0], stack[-1][1], parent, handle)

        logger.debug("Interpreted <%s> tree with %d backend calls", node.name, self.calls)
        return root_handle

    def _open(self, node: ControlNode) -> ControlHandle:
        backend = self.backend
        try:
            handle = backend.construct(node.kind)
        except BackendError as exc:
            raise BackendConstructionError("construct", node.name, str(exc)) from exc
        self.calls += 1

        for name, value in node.properties.items():
            try:
                backend.set_property(handle, name, value)
            except BackendError as exc:
                raise BackendConstructionError("set_property", node.name, str(exc), name) from exc
            self.calls += 1
        return handle

    def _append(
        self,
        parent: ControlNode,
        handle: ControlHandle,
        child: ControlNode,
        child_handle: ControlHandle,
    ) -> None:
        try:
            self.backend.append_child(handle, child_handle)
        except BackendError as exc:
            raise BackendConstructionError(
                "append_child", parent.name, f"<{child.name}>: {exc}"
            ) from exc
        self.calls += 1


def interpret(node: ControlNode, backend: UiBackend) -> ControlHandle:
    """Construct the controls for ``node`` through ``backend``."""
    return Interpreter(backend).build(node)
