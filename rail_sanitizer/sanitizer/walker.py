"""
Recursive graph walk.

The walker classifies each value, keeps an identity-keyed record of the
containers it has entered and dispatches to the text sanitizer or to the
container adapter for that kind of value.
"""

import logging
from typing import Any, Optional

from ..exceptions import MAX_DEPTH_EXCEEDED, ValidationError
from .adapters import ADAPTERS, ContainerAdapter
from .classifier import classify, is_scalar
from .text import TextSanitizer
from .types import SanitizerSettings, TextPolicy, ValueKind

logger = logging.getLogger(__name__)


class GraphWalker:
    """Walk an object graph once, sanitizing every string it reaches.

    A node is recorded as visited before its children are entered, so
    cycles terminate and shared sub-graphs are sanitized only once. The
    visited record belongs to a single ``walk`` call; nothing is kept
    between calls.
    """

    def __init__(
        self,
        text_sanitizer: TextSanitizer,
        settings: Optional[SanitizerSettings] = None,
        adapters: Optional[dict[ValueKind, ContainerAdapter]] = None,
    ):
        self.text_sanitizer = text_sanitizer
        self.settings = settings or text_sanitizer.settings
        self.adapters = dict(adapters or ADAPTERS)

    def walk(self, root: Any) -> Any:
        """Sanitize everything reachable from ``root`` and return the root to keep.

        Raises:
            ValidationError: If any string fails its policy or the graph is nested
                deeper than the configured limit. Already sanitized nodes keep
                their new values.
        """
        if root is None:
            return root
        # id -> node; holding the node keeps its id from being reused mid-walk.
        visited: dict[int, Any] = {}
        try:
            result = self._sanitize_value(root, visited, None, TextPolicy.AUTO, 0)
        except RecursionError as exc:
            # Reached when max_depth is disabled or set above the stack size.
            raise ValidationError(MAX_DEPTH_EXCEEDED, code="MAX_DEPTH_EXCEEDED") from exc
        logger.debug(
            "Sanitized %s graph, %s container(s) visited",
            type(root).__name__,
            len(visited),
        )
        return result

    def _sanitize_value(
        self,
        value: Any,
        visited: dict[int, Any],
        path: Optional[str],
        policy: TextPolicy,
        depth: int,
    ) -> Any:
        if is_scalar(value):
            return value

        if isinstance(value, str):
            try:
                return self.text_sanitizer.sanitize(value, policy)
            except ValidationError as exc:
                exc.with_path(path)
                raise

        if id(value) in visited:
            return value
        visited[id(value)] = value

        max_depth = self.settings.max_depth
        if max_depth and depth > max_depth:
            raise ValidationError(MAX_DEPTH_EXCEEDED, code="MAX_DEPTH_EXCEEDED", path=path)

        kind = classify(value)
        adapter = self.adapters[kind]

        def visit(
            child: Any,
            child_path: Optional[str],
            child_policy: TextPolicy = TextPolicy.AUTO,
        ) -> Any:
            return self._sanitize_value(
                child, visited, child_path, child_policy, depth + 1
            )

        return adapter.sanitize(value, visit, path)
