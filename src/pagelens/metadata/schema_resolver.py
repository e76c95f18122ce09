"""
Schema Path Resolver - Dotted Property Paths over Schema.org Data

Resolves paths such as ``author.name`` or ``image.[0].url`` against JSON-LD
shaped data: nested dicts, lists and scalars in no guaranteed arrangement.

Resolution is two-phase. The path is first followed exactly from the root;
only when that yields nothing is it retried as an unordered deep search,
where any nested object may stand in for the first unmatched level.
"""

from __future__ import annotations

import re
from typing import Any, FrozenSet, List, Optional, Sequence, Tuple

import structlog

from ..config import ResolverConfig

logger = structlog.get_logger(__name__)

# ``[2]`` addresses one list element, ``[]`` flattens across all of them
INDEX_SEGMENT = re.compile(r"^\[(\d+)\]$")
FLATTEN_SEGMENT = "[]"


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def _stringify(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class SchemaPathResolver:
    """
    Path lookup over untyped structured data.

    Stateless apart from its configuration; one instance can serve any
    number of documents.
    """

    def __init__(self, config: Optional[ResolverConfig] = None) -> None:
        self.config = config or ResolverConfig()

    def resolve(self, data: Any, path: str, default: str = "") -> str:
        """
        Resolve ``path`` against ``data`` and join the matches.

        Args:
            data: Structured data (dict, list or scalar)
            path: Dotted property path, e.g. ``"author.[].name"``
            default: Value returned when nothing matches

        Returns:
            Non-empty matches joined with the configured separator
        """
        if not data:
            return default

        segments = path.split(".")
        try:
            results = self.search(data, segments, exact=True)
            if not results:
                results = self.search(data, segments, exact=False)
        except Exception as e:
            logger.warning("Schema path resolution failed", path=path, error=str(e))
            return default

        if not results:
            return default
        return self.config.separator.join(value for value in results if value)

    def search(
        self,
        node: Any,
        segments: Sequence[str],
        exact: bool,
        depth: int = 0,
        branch: FrozenSet[Tuple[int, int]] = frozenset(),
    ) -> List[str]:
        """
        Collect every string reachable from ``node`` along ``segments``.

        ``branch`` holds the containers already entered on the way down,
        keyed with the number of segments left. Re-entering one without
        having consumed a segment is a cycle and yields nothing.
        """
        if depth > self.config.max_depth:
            logger.debug("Structured data nested too deeply, skipping branch", max_depth=self.config.max_depth)
            return []

        if isinstance(node, str):
            return [node] if not segments else []
        if not isinstance(node, (list, dict)):
            return []

        visit = (id(node), len(segments))
        if visit in branch:
            return []
        branch = branch | {visit}

        if isinstance(node, list):
            return self._search_list(node, segments, exact, depth, branch)
        return self._search_object(node, segments, exact, depth, branch)

    def _search_list(
        self, node: List[Any], segments: Sequence[str], exact: bool, depth: int, branch: FrozenSet[Tuple[int, int]]
    ) -> List[str]:
        if segments:
            match = INDEX_SEGMENT.match(segments[0])
            if match:
                index = int(match.group(1))
                if index < len(node) and node[index] is not None:
                    return self.search(node[index], segments[1:], exact, depth + 1, branch)
                return []
            if segments[0] == FLATTEN_SEGMENT:
                segments = segments[1:]

        if not segments and all(_is_scalar(item) for item in node):
            return [_stringify(item) for item in node]

        results: List[str] = []
        for item in node:
            results.extend(self.search(item, segments, exact, depth + 1, branch))
        return results

    def _search_object(
        self, node: dict, segments: Sequence[str], exact: bool, depth: int, branch: FrozenSet[Tuple[int, int]]
    ) -> List[str]:
        # Path exhausted on an object: fall back to its name
        if not segments or not segments[0]:
            name = node.get("name")
            if _is_scalar(name) and name != "":
                return [_stringify(name)]
            return []

        head, rest = segments[0], segments[1:]

        if head == FLATTEN_SEGMENT:
            return self.search(node, rest, exact, depth + 1, branch)

        if head in node:
            return self.search(node[head], rest, True, depth + 1, branch)

        if exact:
            return []

        results: List[str] = []
        for value in node.values():
            if isinstance(value, (dict, list)):
                results.extend(self.search(value, segments, False, depth + 1, branch))
        return results
