"""PHP class declaration extraction.

A PHP file contributes a record only when it has both a namespace and a
named class declaration. Files without either (bootstrap scripts, function
files, templates) are skipped silently.

When a file declares several classes, the first one in document order is
recorded. The domain attribute and the ``final`` keyword only count when
they belong to that declaration, and only comments placed ahead of it are
checked for the ``@internal`` and ``@final`` markers.
"""

from __future__ import annotations

from typing import Any

from archscan.config.constants import NAMESPACE_SEPARATOR
from archscan.index._internal.extraction import BaseExtractor, comments_contain
from archscan.index._internal.parsing import Capture, ParseResult
from archscan.index.models import DefinitionRecord, Dialect


def _is_descendant_of(node: Any, potential_ancestor: Any) -> bool:
    current = node.parent
    while current is not None:
        if current == potential_ancestor:
            return True
        current = current.parent
    return False


def _first(captures: list[Capture], name: str) -> Capture | None:
    return next((c for c in captures if c.name == name), None)


class ClassDefinitionExtractor(BaseExtractor):
    """Extracts one DefinitionRecord per PHP file from its first class."""

    dialect = Dialect.PHP

    def extract(self, parsed: ParseResult, rel_path: str) -> DefinitionRecord | None:
        captures = self._definition_captures(parsed)

        namespace_cap = _first(captures, "namespace")
        class_cap = _first(captures, "class")
        if namespace_cap is None or class_cap is None:
            return None

        class_node = class_cap.node
        class_name = next(
            (
                c.text
                for c in captures
                if c.name == "classname" and c.node.parent == class_node
            ),
            "",
        )
        namespace = namespace_cap.text
        if not namespace or not class_name:
            return None

        comments = [
            c
            for c in captures
            if c.name == "comment" and c.node.start_byte < class_node.start_byte
        ]
        has_final_keyword = any(
            c.name == "final_keyword" and c.node.parent == class_node for c in captures
        )
        domain = next(
            (
                c.text
                for c in captures
                if c.name == "package" and _is_descendant_of(c.node, class_node)
            ),
            None,
        )

        return DefinitionRecord(
            qualified_key=f"{namespace}{NAMESPACE_SEPARATOR}{class_name}",
            namespace=namespace,
            class_name=class_name,
            file_name=rel_path,
            domain=domain,
            is_internal=comments_contain(comments, self._markers.class_internal_tokens),
            is_final=has_final_keyword
            or comments_contain(comments, (self._markers.final_token,)),
        )

    def extract_usages(self, parsed: ParseResult) -> list[str]:
        query = self._parser.usage_query(self.dialect)
        if query is None:
            return []
        return [c.text for c in self._parser.captures(query, parsed.root_node) if c.text]
