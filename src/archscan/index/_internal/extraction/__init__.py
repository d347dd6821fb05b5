"""Definition extraction protocol and registry.

An extractor reduces one parsed file to zero or one DefinitionRecord, plus
(optionally) the list of type names the file references.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from archscan.index.models import Dialect

if TYPE_CHECKING:
    from archscan.config.models import MarkersConfig
    from archscan.index._internal.parsing import Capture, DialectParser, ParseResult
    from archscan.index.models import DefinitionRecord


class BaseExtractor(ABC):
    """Base class for per-dialect extractors."""

    dialect: Dialect

    def __init__(self, parser: DialectParser, markers: MarkersConfig) -> None:
        self._parser = parser
        self._markers = markers

    def _definition_captures(self, parsed: ParseResult) -> list[Capture]:
        query = self._parser.definition_query(self.dialect)
        return self._parser.captures(query, parsed.root_node)

    @abstractmethod
    def extract(self, parsed: ParseResult, rel_path: str) -> DefinitionRecord | None:
        """Reduce a parsed file to at most one record."""
        ...

    def extract_usages(self, parsed: ParseResult) -> list[str]:  # noqa: ARG002
        """Referenced type names, as written, in document order."""
        return []


def comments_contain(comments: list[Capture], tokens: list[str] | tuple[str, ...]) -> bool:
    """True if any comment text contains any of the tokens."""
    return any(token in c.text for c in comments for token in tokens)


def get_extractor(
    dialect: Dialect, parser: DialectParser, markers: MarkersConfig
) -> BaseExtractor:
    """Return the extractor for a dialect."""
    from archscan.index._internal.extraction.php import ClassDefinitionExtractor
    from archscan.index._internal.extraction.script import ScriptDefinitionExtractor

    extractors: dict[Dialect, type[BaseExtractor]] = {
        Dialect.PHP: ClassDefinitionExtractor,
        Dialect.SCRIPT: ScriptDefinitionExtractor,
    }
    return extractors[dialect](parser, markers)


__all__ = [
    "BaseExtractor",
    "comments_contain",
    "get_extractor",
]
