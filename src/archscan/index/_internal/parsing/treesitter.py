"""Tree-sitter parsing and query execution.

DialectParser keeps one ``tree_sitter.Parser`` per dialect. A parser's
grammar is set once, when it is created, and never switched afterwards, so
there is no "set language, then parse" sequence that another caller could
interleave with. Instances are still not thread-safe; the scanner calls
them from a single thread.

Usage::

    parser = DialectParser()
    result = parser.parse(Dialect.PHP, content, path="src/Foo.php")
    captures = parser.captures(parser.definition_query(Dialect.PHP), result.root_node)
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from typing import Any

import tree_sitter
from tree_sitter import Query as _TSQuery
from tree_sitter import QueryCursor as _TSQueryCursor

from archscan.core.errors import InternalError, ParseError
from archscan.index._internal.parsing.packs import DialectPack, get_pack
from archscan.index.models import Dialect


def node_text(node: Any) -> str:
    if node is None or not node.text:
        return ""
    return node.text.decode("utf-8", errors="replace")


@dataclass
class Capture:
    """A named syntax-tree fragment returned by a query."""

    name: str
    node: Any  # tree-sitter Node

    @property
    def text(self) -> str:
        return node_text(self.node)

    @property
    def start_byte(self) -> int:
        return int(self.node.start_byte)


@dataclass
class ParseResult:
    """Result of parsing one file."""

    tree: Any  # tree-sitter Tree (not serializable)
    root_node: Any  # tree-sitter Node
    dialect: Dialect
    error_count: int = 0


def _count_error_nodes(root: Any) -> int:
    if not root.has_error:
        return 0
    count = 0
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            count += 1
        if node.has_error:
            stack.extend(node.children)
    return count


@dataclass
class DialectParser:
    """Tree-sitter parser for both scan dialects."""

    package_attribute: str = "Package"
    _languages: dict[Dialect, Any] = field(default_factory=dict, repr=False)
    _parsers: dict[Dialect, Any] = field(default_factory=dict, repr=False)
    _queries: dict[tuple[Dialect, str], Any] = field(default_factory=dict, repr=False)

    def _get_language(self, dialect: Dialect) -> Any:
        """Get or load the tree-sitter Language for a dialect."""
        if dialect in self._languages:
            return self._languages[dialect]

        pack = get_pack(dialect)
        try:
            mod = importlib.import_module(pack.grammar_module)
            lang_fn = getattr(mod, pack.language_func)
        except (ImportError, AttributeError) as err:
            raise InternalError.unexpected(
                f"grammar not available: {pack.grammar_package}",
                dialect=dialect.value,
            ) from err

        lang = tree_sitter.Language(lang_fn())
        self._languages[dialect] = lang
        return lang

    def _get_parser(self, dialect: Dialect) -> Any:
        if dialect not in self._parsers:
            self._parsers[dialect] = tree_sitter.Parser(self._get_language(dialect))
        return self._parsers[dialect]

    def parse(self, dialect: Dialect, content: bytes, *, path: str = "<memory>") -> ParseResult:
        """Parse source bytes under the given dialect.

        Raises:
            ParseError: The parser raised or produced no tree.
        """
        parser = self._get_parser(dialect)
        try:
            tree = parser.parse(content)
        except Exception as e:
            raise ParseError.failed(path, f"{type(e).__name__}: {e}") from e
        if tree is None:
            raise ParseError.failed(path, "parser returned no tree")

        return ParseResult(
            tree=tree,
            root_node=tree.root_node,
            dialect=dialect,
            error_count=_count_error_nodes(tree.root_node),
        )

    def _compile(self, dialect: Dialect, kind: str, source: str) -> Any:
        key = (dialect, kind)
        if key not in self._queries:
            try:
                self._queries[key] = _TSQuery(self._get_language(dialect), source)
            except Exception as e:
                raise InternalError.unexpected(
                    f"query does not compile against the installed grammar: {e}",
                    dialect=dialect.value,
                    query=kind,
                ) from e
        return self._queries[key]

    def definition_query(self, dialect: Dialect) -> Any:
        pack: DialectPack = get_pack(dialect)
        return self._compile(
            dialect, "definition", pack.render_definition_query(self.package_attribute)
        )

    def usage_query(self, dialect: Dialect) -> Any | None:
        pack = get_pack(dialect)
        if pack.usage_query is None:
            return None
        return self._compile(dialect, "usage", pack.usage_query)

    @staticmethod
    def captures(query: Any, node: Any) -> list[Capture]:
        """Run a query and return all captures in document order."""
        cursor = _TSQueryCursor(query)
        # captures() returns dict[str, list[Node]]
        raw: dict[str, list[Any]] = cursor.captures(node)
        result = [Capture(name=name, node=n) for name, nodes in raw.items() for n in nodes]
        result.sort(key=lambda c: (c.start_byte, c.name))
        return result
