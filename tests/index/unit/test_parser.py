"""Unit tests for the tree-sitter parser (treesitter.py, packs.py).

Tests cover:
- Dialect routing by file extension
- Parsing PHP and TypeScript/JavaScript sources
- Query compilation and capture ordering
- Parse failures surfacing as ParseError
"""

from __future__ import annotations

import pytest

from archscan.core.errors import ErrorCode, ParseError
from archscan.index._internal.parsing import (
    DialectParser,
    ParseResult,
    dialect_for_path,
    get_pack_for_ext,
)
from archscan.index._internal.parsing.packs import PHP_PACK, SCRIPT_PACK
from archscan.index.models import Dialect


class TestDialectRouting:
    """Extension to dialect mapping."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("src/Core/Foo.php", Dialect.PHP),
            ("app/main.js", Dialect.SCRIPT),
            ("app/main.ts", Dialect.SCRIPT),
            ("app/MAIN.TS", Dialect.SCRIPT),
            ("README.md", None),
            ("composer.json", None),
            ("Makefile", None),
        ],
    )
    def test_dialect_for_path(self, path: str, expected: Dialect | None) -> None:
        assert dialect_for_path(path) is expected

    def test_pack_lookup_accepts_leading_dot(self) -> None:
        assert get_pack_for_ext(".php") is PHP_PACK
        assert get_pack_for_ext("ts") is SCRIPT_PACK

    def test_attribute_name_is_filled_in(self) -> None:
        query = PHP_PACK.render_definition_query("Domain")
        assert '"Domain"' in query
        assert "{attribute}" not in query

    def test_script_query_has_no_placeholder(self) -> None:
        assert SCRIPT_PACK.render_definition_query("Domain") == SCRIPT_PACK.definition_query


class TestParseBasics:
    """Basic parsing tests."""

    def test_parse_php(self, parser: DialectParser, sample_php_class: str) -> None:
        result = parser.parse(Dialect.PHP, sample_php_class.encode(), path="Baz.php")

        assert isinstance(result, ParseResult)
        assert result.dialect is Dialect.PHP
        assert result.error_count == 0
        assert result.root_node.type == "program"

    def test_parse_script(self, parser: DialectParser, sample_script: str) -> None:
        result = parser.parse(Dialect.SCRIPT, sample_script.encode(), path="plugin.js")

        assert result.dialect is Dialect.SCRIPT
        assert result.error_count == 0

    def test_syntax_errors_are_counted_not_raised(self, parser: DialectParser) -> None:
        """Broken code still yields a tree; the scan decides what to do with it."""
        result = parser.parse(Dialect.PHP, b"<?php class {{{ ", path="broken.php")

        assert result.error_count > 0

    def test_empty_file(self, parser: DialectParser) -> None:
        result = parser.parse(Dialect.SCRIPT, b"", path="empty.ts")

        assert result.error_count == 0

    def test_parser_reused_per_dialect(self, parser: DialectParser) -> None:
        parser.parse(Dialect.PHP, b"<?php", path="a.php")
        first = parser._parsers[Dialect.PHP]
        parser.parse(Dialect.SCRIPT, b"", path="a.ts")
        parser.parse(Dialect.PHP, b"<?php", path="b.php")

        assert parser._parsers[Dialect.PHP] is first
        assert parser._parsers[Dialect.SCRIPT] is not first


class TestParseFailures:
    def test_parser_exception_becomes_parse_error(self, parser: DialectParser) -> None:
        class _Exploding:
            def parse(self, content: bytes) -> None:
                raise RuntimeError("cancelled")

        parser._parsers[Dialect.PHP] = _Exploding()

        with pytest.raises(ParseError) as exc_info:
            parser.parse(Dialect.PHP, b"<?php", path="src/Foo.php")

        assert exc_info.value.code == ErrorCode.PARSE_FAILED
        assert exc_info.value.details["path"] == "src/Foo.php"

    def test_missing_tree_becomes_parse_error(self, parser: DialectParser) -> None:
        class _Empty:
            def parse(self, content: bytes) -> None:
                return None

        parser._parsers[Dialect.SCRIPT] = _Empty()

        with pytest.raises(ParseError, match="no tree"):
            parser.parse(Dialect.SCRIPT, b"x", path="x.ts")


class TestQueries:
    def test_queries_compile(self, parser: DialectParser) -> None:
        assert parser.definition_query(Dialect.PHP) is not None
        assert parser.definition_query(Dialect.SCRIPT) is not None
        assert parser.usage_query(Dialect.PHP) is not None

    def test_script_has_no_usage_query(self, parser: DialectParser) -> None:
        assert parser.usage_query(Dialect.SCRIPT) is None

    def test_compiled_queries_are_cached(self, parser: DialectParser) -> None:
        assert parser.definition_query(Dialect.PHP) is parser.definition_query(Dialect.PHP)

    def test_captures_in_document_order(self, parser: DialectParser) -> None:
        source = b"/* first */\nconst a = 1;\n// second\n/* third */\n"
        result = parser.parse(Dialect.SCRIPT, source, path="c.ts")

        captures = parser.captures(parser.definition_query(Dialect.SCRIPT), result.root_node)

        assert [c.text for c in captures] == ["/* first */", "// second", "/* third */"]
        assert all(c.name == "comment" for c in captures)
