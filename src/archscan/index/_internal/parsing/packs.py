"""Per-dialect tree-sitter configuration.

Each DialectPack bundles everything dialect-specific: which grammar to load,
which file extensions route to it, and the declarative queries the
extractors run against a parsed tree.

Queries use the tree-sitter query language. Every top-level pattern is an
independent match; the extractors collect captures by name across all
matches, so a file with several comments yields several ``@comment``
captures.

Documentation: https://tree-sitter.github.io/tree-sitter/using-parsers/queries/index.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath

from archscan.index.models import Dialect

# =========================================================================
# PHP (class-based dialect)
# =========================================================================

# {attribute} is replaced with the sentinel attribute name
# (MarkersConfig.package_attribute) before compiling.
_PHP_DEFINITION_QUERY = """
(namespace_definition
  name: (namespace_name) @namespace)

(program (comment) @comment)

(namespace_definition
  body: (compound_statement (comment) @comment))

(class_declaration
  attributes: (attribute_list
    (attribute_group
      (attribute
        (name) @attribute_name
        (#eq? @attribute_name "{attribute}")
        parameters: (arguments
          .
          (argument
            [
              (string (string_content) @package)
              (encapsed_string (string_content) @package)
            ]))))))

(class_declaration
  (final_modifier) @final_keyword)

(class_declaration
  name: (name) @classname) @class
"""

_PHP_USAGE_QUERY = """
(qualified_name) @usage
"""

# =========================================================================
# JavaScript / TypeScript (scripting dialect)
# =========================================================================

_SCRIPT_DEFINITION_QUERY = """
(program (comment) @comment)
"""


@dataclass(frozen=True)
class DialectPack:
    """Complete tree-sitter configuration for a single dialect."""

    dialect: Dialect
    grammar_package: str  # PyPI package ("tree-sitter-php")
    grammar_module: str  # Python import ("tree_sitter_php")
    language_func: str  # Function returning the language capsule
    extensions: frozenset[str] = field(default_factory=frozenset)
    definition_query: str = ""
    usage_query: str | None = None

    def render_definition_query(self, package_attribute: str) -> str:
        """Definition query with the sentinel attribute name filled in."""
        if "{attribute}" not in self.definition_query:
            return self.definition_query
        return self.definition_query.replace("{attribute}", package_attribute)


PHP_PACK = DialectPack(
    dialect=Dialect.PHP,
    grammar_package="tree-sitter-php",
    grammar_module="tree_sitter_php",
    language_func="language_php",
    extensions=frozenset({"php"}),
    definition_query=_PHP_DEFINITION_QUERY,
    usage_query=_PHP_USAGE_QUERY,
)

# Plain JavaScript is parsed with the TypeScript grammar as well; it is a
# superset for everything the comment query needs.
SCRIPT_PACK = DialectPack(
    dialect=Dialect.SCRIPT,
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    language_func="language_typescript",
    extensions=frozenset({"js", "ts"}),
    definition_query=_SCRIPT_DEFINITION_QUERY,
)

PACKS: dict[Dialect, DialectPack] = {pack.dialect: pack for pack in (PHP_PACK, SCRIPT_PACK)}

_EXT_TO_PACK: dict[str, DialectPack] = {}
for _pack in PACKS.values():
    for _ext in _pack.extensions:
        _EXT_TO_PACK[_ext] = _pack


def get_pack(dialect: Dialect) -> DialectPack:
    return PACKS[dialect]


def get_pack_for_ext(ext: str) -> DialectPack | None:
    """Look up a pack by file extension (with or without the leading dot)."""
    return _EXT_TO_PACK.get(ext.lower().lstrip("."))


def dialect_for_path(path: str | PurePath) -> Dialect | None:
    """Dialect for a file path, by extension. None for unrecognized files."""
    pack = get_pack_for_ext(PurePath(path).suffix)
    return pack.dialect if pack is not None else None
