"""Tree-sitter parsing for syntactic analysis."""

from archscan.index._internal.parsing.packs import (
    PACKS,
    DialectPack,
    dialect_for_path,
    get_pack,
    get_pack_for_ext,
)
from archscan.index._internal.parsing.treesitter import (
    Capture,
    DialectParser,
    ParseResult,
    node_text,
)

__all__ = [
    "PACKS",
    "Capture",
    "DialectPack",
    "DialectParser",
    "ParseResult",
    "dialect_for_path",
    "get_pack",
    "get_pack_for_ext",
    "node_text",
]
