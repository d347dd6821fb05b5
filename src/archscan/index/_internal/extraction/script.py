"""JavaScript / TypeScript file extraction.

There is no class concept for front-end code here: every file yields
exactly one record, keyed by its scan-relative path, built from the
file's top-level comments.
"""

from __future__ import annotations

import re

from archscan.index._internal.extraction import BaseExtractor, comments_contain
from archscan.index._internal.parsing import ParseResult
from archscan.index.models import DefinitionRecord, Dialect


class ScriptDefinitionExtractor(BaseExtractor):
    dialect = Dialect.SCRIPT

    def extract(self, parsed: ParseResult, rel_path: str) -> DefinitionRecord:
        comments = [c for c in self._definition_captures(parsed) if c.name == "comment"]

        domain_pattern = re.compile(self._markers.package_comment_pattern)
        domain = None
        for comment in comments:
            match = domain_pattern.search(comment.text)
            if match:
                domain = match.group(1)
                break

        return DefinitionRecord(
            qualified_key=rel_path,
            file_name=rel_path,
            domain=domain,
            is_internal=comments_contain(comments, self._markers.script_internal_tokens),
            is_final=None,
        )
