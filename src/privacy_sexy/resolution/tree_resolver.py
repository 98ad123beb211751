from __future__ import annotations

"""
Tree resolver – turns a Collection into one executable script.

Walk order is depth-first in declaration order. Filters:

  • names     – only listed scripts are kept; a listed *category* name opts its
                whole subtree in (both filters are dropped below it)
  • recommend – scripts without a level, or with a level more aggressive than
                the filter, are dropped

Excluded scripts and empty categories yield '' and are skipped when joining,
so no blank-line artifacts are left behind.
"""

import logging
from typing import FrozenSet, List, Optional, Sequence

from privacy_sexy.constants import SECTION_SEP
from privacy_sexy.core.errors import CallCodeError, DepthLimitError
from privacy_sexy.core.models import CallBody, Category, Collection, Recommend, Script
from privacy_sexy.core.report import ResolutionReport
from privacy_sexy.logging.helpers import trace_resolve
from privacy_sexy.rendering.formatter import format_section
from privacy_sexy.resolution.function_resolver import FunctionResolver
from privacy_sexy.resolution.global_vars import substitute_globals
from privacy_sexy.runtime.config import ResolverConfig


class CollectionResolver:
    """Resolve a collection with optional name/recommendation filters."""

    def __init__(
        self,
        collection: Collection,
        *,
        config: Optional[ResolverConfig] = None,
        report: Optional[ResolutionReport] = None,
    ) -> None:
        self._coll = collection
        self._cfg = config or ResolverConfig()
        self._log: logging.Logger = self._cfg.logger
        self._report = report
        self._functions = FunctionResolver(collection.function_table(), config=self._cfg, report=report)

    def parse(
        self,
        names: Optional[Sequence[str]] = None,
        revert: bool = False,
        recommend: Optional[Recommend] = None,
    ) -> str:
        """Return the full script: start code, resolved sections, end code.

        Args:
            names: Allowlist of script or category names (None = everything).
            revert: Select revert code instead of code.
            recommend: Keep only scripts at or below this level.

        Raises:
            ParseError: Any resolution failure; no partial output is produced.
        """
        name_filter = frozenset(names) if names is not None else None
        sections = [
            self.resolve_category(cat, name_filter, revert, recommend)
            for cat in self._coll.actions
        ]
        body = SECTION_SEP.join(s for s in sections if s)

        scripting = self._coll.scripting
        variables = self._cfg.global_vars()
        start = substitute_globals(scripting.start_code, variables, self._cfg.pipes)
        end = substitute_globals(scripting.end_code, variables, self._cfg.pipes)

        if self._report is not None:
            self._report.finish()
        return SECTION_SEP.join(part for part in (start, body, end) if part)

    def resolve_category(
        self,
        category: Category,
        names: Optional[FrozenSet[str]],
        revert: bool,
        recommend: Optional[Recommend],
        *,
        depth: int = 0,
    ) -> str:
        if depth >= self._cfg.max_depth:
            raise DepthLimitError(category.name, self._cfg.max_depth)
        if self._report is not None:
            self._report.categories += 1

        if names is not None and category.name in names:
            trace_resolve(self._log, 'category opted in', category=category.name)
            names, recommend = None, None

        parts: List[str] = []
        for child in category.children:
            if isinstance(child, Category):
                out = self.resolve_category(child, names, revert, recommend, depth=depth + 1)
            else:
                out = self.resolve_script(child, names, revert, recommend)
            if out:
                parts.append(out)
        return SECTION_SEP.join(parts)

    def resolve_script(
        self,
        script: Script,
        names: Optional[FrozenSet[str]],
        revert: bool,
        recommend: Optional[Recommend],
    ) -> str:
        if names is not None and script.name not in names:
            self._exclude(script, 'name')
            return ''
        if recommend is not None and not recommend.admits(script.recommend):
            self._exclude(script, 'recommend')
            return ''

        if isinstance(script.body, CallBody):
            code = self._functions.resolve(script.body, revert)
        else:
            selected = script.body.select(revert)
            if selected is None:
                raise CallCodeError(script.name, revert=revert)
            code = selected

        if self._report is not None:
            self._report.mark_included(script.name)
        return format_section(code, script.name, self._coll.os, revert)

    def _exclude(self, script: Script, reason: str) -> None:
        trace_resolve(self._log, 'script excluded', script=script.name, reason=reason)
        if self._report is not None:
            self._report.mark_excluded(reason)


def parse(
    collection: Collection,
    names: Optional[Sequence[str]] = None,
    revert: bool = False,
    recommend: Optional[Recommend] = None,
    *,
    config: Optional[ResolverConfig] = None,
) -> str:
    """Functional shortcut for `CollectionResolver(collection).parse(...)`."""
    return CollectionResolver(collection, config=config).parse(names, revert, recommend)
