"""
template_engine – Parameter substitution for function and script code.

Parameters are processed one at a time in declaration order; each step works
on the output of the previous one:

  • optional parameter  → {{ with $p }} … {{ end }} blocks are kept (value
    supplied, delimiters stripped, {{ . }} rewritten to {{ $p }}) or deleted
  • supplied value      → {{ $p | pipe… }} placeholders are replaced by the
    piped value
  • required, no value  → ParameterError

Bare placeholders of an optional parameter without a value stay verbatim.
"""

import logging
from typing import List, Mapping, Optional, Sequence

from privacy_sexy.core.errors import ParameterError
from privacy_sexy.core.interfaces.templating import TemplateEngineProtocol
from privacy_sexy.core.interfaces.text import PipeRegistryProtocol
from privacy_sexy.core.models import ParameterDefinition
from privacy_sexy.logging.helpers import get_logger
from privacy_sexy.processing.expressions import (
    CurrentValue,
    EndMarker,
    Placeholder,
    Segment,
    WithOpen,
    find_block_end,
    format_placeholder,
    tokenize,
)
from privacy_sexy.processing.pipes import PipeRegistry


class ParameterTemplateEngine(TemplateEngineProtocol):
    """Substitution engine built on the expression scanner."""

    def __init__(
        self,
        *,
        pipes: Optional[PipeRegistryProtocol] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._log = logger or get_logger("templates")
        self._pipes = pipes or PipeRegistry.default(logger=self._log)

    def substitute(
        self,
        body: str,
        declared: Sequence[ParameterDefinition],
        args: Mapping[str, Optional[str]],
    ) -> str:
        """Return *body* with every declared parameter resolved.

        Raises:
            ParameterError: A required parameter has no value in *args*.
        """
        for param in declared:
            value = args.get(param.name)
            if param.optional:
                body = self.expand_blocks(body, param.name, value)
            if value is not None:
                body = self.replace(body, param.name, value)
            elif not param.optional:
                raise ParameterError(param.name)
        return body

    def expand_blocks(self, body: str, name: str, value: Optional[str]) -> str:
        """Keep or delete every `with $name` block in *body*."""
        segments = tokenize(body)
        out: List[str] = []
        i = 0
        while i < len(segments):
            seg = segments[i]
            if not (isinstance(seg, WithOpen) and seg.name == name):
                out.append(seg.raw)
                i += 1
                continue

            end = find_block_end(segments, i)
            if end is None:
                self._log.debug("unterminated 'with $%s' block left verbatim", name)
                out.append(seg.raw)
                i += 1
                continue

            if value is not None:
                inner = self._rewrite_current(segments[i + 1:end], name)
                out.append(self.expand_blocks(inner, name, value).strip())
            i = end + 1
        return "".join(out)

    def replace(self, body: str, name: str, value: str) -> str:
        """Replace every `$name` placeholder in *body* with the piped *value*."""
        out: List[str] = []
        for seg in tokenize(body):
            if isinstance(seg, Placeholder) and seg.name == name:
                out.append(self._pipes.apply(value, seg.pipes))
            else:
                out.append(seg.raw)
        return "".join(out)

    @staticmethod
    def _rewrite_current(inner: Sequence[Segment], name: str) -> str:
        # Only `{{ . }}` at this block's own level refers to `name`.
        out: List[str] = []
        depth = 0
        for seg in inner:
            if isinstance(seg, WithOpen):
                depth += 1
            elif isinstance(seg, EndMarker):
                depth -= 1
            elif isinstance(seg, CurrentValue) and depth == 0:
                out.append(format_placeholder(name, seg.pipes))
                continue
            out.append(seg.raw)
        return "".join(out)
