from __future__ import annotations

"""
Function registry resolver.

Resolves call chains against the flat function table of a collection:

  • a call names a function and supplies argument values
  • a function with a call body forwards: the argument values of its own
    calls are substituted with the arguments it received
  • a function with an inline body selects code / revert code and runs the
    template engine over it

The active call stack is tracked, so a function reaching itself again raises
CallCycleError instead of recursing forever.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from privacy_sexy.constants import SECTION_SEP
from privacy_sexy.core.errors import CallCodeError, CallCycleError, DepthLimitError, FunctionError
from privacy_sexy.core.interfaces.templating import TemplateEngineProtocol
from privacy_sexy.core.models import CallBody, Function, FunctionCall, InlineBody, ParameterDefinition
from privacy_sexy.core.report import ResolutionReport
from privacy_sexy.logging.helpers import trace_resolve
from privacy_sexy.rendering.template_engine import ParameterTemplateEngine
from privacy_sexy.runtime.config import ResolverConfig

Scope = Tuple[Sequence[ParameterDefinition], Mapping[str, Optional[str]]]


class FunctionResolver:
    def __init__(
        self,
        functions: Mapping[str, Function],
        *,
        config: Optional[ResolverConfig] = None,
        engine: Optional[TemplateEngineProtocol] = None,
        report: Optional[ResolutionReport] = None,
    ) -> None:
        self._functions: Dict[str, Function] = dict(functions)
        self._cfg = config or ResolverConfig()
        self._log: logging.Logger = self._cfg.logger
        self._engine = engine or ParameterTemplateEngine(pipes=self._cfg.pipes, logger=self._log)
        self._report = report

    def resolve(self, body: CallBody, revert: bool) -> str:
        """Resolve a script's call chain (arguments are taken literally)."""
        return self._resolve_chain(body.calls, revert, scope=None, stack=())

    def resolve_call(self, call: FunctionCall, revert: bool) -> str:
        return self._resolve_call(call, revert, scope=None, stack=())

    def _resolve_chain(
        self,
        calls: Sequence[FunctionCall],
        revert: bool,
        *,
        scope: Optional[Scope],
        stack: Tuple[str, ...],
    ) -> str:
        parts: List[str] = []
        for call in calls:
            code = self._resolve_call(call, revert, scope=scope, stack=stack)
            if code:
                parts.append(code)
        return SECTION_SEP.join(parts)

    def _resolve_call(
        self,
        call: FunctionCall,
        revert: bool,
        *,
        scope: Optional[Scope],
        stack: Tuple[str, ...],
    ) -> str:
        fn = self._functions.get(call.function)
        if fn is None:
            raise FunctionError(call.function)
        if fn.name in stack:
            raise CallCycleError(fn.name, stack)
        if len(stack) >= self._cfg.max_depth:
            raise DepthLimitError(fn.name, self._cfg.max_depth)

        args = self._bind_args(call.parameters, scope)
        if self._report is not None:
            self._report.function_calls += 1
        trace_resolve(self._log, 'call', function=fn.name, depth=len(stack), revert=revert)

        inner_stack = (*stack, fn.name)
        if isinstance(fn.body, CallBody):
            return self._resolve_chain(fn.body.calls, revert, scope=(fn.parameters, args), stack=inner_stack)

        code = fn.body.select(revert) if isinstance(fn.body, InlineBody) else None
        if code is None:
            raise CallCodeError(fn.name, revert=revert)
        return self._engine.substitute(code, fn.parameters, args)

    def _bind_args(self, values: Mapping[str, Optional[str]], scope: Optional[Scope]) -> Dict[str, Optional[str]]:
        # Argument values may reference the caller's own parameters.
        if scope is None:
            return dict(values)
        declared, outer_args = scope
        return {
            key: (self._engine.substitute(value, declared, outer_args) if value is not None else None)
            for key, value in values.items()
        }
