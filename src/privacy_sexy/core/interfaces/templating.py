from __future__ import annotations
from typing import Mapping, Optional, Protocol, Sequence, runtime_checkable

from privacy_sexy.core.models import ParameterDefinition


@runtime_checkable
class TemplateEngineProtocol(Protocol):
    """Protocol for the parameter substitution engine."""

    def substitute(
        self,
        body: str,
        declared: Sequence[ParameterDefinition],
        args: Mapping[str, Optional[str]],
    ) -> str:
        ...
