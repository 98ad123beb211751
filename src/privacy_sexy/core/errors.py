from __future__ import annotations

"""
Error taxonomy for privacy_sexy.

Three independent hierarchies:

  • ParseError          – raised by the resolution engine (core).
  • CollectionReadError – raised while acquiring a collection document.
  • ScriptRunError      – raised while persisting or spawning a script.

None of them is retried; callers report and abort.
"""

from typing import Sequence


class ParseError(Exception):
    """Base class for resolution failures.

    Attributes:
        kind: Short category tag ('Function', 'Parameter', 'CallCode', 'Recursion').
        name: Name of the function, parameter or script the error refers to.
    """

    kind: str = 'Parse'

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f'{self.kind}({name})')


class FunctionError(ParseError):
    """A call chain references a function that is not defined."""

    kind = 'Function'

    def __init__(self, name: str) -> None:
        super().__init__(name, f'function {name!r} is not defined')


class ParameterError(ParseError):
    """A required parameter has no argument value."""

    kind = 'Parameter'

    def __init__(self, name: str) -> None:
        super().__init__(name, f'required parameter {name!r} has no value')


class CallCodeError(ParseError):
    """Neither a call chain nor the selected code field is present."""

    kind = 'CallCode'

    def __init__(self, name: str, *, revert: bool = False) -> None:
        field = 'revertCode' if revert else 'code'
        super().__init__(name, f'{name!r} defines neither call nor {field}')
        self.revert = revert


class CallCycleError(ParseError):
    kind = 'Recursion'

    def __init__(self, name: str, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        path = ' → '.join([*self.chain, name])
        super().__init__(name, f'function call cycle detected: {path}')


class DepthLimitError(ParseError):
    kind = 'Recursion'

    def __init__(self, name: str, limit: int) -> None:
        self.limit = limit
        super().__init__(name, f'nesting deeper than {limit} levels at {name!r}')


class CollectionReadError(Exception):
    """Base class for collection acquisition failures."""


class CollectionIOError(CollectionReadError):
    """The collection file could not be read."""


class CollectionFormatError(CollectionReadError):
    """The document is not valid YAML or does not match the collection shape."""


class CollectionTransportError(CollectionReadError):
    """The collection could not be downloaded."""


class UnsupportedOSError(Exception):
    """The running platform has no collection."""


class ScriptRunError(Exception):
    """Writing, chmod-ing or spawning the generated script failed."""
