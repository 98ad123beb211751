from __future__ import annotations

"""Public surface for privacy_sexy.core.

Model types, error taxonomy and the resolution report, importable from a
single stable location:

    from privacy_sexy.core import Collection, Recommend, ParseError, ...
"""

from privacy_sexy.core.errors import (
    CallCodeError,
    CallCycleError,
    CollectionFormatError,
    CollectionIOError,
    CollectionReadError,
    CollectionTransportError,
    DepthLimitError,
    FunctionError,
    ParameterError,
    ParseError,
    ScriptRunError,
    UnsupportedOSError,
)
from privacy_sexy.core.models import (
    OS,
    CallBody,
    Category,
    Collection,
    Function,
    FunctionCall,
    InlineBody,
    ParameterDefinition,
    Recommend,
    Script,
    ScriptingDefinition,
)
from privacy_sexy.core.report import ResolutionReport

__all__ = [
    # Models
    "OS",
    "CallBody",
    "Category",
    "Collection",
    "Function",
    "FunctionCall",
    "InlineBody",
    "ParameterDefinition",
    "Recommend",
    "Script",
    "ScriptingDefinition",
    "ResolutionReport",
    # Errors
    "ParseError",
    "FunctionError",
    "ParameterError",
    "CallCodeError",
    "CallCycleError",
    "DepthLimitError",
    "CollectionReadError",
    "CollectionIOError",
    "CollectionFormatError",
    "CollectionTransportError",
    "ScriptRunError",
    "UnsupportedOSError",
]
