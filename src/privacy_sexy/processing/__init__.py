from .pipes import PipeRegistry, escape_double_quotes, inline_powershell
from .expressions import tokenize, format_placeholder

__all__ = [
    'PipeRegistry',
    'escape_double_quotes',
    'inline_powershell',
    'tokenize',
    'format_placeholder',
]
