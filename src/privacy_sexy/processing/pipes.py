"""
Named text pipes applied to substituted parameter values.

Built-ins:
    - escapeDoubleQuotes: make a value safe inside a batch double-quoted string.
    - inlinePowerShell:   collapse a multi-line PowerShell snippet into one line.

Unknown pipe names are an identity transform.
"""

import logging
import re
from typing import Dict, Optional, Sequence

from privacy_sexy.core.interfaces.text import PipeFn, PipeRegistryProtocol
from privacy_sexy.logging.helpers import get_logger

_NEWLINE_RE = re.compile(r'\r\n|\r|\n')
_COMMENT_RE = re.compile(r'<#((?s:.*?))#>|#(.*)')
_HERE_STRING_RE = re.compile(r'@([\'"])[ \t]*(?:\r\n|\r|\n)(.+?)(?:\r\n|\r|\n)\1@', re.DOTALL)
_BACKTICK_RE = re.compile(r' +`\s*(?:\r\n|\r|\n)\s*')


def escape_double_quotes(text: str) -> str:
    return text.replace('"', '"^""')


def _inline_comment(match: re.Match[str]) -> str:
    body = match.group(1) if match.group(1) is not None else match.group(2)
    body = (body or '').strip()
    return f'<# {body} #>' if body else '<##>'


def _inline_here_string(match: re.Match[str]) -> str:
    if match.group(1) == "'":
        quote, escaped, separator = "'", "''", "'+\"`r`n\"+'"
    else:
        quote, escaped, separator = '"', '`"', '`r`n'
    lines = _NEWLINE_RE.split(match.group(2).replace(quote, escaped))
    return f'{quote}{separator.join(lines)}{quote}'


def inline_powershell(text: str) -> str:
    """Collapse a PowerShell snippet into a single `; `-separated line.

    Steps, in order: comments become inline `<# … #>` comments, here-strings
    become single-line quoted strings with explicit line breaks, backtick
    continuations are merged, and the remaining non-empty lines are joined.
    """
    out = _COMMENT_RE.sub(_inline_comment, text)
    out = _HERE_STRING_RE.sub(_inline_here_string, out)
    out = _BACKTICK_RE.sub(' ', out)
    lines = (ln.strip() for ln in _NEWLINE_RE.split(out))
    return '; '.join(ln for ln in lines if ln)


class PipeRegistry(PipeRegistryProtocol):
    """Registry of named pipes; `default()` carries the built-ins."""

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._pipes: Dict[str, PipeFn] = {}
        self._log = logger or get_logger('processing.pipes')

    @classmethod
    def default(cls, *, logger: Optional[logging.Logger] = None) -> 'PipeRegistry':
        reg = cls(logger=logger)
        reg.register('escapeDoubleQuotes', escape_double_quotes)
        reg.register('inlinePowerShell', inline_powershell)
        return reg

    def register(self, name: str, fn: PipeFn) -> None:
        key = (name or '').strip()
        if not key:
            raise ValueError('pipe name must be non-empty')
        self._pipes[key] = fn

    def names(self) -> Sequence[str]:
        return tuple(self._pipes)

    def get(self, name: str) -> Optional[PipeFn]:
        return self._pipes.get(name)

    def apply(self, value: str, pipes: Sequence[str]) -> str:
        for name in pipes:
            fn = self.get(name)
            if fn is None:
                self._log.debug('unknown pipe %r, passing value through', name)
                continue
            value = fn(value)
        return value
