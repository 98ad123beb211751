"""
Section formatter.

Wraps resolved code in a comment banner and an echo line, e.g. for Linux:

    # ------------------------------------------------------------
    # ---------------------Clear bash history---------------------
    # ------------------------------------------------------------
    echo --- Clear bash history
    rm -f ~/.bash_history
    # ------------------------------------------------------------
"""
from __future__ import annotations

from privacy_sexy.constants import BANNER_WIDTH
from privacy_sexy.core.models import OS


def comment_prefix(os: OS) -> str:
    return '::' if os is OS.WINDOWS else '#'


def format_section(code: str, display_name: str, os: OS, revert: bool = False, *, width: int = BANNER_WIDTH) -> str:
    name = f'{display_name} (revert)' if revert else display_name
    c = comment_prefix(os)
    rule = f'{c} {"":-^{width}}'
    title = f'{c} {name:-^{width}}'
    return '\n'.join([rule, title, rule, f'echo --- {name}', code, rule])
