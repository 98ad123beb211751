from __future__ import annotations

"""
Script execution.

Writes the generated script to `<tempdir>/privacy-sexy[.ext]`, marks it
executable on POSIX systems and runs it, returning the exit status.
"""

import logging
import os
import stat
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from privacy_sexy.constants import SCRIPT_STEM
from privacy_sexy.core.errors import ScriptRunError
from privacy_sexy.logging.helpers import get_logger

_EXEC_MODE = stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH  # 0o755


def script_path(file_extension: Optional[str] = None, *, directory: Optional[Path] = None) -> Path:
    base = (directory or Path(tempfile.gettempdir())) / SCRIPT_STEM
    ext = (file_extension or '').lstrip('.')
    return base.with_name(f'{SCRIPT_STEM}.{ext}') if ext else base


def write_script(script: str, file_extension: Optional[str] = None, *, directory: Optional[Path] = None) -> Path:
    """Persist *script* and make it executable; return its path."""
    path = script_path(file_extension, directory=directory)
    try:
        path.write_text(script, encoding='utf-8')
        if os.name == 'posix':
            path.chmod(_EXEC_MODE)
    except OSError as exc:
        raise ScriptRunError(f'could not write {path}: {exc}') from exc
    return path


def run_script(
    script: str,
    file_extension: Optional[str] = None,
    *,
    directory: Optional[Path] = None,
    logger: Optional[logging.Logger] = None,
) -> int:
    """Write and execute *script*, returning the process exit status."""
    log = logger or get_logger('exec')
    path = write_script(script, file_extension, directory=directory)
    log.info('▶ running %s', path)
    try:
        proc = subprocess.run([str(path)], check=False)
    except OSError as exc:
        raise ScriptRunError(f'could not execute {path}: {exc}') from exc
    log.debug('script exited with status %d', proc.returncode)
    return proc.returncode
