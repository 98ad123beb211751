#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
build_fixtures – Create / refresh the collection fixtures used by the
privacy_sexy test-suite.

Idempotent and 100 % Python.
"""
from __future__ import annotations

import shutil
import textwrap
from pathlib import Path

ROOT = (Path(__file__).resolve().parents[2] / "test-fixtures").resolve()
COLLECTIONS = ROOT / "collections"


# ────────────────────────── helpers ──────────────────────────
def _write(path: Path, body: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")


# ───────────────────── collections ─────────────────────
def _populate_linux() -> None:
    _write(COLLECTIONS / "linux.yaml", """
        os: linux
        scripting:
          language: shellscript
          fileExtension: sh
          startCode: |-
            #!/usr/bin/env bash
            # {{ $homepage }} v{{ $version }}
          endCode: echo 'Done'
        actions:
          - category: Privacy
            docs: https://example.org/privacy
            children:
              - name: Clear bash history
                recommend: standard
                code: rm -f ~/.bash_history
                revertCode: echo 'nothing to revert'
              - category: Telemetry
                children:
                  - name: Disable telemetry
                    recommend: strict
                    call:
                      function: SetConfig
                      parameters:
                        key: telemetry
                        value: 'off'
                  - name: Disable crash reports
                    docs:
                      - https://example.org/crash
                      - https://example.org/crash/faq
                    call:
                      - function: SetConfig
                        parameters:
                          key: crash
                          value: 0
                      - function: Notify
                        parameters:
                          message: crash reports disabled
          - category: Security
            children:
              - name: Enable firewall
                recommend: strict
                code: ufw enable
                revertCode: ufw disable
        functions:
          - name: SetConfig
            parameters:
              - name: key
              - name: value
            code: set-config {{ $key }}={{ $value }}
            revertCode: unset-config {{ $key }}
          - name: Notify
            parameters:
              - name: message
            code: echo "{{ $message | escapeDoubleQuotes }}"
    """)


def _populate_windows() -> None:
    _write(COLLECTIONS / "windows.yaml", """
        os: windows
        scripting:
          language: batchfile
          fileExtension: bat
          startCode: '@echo off'
          endCode: pause
        actions:
          - category: Telemetry
            children:
              - name: Disable PowerShell telemetry
                recommend: standard
                call:
                  function: RunPowerShell
                  parameters:
                    code: |-
                      $path = "HKLM:\\Software"
                      Set-ItemProperty -Path $path `
                        -Name Telemetry -Value 0
                    revertCode: Remove-ItemProperty -Path "HKLM:\\Software" -Name Telemetry
        functions:
          - name: RunPowerShell
            parameters:
              - name: code
              - name: revertCode
                optional: true
            code: 'PowerShell -ExecutionPolicy Unrestricted -Command "{{ $code | inlinePowerShell | escapeDoubleQuotes }}"'
            revertCode: |-
              {{ with $revertCode }}PowerShell -Command "{{ . | inlinePowerShell | escapeDoubleQuotes }}"{{ end }}
    """)


def _populate_broken() -> None:
    _write(COLLECTIONS / "broken.yaml", """
        os: linux
        scripting:
          language: shellscript
          startCode: ''
          endCode: ''
        actions:
          - category: Empty
            children: []
    """)


def main() -> None:
    shutil.rmtree(ROOT, ignore_errors=True)
    ROOT.mkdir(parents=True, exist_ok=True)
    _populate_linux()
    _populate_windows()
    _populate_broken()


if __name__ == "__main__":
    main()
