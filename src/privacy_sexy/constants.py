from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

# Distribution name on the package index (used for metadata lookups).
DIST_NAME: str = 'privacy-sexy'

# Fallback homepage when package metadata is unavailable.
HOMEPAGE: str = 'https://github.com/SubconsciousCompute/privacy-sexy-rs'

# Width of the dashed banner rule written around every script section.
BANNER_WIDTH: int = 60

# Separator between resolved sections, calls and start/end code.
SECTION_SEP: str = '\n\n'

# Upper bound for category nesting and function call depth.
DEFAULT_MAX_DEPTH: int = 64

# Base name of the temporary file used by run_script().
SCRIPT_STEM: str = 'privacy-sexy'

# Upstream location of the maintained collections.
COLLECTIONS_URL: str = (
    'https://raw.githubusercontent.com/SubconsciousCompute/privacy-sexy-rs/master/collections/{os}.yaml'
)
