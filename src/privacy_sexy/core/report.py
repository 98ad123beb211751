from __future__ import annotations

"""
Resolution report.

Counts what a single `parse()` pass included, filtered out and invoked.
Filled only when the caller passes a report to the resolver.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class ResolutionReport:
    started_at: float = field(default_factory=time.perf_counter)
    finished_at: float | None = None
    duration_s: float | None = None

    categories: int = 0
    scripts_included: int = 0
    scripts_excluded: Dict[str, int] = field(
        default_factory=lambda: {"name": 0, "recommend": 0}
    )
    function_calls: int = 0
    included: List[str] = field(default_factory=list)

    @property
    def scripts_total(self) -> int:
        return self.scripts_included + sum(self.scripts_excluded.values())

    def mark_included(self, name: str) -> None:
        self.scripts_included += 1
        self.included.append(name)

    def mark_excluded(self, reason: str) -> None:
        self.scripts_excluded[reason] = self.scripts_excluded.get(reason, 0) + 1

    def finish(self) -> None:
        self.finished_at = time.perf_counter()
        self.duration_s = self.finished_at - self.started_at

    def to_json(self, *, indent: int = 2) -> str:
        return json.dumps(
            {
                "duration_s": self.duration_s,
                "categories": self.categories,
                "scripts_total": self.scripts_total,
                "scripts_included": self.scripts_included,
                "scripts_excluded": self.scripts_excluded,
                "function_calls": self.function_calls,
                "included": self.included,
            },
            indent=indent,
        )
