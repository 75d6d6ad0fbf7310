"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(slots=True)
class AppConfig:
    workers: int | None = None
    queue_size: int = 1024
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    output_suffix: str = "_out.json"

    def resolve_workers(self) -> int:
        if self.workers is not None:
            return max(self.workers, 1)
        return os.cpu_count() or 1
