from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any

@dataclass(frozen=True)
class LoggingPolicy:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def level(self) -> str:
        return str((self.raw.get("logging") or {}).get("level", "WARNING")).upper()

    @property
    def format(self) -> str:
        return str(
            (self.raw.get("logging") or {}).get("format", "%(levelname)s %(name)s: %(message)s")
        )
