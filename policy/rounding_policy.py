from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any

@dataclass(frozen=True)
class RoundingPolicy:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def round_redistributed_target(self) -> bool:
        """Store a directly set parent as the rounded sum of its new children (default: keep as given)."""
        return bool((self.raw.get("rounding") or {}).get("round_redistributed_target", False))

    @property
    def display_places(self) -> int:
        return int((self.raw.get("rounding") or {}).get("display_places", 2))
