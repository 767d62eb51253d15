from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Contractor:
    """Employing company a helper belongs to."""

    id: str
    name: str
