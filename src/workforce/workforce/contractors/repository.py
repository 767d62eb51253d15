from __future__ import annotations

from typing import Protocol, Sequence

from .model import Contractor


class ContractorRepository(Protocol):
    """Contractors are maintained outside this application; read-only here."""

    def list_all(self) -> Sequence[Contractor]:
        raise NotImplementedError
