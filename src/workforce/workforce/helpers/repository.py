from __future__ import annotations

from typing import Protocol, Sequence

from .model import Helper, HelperUpdate, NewHelper


class HelperRepository(Protocol):
    """Repository interface for helpers.

    Note (DIP): the data layer depends on this interface, never on the wire format.
    """

    def list_all(self) -> Sequence[Helper]:
        raise NotImplementedError

    def insert(self, new_helper: NewHelper) -> Helper:
        raise NotImplementedError

    def update(self, helper_id: str, update: HelperUpdate) -> None:
        raise NotImplementedError

    def delete(self, helper_id: str) -> None:
        raise NotImplementedError
