from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ComponentKind
from .model import SalaryComponent


class SalaryComponentRepository(Protocol):
    def list_all(self, *, kind: Optional[ComponentKind] = None) -> Sequence[SalaryComponent]:
        """Components ordered by component_id."""

        raise NotImplementedError

    def get_by_id(self, component_id: int) -> Optional[SalaryComponent]:
        raise NotImplementedError

    def insert(self, component: SalaryComponent) -> int:
        raise NotImplementedError

    def update(self, component: SalaryComponent) -> bool:
        raise NotImplementedError

    def delete(self, component_id: int) -> bool:
        raise NotImplementedError
