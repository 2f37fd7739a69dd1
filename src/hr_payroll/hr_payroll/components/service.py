from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.money import ZERO
from ..core.constants import MAX_PERCENTAGE
from ..core.enums import ComponentKind
from ..core.exceptions import ComponentConfigError, NotFound
from .model import SalaryComponent
from .repository import SalaryComponentRepository

logger = logging.getLogger(__name__)


def validate_component(component: SalaryComponent) -> None:
    """Reject catalog entries the payroll engine cannot apply safely.

    Percentages above 100 are refused so a configuration slip cannot push net pay
    below zero.
    """
    if not component.name or not component.name.strip():
        raise ComponentConfigError("Component name must not be empty")
    if not isinstance(component.kind, ComponentKind):
        raise ComponentConfigError(f"Unknown component kind: {component.kind!r}")
    if component.amount is None or not component.amount.is_finite():
        raise ComponentConfigError(f"Component '{component.name}' amount must be a finite number")
    if component.amount < ZERO:
        raise ComponentConfigError(f"Component '{component.name}' amount must be >= 0")
    if component.is_percentage and component.amount > MAX_PERCENTAGE:
        raise ComponentConfigError(f"Component '{component.name}' percentage must be between 0 and {MAX_PERCENTAGE}")


class SalaryComponentCatalog:
    """Use case: maintain the components that parametrize every payroll preview.

    Changes are visible to previews computed afterwards only; finalized runs keep
    the amounts they were approved with.
    """

    def __init__(self, components: SalaryComponentRepository, *, clock: Callable[[], datetime] = now_local):
        self._components = components
        self._clock = clock

    def list(self, *, kind: Optional[ComponentKind] = None) -> Sequence[SalaryComponent]:
        return list(self._components.list_all(kind=kind))

    def get(self, component_id: int) -> SalaryComponent:
        component = self._components.get_by_id(int(component_id))
        if not component:
            raise NotFound(f"Salary component {component_id} not found")
        return component

    def upsert(self, component: SalaryComponent) -> SalaryComponent:
        component = replace(component, name=(component.name or "").strip(), last_updated=self._clock())
        validate_component(component)

        if component.component_id is None:
            component_id = self._components.insert(component)
            logger.info("salary component created id=%s name=%s", component_id, component.name)
            return replace(component, component_id=component_id)

        if not self._components.update(component):
            raise NotFound(f"Salary component {component.component_id} not found")
        logger.info("salary component updated id=%s name=%s", component.component_id, component.name)
        return component

    def delete(self, component_id: int) -> None:
        if not self._components.delete(int(component_id)):
            raise NotFound(f"Salary component {component_id} not found")
        logger.info("salary component deleted id=%s", component_id)
