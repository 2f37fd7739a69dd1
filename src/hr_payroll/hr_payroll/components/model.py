from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ComponentKind


@dataclass(frozen=True)
class SalaryComponent:
    """A configured earning, deduction or tax.

    When ``is_percentage`` is set, ``amount`` is a rate in percent; otherwise it is
    a flat amount per pay period.
    """

    component_id: Optional[int]
    name: str
    kind: ComponentKind
    amount: Decimal
    is_percentage: bool = False
    last_updated: Optional[datetime] = None
