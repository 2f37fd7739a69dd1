from datetime import datetime
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.components.model import SalaryComponent
from src.hr_payroll.hr_payroll.components.service import SalaryComponentCatalog
from src.hr_payroll.hr_payroll.core.enums import ComponentKind
from src.hr_payroll.hr_payroll.core.exceptions import ComponentConfigError, NotFound

STAMP = datetime(2024, 3, 1, 12, 0)


@pytest.fixture
def catalog(components):
    return SalaryComponentCatalog(components, clock=lambda: STAMP)


def test_upsert_inserts_and_stamps_last_updated(catalog, components):
    saved = catalog.upsert(
        SalaryComponent(component_id=None, name="  Income Tax ", kind=ComponentKind.TAX, amount=Decimal("15"), is_percentage=True)
    )

    assert saved.component_id == 1
    assert saved.name == "Income Tax"
    assert saved.last_updated == STAMP
    assert components.get_by_id(1) == saved


def test_upsert_updates_existing(catalog, new_component):
    saved = catalog.upsert(new_component("Bonus", ComponentKind.EARNING, "5"))

    updated = catalog.upsert(SalaryComponent(saved.component_id, "Bonus", ComponentKind.EARNING, Decimal("8"), True))

    assert catalog.get(saved.component_id).amount == Decimal("8")
    assert updated.last_updated == STAMP


def test_upsert_unknown_id_raises_not_found(catalog, new_component):
    with pytest.raises(NotFound):
        catalog.upsert(new_component("Bonus", ComponentKind.EARNING, "5", component_id=42))


@pytest.mark.parametrize(
    "name, amount, is_percentage",
    [
        ("", "5", False),
        ("   ", "5", False),
        ("Fee", "-1", False),
        ("Rate", "100.01", True),
        ("Rate", "-0.5", True),
    ],
)
def test_upsert_rejects_invalid_components(catalog, components, name, amount, is_percentage):
    with pytest.raises(ComponentConfigError):
        catalog.upsert(SalaryComponent(None, name, ComponentKind.DEDUCTION, Decimal(amount), is_percentage))

    assert components.list_all() == []


def test_percentage_boundaries_are_accepted(catalog, new_component):
    catalog.upsert(new_component("Zero", ComponentKind.TAX, "0"))
    catalog.upsert(new_component("Full", ComponentKind.TAX, "100"))

    assert [c.name for c in catalog.list()] == ["Zero", "Full"]


def test_flat_amount_above_hundred_is_fine(catalog, new_component):
    saved = catalog.upsert(new_component("Transport", ComponentKind.EARNING, "500", is_percentage=False))

    assert saved.amount == Decimal("500")


def test_list_filters_by_kind(catalog, new_component):
    catalog.upsert(new_component("Income Tax", ComponentKind.TAX, "15"))
    catalog.upsert(new_component("PF", ComponentKind.DEDUCTION, "7"))
    catalog.upsert(new_component("Bonus", ComponentKind.EARNING, "10"))

    assert [c.name for c in catalog.list(kind=ComponentKind.DEDUCTION)] == ["PF"]
    assert len(catalog.list()) == 3


def test_delete_unknown_raises_not_found(catalog):
    with pytest.raises(NotFound):
        catalog.delete(99)


def test_delete_removes_component(catalog, new_component):
    saved = catalog.upsert(new_component("PF", ComponentKind.DEDUCTION, "7"))

    catalog.delete(saved.component_id)

    with pytest.raises(NotFound):
        catalog.get(saved.component_id)


@pytest.mark.parametrize("amount", ["NaN", "sNaN", "Infinity", "-Infinity"])
def test_upsert_rejects_non_finite_amounts(catalog, components, amount):
    with pytest.raises(ComponentConfigError):
        catalog.upsert(SalaryComponent(None, "Odd", ComponentKind.EARNING, Decimal(amount), False))

    assert components.list_all() == []
