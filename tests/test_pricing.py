import pytest

from tanmore.core.errors import ValidationError
from tanmore.services import pricing


def test_retail_percentage_discount(make_snapshot) -> None:
    snapshot = make_snapshot(
        retail_price=1000, has_retail_discount=True, retail_discount=10, retail_discount_type="percentage"
    )
    line = pricing.price(snapshot, 3)
    assert line.tier == "retail"
    assert line.unit_price == 900
    assert line.line_total == 2700
    assert line.has_discount is True
    assert line.base_price == 1000


def _wholesale(make_snapshot, **overrides):
    fields = dict(
        retail_price=1000,
        has_wholesale_enabled=True,
        wholesale_min_quantity=5,
        wholesale_price=800,
        has_wholesale_discount=True,
        wholesale_discount=50,
        wholesale_discount_type="flat",
    )
    fields.update(overrides)
    return make_snapshot(**fields)


def test_wholesale_flat_discount_at_threshold(make_snapshot) -> None:
    line = pricing.price(_wholesale(make_snapshot), 5)
    assert line.tier == "wholesale"
    assert line.unit_price == 750
    assert line.line_total == 3750


def test_below_threshold_falls_back_to_retail_entirely(make_snapshot) -> None:
    line = pricing.price(_wholesale(make_snapshot), 4)
    assert line.tier == "retail"
    assert line.unit_price == 1000
    assert line.has_discount is False
    assert line.line_total == 4000


@pytest.mark.parametrize("quantity", [1, 5, 50, 10_000])
def test_wholesale_disabled_is_always_retail(make_snapshot, quantity: int) -> None:
    snapshot = _wholesale(make_snapshot, has_wholesale_enabled=False)
    assert pricing.price(snapshot, quantity).tier == "retail"


def test_wholesale_needs_a_price(make_snapshot) -> None:
    snapshot = _wholesale(make_snapshot, wholesale_price=None)
    line = pricing.price(snapshot, 20)
    assert line.tier == "retail"
    assert line.unit_price == 1000


def test_wholesale_needs_a_threshold(make_snapshot) -> None:
    snapshot = _wholesale(make_snapshot, wholesale_min_quantity=None)
    assert pricing.price(snapshot, 20).tier == "retail"


@pytest.mark.parametrize("discount_type", ["flat", "percentage"])
def test_zero_discount_is_noop(make_snapshot, discount_type: str) -> None:
    snapshot = make_snapshot(
        retail_price=1234, has_retail_discount=True, retail_discount=0, retail_discount_type=discount_type
    )
    assert pricing.price(snapshot, 2).unit_price == 1234


def test_flat_discount_larger_than_price_clamps_to_zero(make_snapshot) -> None:
    snapshot = make_snapshot(retail_price=300, has_retail_discount=True, retail_discount=500, retail_discount_type="flat")
    line = pricing.price(snapshot, 2)
    assert line.unit_price == 0
    assert line.line_total == 0


def test_percentage_over_hundred_clamps_to_zero(make_snapshot) -> None:
    snapshot = make_snapshot(
        retail_price=300, has_retail_discount=True, retail_discount=150, retail_discount_type="percentage"
    )
    assert pricing.price(snapshot, 1).unit_price == 0


def test_percentage_truncates_toward_zero(make_snapshot) -> None:
    # 999 * 15 / 100 = 149.85 -> 149 off
    snapshot = make_snapshot(
        retail_price=999, has_retail_discount=True, retail_discount=15, retail_discount_type="percentage"
    )
    assert pricing.price(snapshot, 1).unit_price == 850


@pytest.mark.parametrize(
    "amount,discount_type",
    [(100, None), (None, "flat")],
)
def test_discount_needs_amount_and_type(make_snapshot, amount, discount_type) -> None:
    snapshot = make_snapshot(
        retail_price=1000, has_retail_discount=True, retail_discount=amount, retail_discount_type=discount_type
    )
    line = pricing.price(snapshot, 1)
    assert line.unit_price == 1000
    assert line.has_discount is False


def test_disabled_discount_is_ignored(make_snapshot) -> None:
    snapshot = make_snapshot(retail_price=1000, has_retail_discount=False, retail_discount=100, retail_discount_type="flat")
    assert pricing.price(snapshot, 1).unit_price == 1000


def test_wholesale_tier_ignores_retail_discount(make_snapshot) -> None:
    snapshot = _wholesale(
        make_snapshot,
        has_wholesale_discount=False,
        has_retail_discount=True,
        retail_discount=500,
        retail_discount_type="flat",
    )
    line = pricing.price(snapshot, 5)
    assert line.tier == "wholesale"
    assert line.unit_price == 800


def test_non_positive_quantity_rejected(make_snapshot) -> None:
    with pytest.raises(ValidationError):
        pricing.price(make_snapshot(), 0)


def test_apply_discount_unknown_type_only_clamps() -> None:
    assert pricing.apply_discount(100, amount=10, discount_type="bogus") == 100
    assert pricing.apply_discount(-5, amount=0, discount_type="flat") == 0
