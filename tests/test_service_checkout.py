import uuid

import pytest

from tanmore.core import metrics
from tanmore.core.config import settings
from tanmore.core.errors import AuthError, ValidationError
from tanmore.schemas.cart import CartItemCreate
from tanmore.services import cart as cart_service
from tanmore.services import checkout as checkout_service

from conftest import PRODUCT_ID

pytestmark = pytest.mark.anyio


async def test_buy_now_uses_requested_quantity_and_tier(session, seed_customer, seed_snapshot) -> None:
    customer = await seed_customer()
    snapshot = await seed_snapshot(
        retail_price=1000,
        has_wholesale_enabled=True,
        wholesale_price=800,
        wholesale_min_quantity=5,
    )

    result = await checkout_service.checkout_from_product(session, customer.id, snapshot.variant_id, 5)

    assert result.source == "product"
    assert isinstance(result.checkout_session_id, uuid.UUID)
    variant = result.valid_items[0].products[0].variants[0]
    assert variant.quantity == 5
    assert variant.buying_mode == "wholesale"
    assert result.subtotal == 4000
    assert result.invalid_items == []
    assert metrics.snapshot()["checkout_sessions_product"] == 1


async def test_buy_now_ignores_stored_cart_quantity(session, seed_customer, seed_snapshot) -> None:
    customer = await seed_customer()
    customer_id = customer.id
    variant_id = (await seed_snapshot()).variant_id
    await cart_service.add_item(
        session, customer_id, CartItemCreate(product_id=PRODUCT_ID, variant_id=variant_id, quantity=7)
    )

    result = await checkout_service.checkout_from_product(session, customer_id, variant_id, 1)
    assert result.valid_items[0].products[0].variants[0].quantity == 1
    assert result.subtotal == 1000


async def test_buy_now_rejects_ineligible_variant(session, seed_customer, seed_snapshot) -> None:
    customer = await seed_customer()
    snapshot = await seed_snapshot(is_product_archived=True)
    with pytest.raises(ValidationError) as exc:
        await checkout_service.checkout_from_product(session, customer.id, snapshot.variant_id, 1)
    assert exc.value.field == "variant_id"
    assert exc.value.reason == "variant unavailable due to moderation or stock"


async def test_buy_now_rejects_unknown_variant(session, seed_customer) -> None:
    customer = await seed_customer()
    with pytest.raises(ValidationError) as exc:
        await checkout_service.checkout_from_product(session, customer.id, uuid.uuid4(), 1)
    assert exc.value.reason == "variant not found in system"


@pytest.mark.parametrize("quantity", [0, -3, 2_147_483_648])
async def test_buy_now_rejects_bad_quantity(session, seed_customer, quantity) -> None:
    customer = await seed_customer()
    with pytest.raises(ValidationError) as exc:
        await checkout_service.checkout_from_product(session, customer.id, uuid.uuid4(), quantity)
    assert exc.value.field == "quantity"


async def test_buy_now_archived_customer(session, seed_customer, seed_snapshot) -> None:
    customer = await seed_customer(is_archived=True)
    customer_id = customer.id
    variant_id = (await seed_snapshot()).variant_id
    with pytest.raises(AuthError):
        await checkout_service.checkout_from_product(session, customer_id, variant_id, 1)


async def test_cart_checkout_splits_valid_and_invalid(session, seed_customer, seed_snapshot) -> None:
    customer = await seed_customer()
    customer_id = customer.id
    good = (await seed_snapshot(retail_price=300)).variant_id
    bad_snapshot = await seed_snapshot()
    bad = bad_snapshot.variant_id
    for variant_id in (good, bad):
        await cart_service.add_item(
            session, customer_id, CartItemCreate(product_id=PRODUCT_ID, variant_id=variant_id, quantity=2)
        )
    bad_snapshot.is_variant_archived = True
    await session.commit()
    missing = uuid.uuid4()

    result = await checkout_service.checkout_from_cart(session, customer_id, [good, bad, missing])

    assert result.source == "cart"
    assert result.item_count == 1
    assert result.subtotal == 600
    assert result.total_weight_grams == 400
    reasons = {item.variant_id: item.reason for item in result.invalid_items}
    assert reasons == {
        bad: "variant unavailable due to moderation or stock",
        missing: "variant not found in system",
    }
    assert metrics.snapshot()["checkout_sessions_cart"] == 1


async def test_cart_checkout_with_nothing_valid_still_opens_session(session, seed_customer) -> None:
    customer = await seed_customer()
    result = await checkout_service.checkout_from_cart(session, customer.id, [uuid.uuid4()])
    assert result.item_count == 0
    assert result.checkout_session_id is not None
    assert len(result.invalid_items) == 1


async def test_each_checkout_gets_a_fresh_session_id(session, seed_customer, seed_snapshot) -> None:
    customer = await seed_customer()
    customer_id = customer.id
    variant_id = (await seed_snapshot()).variant_id
    first = await checkout_service.checkout_from_product(session, customer_id, variant_id, 1)
    second = await checkout_service.checkout_from_product(session, customer_id, variant_id, 1)
    assert first.checkout_session_id != second.checkout_session_id


async def test_cart_checkout_rejects_empty_list(session, seed_customer) -> None:
    customer = await seed_customer()
    with pytest.raises(ValidationError) as exc:
        await checkout_service.checkout_from_cart(session, customer.id, [])
    assert exc.value.field == "variant_ids"


async def test_cart_checkout_rejects_too_many_ids(session, seed_customer, monkeypatch) -> None:
    customer = await seed_customer()
    monkeypatch.setattr(settings, "max_checkout_variants", 2)
    with pytest.raises(ValidationError) as exc:
        await checkout_service.checkout_from_cart(session, customer.id, [uuid.uuid4() for _ in range(3)])
    assert exc.value.field == "variant_ids"
