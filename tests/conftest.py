import os
import uuid
from collections.abc import AsyncIterator, Generator
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Keep pytest output high-signal by disabling outbound Sentry capture in tests.
os.environ["SENTRY_DSN"] = ""

from tanmore.core import metrics
from tanmore.models import Base, ProductVariantSnapshot, User
from tanmore.services.snapshots import VariantSnapshot


SELLER_ID = uuid.UUID("00000000-0000-0000-0000-0000000000a1")
PRODUCT_ID = uuid.UUID("00000000-0000-0000-0000-0000000000b1")


def _snapshot_fields(**overrides: Any) -> dict[str, Any]:
    fields: dict[str, Any] = dict(
        seller_id=SELLER_ID,
        seller_store_name="Lantern Goods",
        is_seller_approved=True,
        is_seller_archived=False,
        is_seller_banned=False,
        product_id=PRODUCT_ID,
        product_title="Cotton Tee",
        product_description="Plain tee",
        product_primary_image_url="https://cdn.example.com/tee.png",
        category_name="Apparel",
        is_product_approved=True,
        is_product_archived=False,
        is_product_banned=False,
        variant_id=uuid.uuid4(),
        color="black",
        size="M",
        is_variant_archived=False,
        is_variant_in_stock=True,
        stock_amount=10,
        weight_grams=200,
        retail_price=1000,
    )
    fields.update(overrides)
    return fields


@pytest.fixture(scope="module")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_metrics() -> Generator[None, None, None]:
    # Counters are process-global and would leak across tests.
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def make_snapshot():
    """Build an eligible in-memory VariantSnapshot; override any field."""

    def _make(**overrides: Any) -> VariantSnapshot:
        return VariantSnapshot(**_snapshot_fields(**overrides))

    return _make


@pytest.fixture
async def session() -> AsyncIterator[AsyncSession]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    SessionLocal = async_sessionmaker(engine, expire_on_commit=False)
    async with SessionLocal() as db_session:
        yield db_session
    await engine.dispose()


@pytest.fixture
def seed_customer(session: AsyncSession):
    async def _seed(**overrides: Any) -> User:
        values: dict[str, Any] = {"email": f"{uuid.uuid4().hex[:8]}@example.com", "name": "Buyer"}
        values.update(overrides)
        customer = User(**values)
        session.add(customer)
        await session.commit()
        return customer

    return _seed


@pytest.fixture
def seed_snapshot(session: AsyncSession):
    async def _seed(**overrides: Any) -> ProductVariantSnapshot:
        row = ProductVariantSnapshot(**_snapshot_fields(**overrides))
        session.add(row)
        await session.commit()
        return row

    return _seed
