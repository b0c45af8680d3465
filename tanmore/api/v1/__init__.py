from fastapi import APIRouter

from tanmore.api.v1 import cart
from tanmore.api.v1 import checkout
from tanmore.core.metrics import snapshot as metrics_snapshot

api_router = APIRouter()

api_router.include_router(cart.router)
api_router.include_router(checkout.router)


@api_router.get("/health", tags=["health"])
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@api_router.get("/metrics", tags=["metrics"])
def metrics() -> dict:
    return metrics_snapshot()
