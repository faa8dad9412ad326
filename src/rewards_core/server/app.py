"""HTTP adapter exposing the reward queries as JSON endpoints.

Routes (mounted under ``/api``):

- ``GET /api/customer-points``
- ``GET /api/customer-transactions/{customer_id}``
- ``GET /api/transactions``

Every response uses the ``{"success": ..., ...}`` envelope from
``rewards_core.server.envelope``. Handlers only translate between HTTP and
``RewardsService``; no reward rules live here.

Run locally with any ASGI server, e.g.::

    REWARDS_DATA_FILE=data/transactions.json uvicorn rewards_core.server.app:create_app --factory
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI

from rewards_core import __version__
from rewards_core.api import RewardsService
from rewards_core.config import RewardsConfig
from rewards_core.exceptions import CustomerNotFoundError
from rewards_core.server.envelope import error, failure, ok

logger = logging.getLogger(__name__)


def build_router(service: RewardsService) -> APIRouter:
    router = APIRouter()

    @router.get("/customer-points")
    def customer_points():
        try:
            summaries = service.get_customer_points()
        except Exception as e:
            logger.exception("Error fetching customer points")
            return failure(e)
        return ok([summary.to_dict() for summary in summaries])

    @router.get("/customer-transactions/{customer_id}")
    def customer_transactions(customer_id: str):
        try:
            detail = service.get_customer_transactions(customer_id)
        except CustomerNotFoundError as e:
            return error(str(e), status=404)
        except Exception as e:
            logger.exception("Error fetching transactions for customer %s", customer_id)
            return failure(e)
        return ok(detail.to_dict())

    @router.get("/transactions")
    def all_transactions():
        try:
            transactions = service.get_all_transactions()
        except Exception as e:
            logger.exception("Error fetching all transactions")
            return failure(e)
        return ok([txn.to_dict() for txn in transactions], meta={"count": len(transactions)})

    return router


def create_app(service: RewardsService | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        service: Query service to serve. Defaults to one built from
            ``RewardsConfig.from_env()``.
    """
    if service is None:
        service = RewardsService.from_config(RewardsConfig.from_env())

    app = FastAPI(
        title="Rewards Core",
        version=__version__,
        description="Customer loyalty points over a trailing window",
    )
    app.include_router(build_router(service), prefix="/api")

    @app.get("/")
    def root():
        return {"status": "ok"}

    return app
