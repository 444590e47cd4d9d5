"""
Order endpoints.

  GET  /orders                -> [order, ...] newest first
  POST /orders                -> 201 order
  GET  /orders/{id}           -> order
  PUT  /orders/{id}           -> order
  GET  /orders/{id}/summary   -> {"summary", "source"}

All routes require a bearer token and only ever see the caller's own
orders; another user's order is reported as 404.

Handlers are plain ``def`` so the blocking provider call in the summary
route runs in the server's threadpool.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ordering import OrderValidationError, SummaryOrchestrator, validate_order
from routes.dependencies import (
    get_current_user_id,
    get_store,
    get_summary_orchestrator,
    parse_order_id,
)
from routes.schemas import OrderRequest, OrderResponse, OrderSummaryResponse
from storage import OrderStore, StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def _internal_error(e: StorageError) -> HTTPException:
    logger.error(f"Order storage failure: {e}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="internal error")


def _validated(body: OrderRequest):
    try:
        return validate_order(body.preference, body.address, body.pickup_time)
    except OrderValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("", response_model=List[OrderResponse], response_model_exclude_none=True)
def list_orders(user_id: int = Depends(get_current_user_id), store: OrderStore = Depends(get_store)):
    try:
        records = store.list_orders(user_id)
    except StorageError as e:
        raise _internal_error(e)
    return [OrderResponse.from_record(r) for r in records]


@router.post(
    "",
    response_model=OrderResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_order(
    body: OrderRequest,
    user_id: int = Depends(get_current_user_id),
    store: OrderStore = Depends(get_store),
):
    order = _validated(body)
    try:
        record = store.create_order(user_id, order)
    except StorageError as e:
        raise _internal_error(e)

    logger.info(f"Order {record.id} created for user {user_id} ({record.preference.value})")
    return OrderResponse.from_record(record)


@router.get("/{order_id}", response_model=OrderResponse, response_model_exclude_none=True)
def get_order(
    order_id: str,
    user_id: int = Depends(get_current_user_id),
    store: OrderStore = Depends(get_store),
):
    oid = parse_order_id(order_id)
    try:
        record = store.get_order(oid, user_id)
    except StorageError as e:
        raise _internal_error(e)

    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return OrderResponse.from_record(record)


@router.put("/{order_id}", response_model=OrderResponse, response_model_exclude_none=True)
def update_order(
    order_id: str,
    body: OrderRequest,
    user_id: int = Depends(get_current_user_id),
    store: OrderStore = Depends(get_store),
):
    oid = parse_order_id(order_id)
    order = _validated(body)
    try:
        record = store.update_order(oid, user_id, order)
    except StorageError as e:
        raise _internal_error(e)

    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")

    logger.info(f"Order {record.id} updated for user {user_id} ({record.preference.value})")
    return OrderResponse.from_record(record)


@router.get("/{order_id}/summary", response_model=OrderSummaryResponse)
def order_summary(
    order_id: str,
    user_id: int = Depends(get_current_user_id),
    store: OrderStore = Depends(get_store),
    orchestrator: SummaryOrchestrator = Depends(get_summary_orchestrator),
):
    """
    AI-generated summary of one order, or the fixed fallback text.

    Generation problems never turn into an error status here; only auth,
    a bad id or a missing order do.
    """
    oid = parse_order_id(order_id)
    try:
        record = store.get_order(oid, user_id)
    except StorageError as e:
        raise _internal_error(e)

    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")

    result = orchestrator.produce_summary(record.to_facts())
    return OrderSummaryResponse(summary=result.summary, source=result.source)
