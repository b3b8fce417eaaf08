"""Buyer query (seller inbox) endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.v1._authz import DOMAIN_ERRORS, authorize_request, ensure_party, load_actor, to_http_error
from app.core.dependencies import get_db_session
from app.database.seed import GENERIC_SELLER_ID
from app.models import QueryStatus, UserQuery, UserRole
from app.schemas.queries import QueryReplyRequest, QueryResponse, QuerySendRequest
from app.services.query_service import QueryService
from app.services.vehicle_service import VehicleService

router = APIRouter(prefix="/queries", tags=["queries"])


@router.post("", response_model=QueryResponse, status_code=status.HTTP_201_CREATED)
def send_query(
    payload: QuerySendRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> QueryResponse:
    current = authorize_request(authorization, ["queries.send"])
    actor = load_actor(db, current)
    try:
        vehicle = VehicleService(db=db).resolve(payload.vehicle_id)
        query = QueryService(db=db).send(actor, vehicle, payload.message)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return QueryResponse.model_validate(query)


@router.get("", response_model=list[QueryResponse])
def list_queries(
    status_filter: QueryStatus | None = Query(default=None, alias="status"),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> list[QueryResponse]:
    """Buyers see what they sent; sellers see their inbox including unowned catalog vehicles."""
    current = authorize_request(authorization, ["queries.read"])
    actor = load_actor(db, current)
    service = QueryService(db=db)
    if actor.role == UserRole.SELLER:
        queries = service.list_for_seller(actor.id, status_filter)
    elif actor.role == UserRole.BUYER:
        queries = service.list_for_buyer(actor.id, status_filter)
    else:
        stmt = select(UserQuery)
        if status_filter is not None:
            stmt = stmt.where(UserQuery.status == status_filter)
        queries = list(db.scalars(stmt.order_by(UserQuery.created_at.desc())))
    return [QueryResponse.model_validate(query) for query in queries]


@router.get("/{query_id}", response_model=QueryResponse)
def get_query(
    query_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> QueryResponse:
    current = authorize_request(authorization, ["queries.read"])
    actor = load_actor(db, current)
    try:
        query = QueryService(db=db).get(query_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    if actor.role == UserRole.SELLER:
        if query.seller_id != GENERIC_SELLER_ID:
            ensure_party(actor, query.seller_id)
    else:
        ensure_party(actor, query.buyer_id)
    return QueryResponse.model_validate(query)


@router.post("/{query_id}/reply", response_model=QueryResponse)
def reply_to_query(
    query_id: str,
    payload: QueryReplyRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> QueryResponse:
    current = authorize_request(authorization, ["queries.reply"])
    actor = load_actor(db, current)
    try:
        query = QueryService(db=db).reply(query_id, actor.id, payload.reply)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return QueryResponse.model_validate(query)


@router.delete("/{query_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_query(
    query_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> None:
    current = authorize_request(authorization, ["queries.delete"])
    actor = load_actor(db, current)
    try:
        QueryService(db=db).delete(query_id, actor)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
