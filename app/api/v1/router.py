"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from app.api.v1 import analytics, auth, contracts, health, insurance, matching, queries, vehicles, visuals

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(vehicles.router)
api_router.include_router(insurance.router)
api_router.include_router(matching.router)
api_router.include_router(contracts.router)
api_router.include_router(queries.router)
api_router.include_router(visuals.router)
api_router.include_router(analytics.router)


def get_api_router() -> APIRouter:
    return api_router
