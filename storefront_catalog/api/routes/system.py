"""System-level routes such as health checks."""

from __future__ import annotations

import httpx
from fastapi import APIRouter

from storefront_catalog.config import settings

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict[str, str]:
    """Hello World endpoint used by smoke tests."""

    return {"message": "Hello World"}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint with GraphQL backend reachability check."""

    try:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                settings.GRAPHQL_ENDPOINT,
                json={"query": "{ __typename }"},
                timeout=5.0,
            )
            graphql_status = (
                "connected" if response.status_code == 200 else "disconnected"
            )
    except httpx.HTTPError:
        graphql_status = "disconnected"

    return {
        "status": "healthy",
        "graphql": graphql_status,
        "environment": settings.ENVIRONMENT,
    }
