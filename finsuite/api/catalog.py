"""
Service catalog API endpoint.
"""

from typing import Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from finsuite.auth.dependencies import get_current_user
from finsuite.auth.sessions import SessionUser
from finsuite.services.catalog import group_by_category, search_services

router = APIRouter()


class ServiceItem(BaseModel):
    name: str
    description: str
    href: str


class CatalogResponse(BaseModel):
    greeting: str
    total: int
    categories: Dict[str, List[ServiceItem]]


@router.get("", response_model=CatalogResponse)
async def list_services(
    q: str = "",
    current_user: SessionUser = Depends(get_current_user),
):
    """List dashboard services, optionally filtered by a search query."""
    entries = search_services(q)
    grouped = group_by_category(entries)

    return CatalogResponse(
        greeting=f"Welcome, {current_user.display_name}",
        total=len(entries),
        categories={
            category: [
                ServiceItem(name=e.name, description=e.description, href=e.href)
                for e in items
            ]
            for category, items in grouped.items()
        },
    )
