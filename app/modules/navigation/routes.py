from fastapi import APIRouter, Depends, Query
from app.core.dependencies import get_optional_resolver
from app.modules.auth.service import SessionResolver
from app.modules.navigation.schemas import AccessDecision, RouteEntry
from app.modules.navigation.service import RouteTable
from typing import List

router = APIRouter(prefix="/routes", tags=["routes"])


def get_route_table() -> RouteTable:
    return RouteTable()


@router.get("", response_model=List[RouteEntry])
async def list_routes(table: RouteTable = Depends(get_route_table)):
    """Page route table with the role gate of each entry"""
    return table.entries


@router.get("/access", response_model=AccessDecision)
async def check_route_access(
    path: str = Query(..., min_length=1),
    resolver: SessionResolver = Depends(get_optional_resolver),
    table: RouteTable = Depends(get_route_table),
):
    """Decide whether the caller may open a page; bearer token optional."""
    return table.decide(path, authenticated=resolver.session is not None, role=resolver.user_role)
