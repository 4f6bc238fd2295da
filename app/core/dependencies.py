"""
Core dependencies for session resolution and role-gated routes
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import settings
from app.core.role_cache import RoleCache
from app.database.supabase_client import get_service_supabase, get_session_supabase
from app.modules.auth.service import SessionResolver
from supabase import Client
from typing import Optional, Sequence
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)

# Process-wide role cache; tests override get_role_cache to get a fresh one
_role_cache = RoleCache(ttl_seconds=settings.role_cache_ttl_seconds)


def get_role_cache() -> RoleCache:
    return _role_cache


def get_session_resolver(
    supabase: Client = Depends(get_session_supabase),
    lookup_client: Client = Depends(get_service_supabase),
    role_cache: RoleCache = Depends(get_role_cache),
) -> SessionResolver:
    return SessionResolver(supabase, role_cache, lookup_client=lookup_client)


async def get_current_resolver(
    credentials: HTTPAuthorizationCredentials = Security(security),
    resolver: SessionResolver = Depends(get_session_resolver),
) -> SessionResolver:
    """Resolver with the bearer token's session loaded and its role checked."""
    result = resolver.load_access_token(credentials.credentials)
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token"
        )
    await resolver.check_user_role()
    return resolver


async def get_optional_resolver(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    resolver: SessionResolver = Depends(get_session_resolver),
) -> SessionResolver:
    """Like get_current_resolver, but an absent or bad token leaves the session anonymous."""
    if credentials is None:
        resolver.handle_auth_state_change("INITIAL_SESSION", None)
        return resolver
    result = resolver.load_access_token(credentials.credentials)
    if result.ok:
        await resolver.check_user_role()
    return resolver


def role_allowed(role: Optional[str], allowed_roles: Sequence[str]) -> bool:
    return (role or "").upper() in {r.upper() for r in allowed_roles}


def require_roles(*allowed_roles: str):
    """Factory function to create a role gate dependency"""
    async def check_roles(
        resolver: SessionResolver = Depends(get_current_resolver)
    ) -> SessionResolver:
        if not role_allowed(resolver.user_role, allowed_roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You don't have permission to access this area."
            )
        return resolver
    return check_roles


async def require_admin(
    resolver: SessionResolver = Depends(get_current_resolver)
) -> SessionResolver:
    """Admin gate: one of the configured admin roles (SUPERADMIN, SUPPORT by default)."""
    if not resolver.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have permission to access this admin area."
        )
    return resolver


def check_user_access(user_id: str, resolver: SessionResolver) -> SessionResolver:
    """Allow if the caller is the user in the path or an admin"""
    if resolver.session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    if resolver.session.user_id == user_id or resolver.is_admin:
        return resolver
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
