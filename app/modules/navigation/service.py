from typing import Dict, List, Optional, Tuple

from app.config.routes_config import LOGIN_PATH, UNAUTHORIZED_PATH, get_route_table
from app.core.dependencies import role_allowed
from app.modules.navigation.schemas import AccessDecision, AccessStatus, RouteEntry


def _split(path: str) -> List[str]:
    return [segment for segment in path.strip().split("?")[0].split("/") if segment]


def match_path(pattern: str, path: str) -> Optional[Dict[str, str]]:
    """Params dict when path fits pattern (":name" segments capture), else None."""
    pattern_parts = _split(pattern)
    path_parts = _split(path)
    if len(pattern_parts) != len(path_parts):
        return None
    params = {}
    for expected, actual in zip(pattern_parts, path_parts):
        if expected.startswith(":"):
            params[expected[1:]] = actual
        elif expected != actual:
            return None
    return params


class RouteTable:
    def __init__(self, entries: Optional[List[RouteEntry]] = None):
        self.entries = entries if entries is not None else [RouteEntry(**r) for r in get_route_table()]

    def match(self, path: str) -> Optional[Tuple[RouteEntry, Dict[str, str]]]:
        """First entry fitting path, static segments winning over ":name" ones."""
        best = None
        for entry in self.entries:
            params = match_path(entry.path, path)
            if params is None:
                continue
            if not params:
                return entry, params
            if best is None:
                best = (entry, params)
        return best

    def decide(self, path: str, authenticated: bool, role: Optional[str]) -> AccessDecision:
        """What the role gate does for `path`: render, send to login, or deny."""
        matched = self.match(path)
        if matched is None:
            return AccessDecision(path=path, status=AccessStatus.NOT_FOUND, allowed=False, role=role)
        entry, params = matched

        def decision(status: AccessStatus, redirect_to: Optional[str] = None) -> AccessDecision:
            return AccessDecision(
                path=path,
                status=status,
                allowed=status == AccessStatus.ALLOWED,
                page=entry.page,
                params=params,
                redirect_to=redirect_to,
                role=role,
            )

        if entry.require_auth and not authenticated:
            return decision(AccessStatus.REDIRECT_LOGIN, LOGIN_PATH)
        if entry.allowed_roles and not role_allowed(role, entry.allowed_roles):
            return decision(AccessStatus.DENIED, UNAUTHORIZED_PATH)
        return decision(AccessStatus.ALLOWED)
