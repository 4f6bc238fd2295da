from enum import Enum
from pydantic import BaseModel
from typing import Dict, List, Optional


class RouteEntry(BaseModel):
    path: str
    page: str
    require_auth: bool = False
    require_admin: bool = False
    allowed_roles: List[str] = []


class AccessStatus(str, Enum):
    ALLOWED = "allowed"
    REDIRECT_LOGIN = "redirect_login"
    DENIED = "denied"
    NOT_FOUND = "not_found"


class AccessDecision(BaseModel):
    path: str
    status: AccessStatus
    allowed: bool
    page: Optional[str] = None
    params: Dict[str, str] = {}
    redirect_to: Optional[str] = None
    role: Optional[str] = None
