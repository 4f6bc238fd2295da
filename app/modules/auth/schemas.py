from enum import Enum
from pydantic import BaseModel, EmailStr, Field
from typing import Any, Optional, List


class SessionState(str, Enum):
    UNKNOWN = "unknown"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class Session(BaseModel):
    user_id: str
    email: Optional[str] = None
    phone: Optional[str] = None
    full_name: Optional[str] = None
    access_token: Optional[str] = Field(default=None, exclude=True)


class AuthMeta(BaseModel):
    resolved_email: Optional[str] = None
    tried_phone_direct: bool = False


class AuthResult(BaseModel):
    """Outcome of a resolver network call: `error` is set instead of raising."""
    data: Optional[Any] = None
    error: Optional[str] = None
    meta: Optional[AuthMeta] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LoginRequest(BaseModel):
    identifier: str = Field(..., min_length=1)  # email or phone
    password: str = Field(..., min_length=1)


class SignUpRequest(BaseModel):
    email: Optional[EmailStr] = None
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = None
    phone: Optional[str] = None
    referral_code: Optional[str] = None
    physical_card_requested: bool = False
    country: Optional[str] = None
    city: Optional[str] = None


class OtpSmsRequest(BaseModel):
    phone: str = Field(..., min_length=1)


class OtpSmsVerifyRequest(BaseModel):
    phone: str = Field(..., min_length=1)
    token: str = Field(..., min_length=1)


class OtpEmailRequest(BaseModel):
    email: EmailStr


class OtpEmailVerifyRequest(BaseModel):
    email: EmailStr
    token: str = Field(..., min_length=1)


class MagicLinkRequest(BaseModel):
    email: EmailStr
    redirect_path: str = "/dashboard"


class RoleResponse(BaseModel):
    user_id: str
    role: str
    is_admin: bool


class SessionResponse(BaseModel):
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    user: Session
    role: Optional[str] = None
    is_admin: bool = False
    resolved_email: Optional[str] = None


class MeResponse(BaseModel):
    user: Session
    role: str
    is_admin: bool
    state: SessionState


class MessageResponse(BaseModel):
    message: str
    details: Optional[List[str]] = None
