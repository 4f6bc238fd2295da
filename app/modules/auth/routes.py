from fastapi import APIRouter, Depends, HTTPException
from app.modules.auth.schemas import (
    LoginRequest, SignUpRequest, OtpSmsRequest, OtpSmsVerifyRequest,
    OtpEmailRequest, OtpEmailVerifyRequest, MagicLinkRequest,
    SessionResponse, MeResponse, RoleResponse, MessageResponse, AuthResult
)
from app.modules.auth.service import SessionResolver
from app.core.dependencies import get_session_resolver, get_current_resolver, require_admin, require_roles
from app.core.phone import INVALID_PHONE_MESSAGE

router = APIRouter(prefix="/auth", tags=["auth"])


def _raise_for_error(result: AuthResult, status_code: int = 401) -> None:
    if result.ok:
        return
    # Bad phone input is a validation problem, not a credential one
    code = 400 if result.error == INVALID_PHONE_MESSAGE else status_code
    raise HTTPException(status_code=code, detail=result.error)


async def _session_response(resolver: SessionResolver, result: AuthResult) -> SessionResponse:
    if resolver.session is None:
        raise HTTPException(status_code=401, detail="Authentication failed")
    await resolver.check_user_role()
    vendor_session = getattr(result.data, "session", None)
    return SessionResponse(
        access_token=getattr(vendor_session, "access_token", None),
        refresh_token=getattr(vendor_session, "refresh_token", None),
        user=resolver.session,
        role=resolver.user_role,
        is_admin=resolver.is_admin,
        resolved_email=result.meta.resolved_email if result.meta else None,
    )


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(
    register_data: SignUpRequest,
    resolver: SessionResolver = Depends(get_session_resolver)
):
    """Register a new member with email, or phone only"""
    result = resolver.sign_up(register_data)
    _raise_for_error(result, status_code=400)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=SessionResponse)
async def login(
    login_data: LoginRequest,
    resolver: SessionResolver = Depends(get_session_resolver)
):
    """Login with email or phone and password"""
    result = resolver.sign_in_with_password(login_data.identifier, login_data.password)
    _raise_for_error(result)
    return await _session_response(resolver, result)


@router.post("/otp/sms", response_model=MessageResponse)
async def send_otp_sms(
    request: OtpSmsRequest,
    resolver: SessionResolver = Depends(get_session_resolver)
):
    result = resolver.send_otp_sms(request.phone)
    _raise_for_error(result, status_code=400)
    return MessageResponse(message="OTP sent")


@router.post("/otp/sms/verify", response_model=SessionResponse)
async def verify_otp_sms(
    request: OtpSmsVerifyRequest,
    resolver: SessionResolver = Depends(get_session_resolver)
):
    result = resolver.verify_otp_sms(request.phone, request.token)
    _raise_for_error(result)
    return await _session_response(resolver, result)


@router.post("/otp/email", response_model=MessageResponse)
async def send_otp_email(
    request: OtpEmailRequest,
    resolver: SessionResolver = Depends(get_session_resolver)
):
    result = resolver.send_otp_email(request.email)
    _raise_for_error(result, status_code=400)
    return MessageResponse(message="OTP sent")


@router.post("/otp/email/verify", response_model=SessionResponse)
async def verify_otp_email(
    request: OtpEmailVerifyRequest,
    resolver: SessionResolver = Depends(get_session_resolver)
):
    result = resolver.verify_otp_email(request.email, request.token)
    _raise_for_error(result)
    return await _session_response(resolver, result)


@router.post("/magic-link", response_model=MessageResponse)
async def send_magic_link(
    request: MagicLinkRequest,
    resolver: SessionResolver = Depends(get_session_resolver)
):
    """Email a sign-in link that lands on redirect_path"""
    result = resolver.send_magic_link(request.email, request.redirect_path)
    _raise_for_error(result, status_code=400)
    return MessageResponse(message="Magic link sent")


@router.post("/logout", response_model=MessageResponse)
async def logout(resolver: SessionResolver = Depends(get_current_resolver)):
    """Logout and drop the cached role"""
    resolver.sign_out()
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=MeResponse)
async def get_me(resolver: SessionResolver = Depends(get_current_resolver)):
    """Current session and role (for frontend UI)."""
    return MeResponse(
        user=resolver.session,
        role=resolver.user_role,
        is_admin=resolver.is_admin,
        state=resolver.state,
    )


@router.get("/role", response_model=RoleResponse)
async def get_role(
    force: bool = False,
    resolver: SessionResolver = Depends(get_current_resolver)
):
    """Current role; force=true bypasses the role cache."""
    if force:
        await resolver.check_user_role(force=True)
    return RoleResponse(
        user_id=resolver.session.user_id,
        role=resolver.user_role,
        is_admin=resolver.is_admin,
    )


@router.get("/users/{user_id}/role", response_model=RoleResponse)
async def get_user_role(
    user_id: str,
    force: bool = False,
    resolver: SessionResolver = Depends(require_admin)
):
    """Back-office: role of any member"""
    info = await resolver.resolve_role(user_id, force=force)
    return RoleResponse(user_id=user_id, role=info.role, is_admin=info.is_admin)


@router.delete("/users/{user_id}/role-cache", response_model=MessageResponse)
async def clear_user_role_cache(
    user_id: str,
    resolver: SessionResolver = Depends(require_roles("SUPERADMIN"))
):
    """Drop a member's cached role after it was changed in the back-office"""
    resolver.role_cache.invalidate(user_id)
    return MessageResponse(message="Role cache cleared")
