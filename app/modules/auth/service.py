import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

from supabase import Client

from app.config import settings as app_settings
from app.config.settings import Settings
from app.core.phone import INVALID_PHONE_MESSAGE, InvalidPhoneFormat, normalize_phone
from app.core.role_cache import RoleCache, RoleInfo
from app.modules.auth.email_lookup import (
    DEFAULT_STRATEGIES, PhoneEmailStrategy, resolve_email_by_phone
)
from app.modules.auth.schemas import AuthMeta, AuthResult, Session, SessionState, SignUpRequest

logger = logging.getLogger(__name__)

NO_ACCOUNT_FOR_PHONE = "No account found for this phone. Please use your email."


def _error_message(exc: Exception, fallback: str) -> str:
    return getattr(exc, "message", None) or str(exc) or fallback


def session_from_user(user: Any, access_token: Optional[str] = None) -> Session:
    """Narrow a Supabase auth user into a Session. Empty phone/email become None."""
    metadata = getattr(user, "user_metadata", None) or {}
    return Session(
        user_id=user.id,
        email=getattr(user, "email", None) or None,
        phone=getattr(user, "phone", None) or None,
        full_name=metadata.get("full_name") or None,
        access_token=access_token,
    )


class SessionResolver:
    """Current user identity and role on top of Supabase Auth.

    Network operations return an AuthResult rather than raising. Role lookups
    go through the shared RoleCache so concurrent callers for one user share
    a single fetch.
    """

    def __init__(
        self,
        supabase: Client,
        role_cache: RoleCache,
        lookup_client: Optional[Client] = None,
        settings: Settings = app_settings,
        email_strategies: Sequence[PhoneEmailStrategy] = DEFAULT_STRATEGIES,
    ):
        self.supabase = supabase
        self.lookup_client = lookup_client or supabase
        self.role_cache = role_cache
        self.settings = settings
        self.email_strategies = list(email_strategies)
        self.session: Optional[Session] = None
        self.state = SessionState.UNKNOWN
        self.user_role: Optional[str] = None
        self.is_admin = False

    # -- session state -------------------------------------------------

    def _set_session(self, session: Optional[Session]) -> None:
        if session is None:
            self.session = None
            self.user_role = None
            self.is_admin = False
            self.state = SessionState.ANONYMOUS
            return
        if self.session is not None and self.session.user_id != session.user_id:
            self.user_role = None
            self.is_admin = False
        self.session = session
        self.state = SessionState.AUTHENTICATED

    def _apply_auth_response(self, response: Any) -> None:
        user = getattr(response, "user", None)
        if user is None:
            return
        vendor_session = getattr(response, "session", None)
        token = getattr(vendor_session, "access_token", None)
        self._set_session(session_from_user(user, token))

    def restore_session(self) -> Optional[Session]:
        """Pick up a session the client already holds (e.g. from storage)."""
        self.state = SessionState.AUTHENTICATING
        try:
            vendor_session = self.supabase.auth.get_session()
        except Exception as e:
            logger.warning(f"Could not restore session: {e}")
            vendor_session = None
        if vendor_session is not None and getattr(vendor_session, "user", None):
            self._set_session(session_from_user(vendor_session.user, vendor_session.access_token))
        else:
            self._set_session(None)
        return self.session

    def load_access_token(self, token: str) -> AuthResult:
        """Resolve a bearer token issued by Supabase into the current session."""
        self.state = SessionState.AUTHENTICATING
        try:
            response = self.supabase.auth.get_user(token)
        except Exception as e:
            self._set_session(None)
            return AuthResult(error=_error_message(e, "Invalid or expired token"))
        if response is None or not response.user:
            self._set_session(None)
            return AuthResult(error="Invalid or expired token")
        self._set_session(session_from_user(response.user, token))
        return AuthResult(data=self.session)

    def handle_auth_state_change(self, event: str, vendor_session: Any) -> None:
        """Apply an auth event from the Supabase client."""
        user = getattr(vendor_session, "user", None) if vendor_session is not None else None
        if user is not None:
            self._set_session(session_from_user(user, getattr(vendor_session, "access_token", None)))
            return
        if self.session is not None:
            logger.info(f"Auth event {event} cleared session for user {self.session.user_id}")
            self.role_cache.invalidate(self.session.user_id)
        self._set_session(None)

    def subscribe(self) -> Any:
        """Follow the client's auth events; call .unsubscribe() on the result to stop."""
        return self.supabase.auth.on_auth_state_change(self.handle_auth_state_change)

    # -- sign-up / sign-in ---------------------------------------------

    def sign_up(self, request: SignUpRequest) -> AuthResult:
        """Register with email when one is given, otherwise phone-only."""
        try:
            metadata = {
                "full_name": request.full_name or "",
                "referral_code": request.referral_code or "",
                "physical_card_requested": bool(request.physical_card_requested),
                "country": request.country or "",
                "city": request.city or "",
            }
            phone = (request.phone or "").strip()
            if request.email:
                metadata["phone"] = phone
                credentials = {
                    "email": request.email,
                    "password": request.password,
                    "options": {
                        "data": metadata,
                        "email_redirect_to": f"{self.settings.app_url}/login",
                    },
                }
            else:
                if not phone:
                    return AuthResult(error="Email or phone is required")
                try:
                    phone = normalize_phone(phone, self.settings.default_country_code)
                except InvalidPhoneFormat:
                    return AuthResult(error=INVALID_PHONE_MESSAGE)
                credentials = {
                    "phone": phone,
                    "password": request.password,
                    "options": {"data": metadata},
                }
            response = self.supabase.auth.sign_up(credentials)
            return AuthResult(data=response)
        except Exception as e:
            return AuthResult(error=_error_message(e, "Registration failed"))

    def _password_sign_in(self, credentials: Dict[str, str]) -> Any:
        response = self.supabase.auth.sign_in_with_password(credentials)
        if response is None or not response.user:
            raise ValueError("Invalid login credentials")
        return response

    def sign_in_with_password(self, identifier: str, password: str) -> AuthResult:
        self.state = SessionState.AUTHENTICATING
        result = self._sign_in_with_password(identifier.strip(), password)
        if result.ok:
            self._apply_auth_response(result.data)
        elif self.session is None:
            self.state = SessionState.ANONYMOUS
        else:
            self.state = SessionState.AUTHENTICATED
        return result

    def _sign_in_with_password(self, identifier: str, password: str) -> AuthResult:
        if "@" in identifier:
            meta = AuthMeta(resolved_email=identifier, tried_phone_direct=False)
            try:
                response = self._password_sign_in({"email": identifier, "password": password})
            except Exception as e:
                return AuthResult(error=_error_message(e, "Login failed"), meta=meta)
            return AuthResult(data=response, meta=meta)

        try:
            phone = normalize_phone(identifier, self.settings.default_country_code)
        except InvalidPhoneFormat:
            return AuthResult(error=INVALID_PHONE_MESSAGE)

        # Direct phone+password only works when phone auth is enabled on the project
        try:
            response = self._password_sign_in({"phone": phone, "password": password})
            return AuthResult(data=response, meta=AuthMeta(tried_phone_direct=True))
        except Exception as e:
            first_error = _error_message(e, "Login failed")
            logger.info(f"Direct phone sign-in failed, resolving email for {phone}")

        try:
            email = resolve_email_by_phone(self.lookup_client, phone, self.email_strategies)
        except Exception as e:
            logger.error(f"Phone to email resolution failed: {e}")
            return AuthResult(error=first_error, meta=AuthMeta(tried_phone_direct=True))

        if not email:
            return AuthResult(error=NO_ACCOUNT_FOR_PHONE, meta=AuthMeta(tried_phone_direct=True))

        meta = AuthMeta(resolved_email=email, tried_phone_direct=True)
        try:
            response = self._password_sign_in({"email": email, "password": password})
        except Exception as e:
            return AuthResult(error=_error_message(e, "Login failed"), meta=meta)
        return AuthResult(data=response, meta=meta)

    # -- OTP and magic links -------------------------------------------

    def send_otp_sms(self, phone: str) -> AuthResult:
        try:
            normalized = normalize_phone(phone, self.settings.default_country_code)
        except InvalidPhoneFormat:
            return AuthResult(error=INVALID_PHONE_MESSAGE)
        try:
            response = self.supabase.auth.sign_in_with_otp({"phone": normalized})
            return AuthResult(data=response)
        except Exception as e:
            return AuthResult(error=_error_message(e, "Failed to send OTP"))

    def verify_otp_sms(self, phone: str, token: str) -> AuthResult:
        try:
            normalized = normalize_phone(phone, self.settings.default_country_code)
        except InvalidPhoneFormat:
            return AuthResult(error=INVALID_PHONE_MESSAGE)
        self.state = SessionState.AUTHENTICATING
        try:
            response = self.supabase.auth.verify_otp({"phone": normalized, "token": token, "type": "sms"})
        except Exception as e:
            self._set_session(self.session)
            return AuthResult(error=_error_message(e, "Failed to verify OTP"))
        self._apply_auth_response(response)
        self._set_session(self.session)
        return AuthResult(data=response)

    def send_otp_email(self, email: str) -> AuthResult:
        try:
            response = self.supabase.auth.sign_in_with_otp({
                "email": email,
                "options": {"should_create_user": False},
            })
            return AuthResult(data=response)
        except Exception as e:
            return AuthResult(error=_error_message(e, "Failed to send Email OTP"))

    def verify_otp_email(self, email: str, token: str) -> AuthResult:
        self.state = SessionState.AUTHENTICATING
        try:
            response = self.supabase.auth.verify_otp({"email": email, "token": token, "type": "email"})
        except Exception as e:
            self._set_session(self.session)
            return AuthResult(error=_error_message(e, "Failed to verify Email OTP"))
        self._apply_auth_response(response)
        self._set_session(self.session)
        return AuthResult(data=response)

    def send_magic_link(self, email: str, redirect_path: str = "/dashboard") -> AuthResult:
        """Send a magic link, relaxing options when the project rejects them."""
        redirect_to = f"{self.settings.app_url}{redirect_path}"
        attempts: List[Dict[str, Any]] = [
            # New or existing user, explicit redirect
            {"should_create_user": True, "email_redirect_to": redirect_to},
            # Existing users only; projects often disallow creation by magic link
            {"should_create_user": False, "email_redirect_to": redirect_to},
            # Let Supabase use its Site URL when the redirect is not whitelisted
            {"should_create_user": False},
        ]
        last_error = "Failed to send magic link"
        for number, options in enumerate(attempts, start=1):
            try:
                response = self.supabase.auth.sign_in_with_otp({"email": email, "options": options})
                return AuthResult(data=response)
            except Exception as e:
                last_error = _error_message(e, last_error)
                logger.warning(f"send_magic_link attempt {number} failed: {last_error}")
        return AuthResult(error=last_error)

    # -- roles -----------------------------------------------------------

    def classify_role(self, raw_role: Any) -> RoleInfo:
        role = (str(raw_role) if raw_role else "").strip().upper() or self.settings.default_role
        return RoleInfo(role=role, is_admin=role in self.settings.get_admin_roles_list())

    def fetch_user_role(self, user_id: str) -> RoleInfo:
        """Blocking role lookup: RPC first, then the user_roles table. Never raises."""
        try:
            try:
                result = self.lookup_client.rpc("get_user_role", {"p_user_id": user_id}).execute()
                if result is not None and result.data:
                    return self.classify_role(result.data)
            except Exception as e:
                logger.warning(f"get_user_role RPC failed, falling back to table select: {e}")

            result = self.lookup_client.table("user_roles")\
                .select("role")\
                .eq("user_id", user_id)\
                .single()\
                .execute()
            row = result.data if result is not None else None
            return self.classify_role(row.get("role") if isinstance(row, dict) else None)
        except Exception as e:
            logger.error(f"Error checking user role: {e}")
            return self.classify_role(None)

    async def resolve_role(self, user_id: str, force: bool = False) -> RoleInfo:
        """Role of any user through the shared cache."""
        async def load() -> RoleInfo:
            return await asyncio.to_thread(self.fetch_user_role, user_id)

        return await self.role_cache.resolve(user_id, load, force=force)

    async def check_user_role(self, force: bool = False) -> None:
        if self.session is None:
            self.user_role = None
            self.is_admin = False
            return

        user_id = self.session.user_id
        info = await self.resolve_role(user_id, force=force)
        # The session may have changed while the fetch was running
        if self.session is not None and self.session.user_id == user_id:
            self.user_role = info.role
            self.is_admin = info.is_admin

    # -- sign-out ----------------------------------------------------------

    def sign_out(self) -> None:
        user_id = self.session.user_id if self.session else None
        access_token = self.session.access_token if self.session else None
        if access_token:
            # Sessions loaded from a bearer token are unknown to the client, revoke by token
            try:
                self.lookup_client.auth.admin.sign_out(access_token)
            except Exception as e:
                logger.error(f"Error revoking session for user {user_id}: {e}")
        try:
            self.supabase.auth.sign_out()
        except Exception as e:
            logger.error(f"Error during sign out: {e}")
        if user_id:
            self.role_cache.invalidate(user_id)
        self._set_session(None)

