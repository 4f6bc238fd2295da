from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Needed for privileged lookups that bypass RLS

    # Public URL of the web client, used to build auth redirect links
    app_url: str = "http://localhost:5173"

    # Session / roles
    default_country_code: str = "223"  # Mali
    role_cache_ttl_seconds: float = 30.0
    admin_roles: str = "SUPERADMIN,SUPPORT"
    default_role: str = "USER"

    # i18n
    default_language: str = "en"
    supported_languages: str = "en,fr"

    # App
    app_name: str = "elverra-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_admin_roles_list(self) -> List[str]:
        return [r.strip().upper() for r in self.admin_roles.split(",") if r.strip()]

    def get_supported_languages_list(self) -> List[str]:
        return [lang.strip().lower() for lang in self.supported_languages.split(",") if lang.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
