"""Application configuration"""
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite:///./srp_data.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 10
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 3600  # Recycle connections after 1 hour

    # Routes
    API_PREFIX: str = "/api"

    # Environment superadmin (never stored; disabled while the password is empty)
    SUPER_ADMIN_USERNAME: str = "admin"
    SUPER_ADMIN_PASSWORD: str = ""

    # JWT Authentication
    JWT_SECRET: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_PLAYER_EXPIRE_SECONDS: int = 28800   # 8 hours for player tokens
    JWT_ADMIN_EXPIRE_SECONDS: int = 28800    # 8 hours for admin tokens

    # Password hashing
    BCRYPT_ROUNDS: int = 12

    # EVE SSO / ESI
    EVE_CLIENT_ID: str = ""
    EVE_SECRET_KEY: str = ""
    EVE_CALLBACK_URL: str = "http://localhost:5173/auth/callback"
    EVE_SSO_TOKEN_URL: str = "https://login.eveonline.com/v2/oauth/token"
    EVE_SSO_VERIFY_URL: str = "https://login.eveonline.com/oauth/verify"
    ESI_BASE_URL: str = "https://esi.evetech.net/latest"
    ZKILLBOARD_BASE_URL: str = "https://zkillboard.com"
    HTTP_USER_AGENT: str = "EveSrpTool-Maintainer/1.0"
    EXTERNAL_TIMEOUT_SECONDS: float = 10.0

    # Corporation gate
    TARGET_CORP_ID: int = 98802528

    # Loss history
    LOSS_FETCH_LIMIT: int = 20
    LOSS_ENRICH_WORKERS: int = 8  # parallel ESI killmail lookups per request

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or text

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173"

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"  # Use redis:// for production
    LOGIN_RATE_LIMIT: str = "5 per 15 minutes"
    EVE_LOGIN_RATE_LIMIT: str = "10 per minute"
    SRP_SUBMIT_RATE_LIMIT: str = "20 per minute"

    # Monitoring
    METRICS_ENABLED: bool = True
    METRICS_PATH: str = "/metrics"

    # Security
    TRUST_PROXY_HEADERS: bool = False  # Set True if behind reverse proxy

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string into list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def super_admin_enabled(self) -> bool:
        """The environment superadmin can only log in once a password is configured"""
        return bool(self.SUPER_ADMIN_USERNAME and self.SUPER_ADMIN_PASSWORD)


settings = Settings()
