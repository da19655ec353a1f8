from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENVIRONMENT: str = "development"
    PORT: int = 8080
    API_VERSION: str = "dev"
    ALLOW_ORIGINS: str = "*"

    # Hosted backend (required)
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str
    SUPABASE_SERVICE_KEY: str | None = None
    STORE_TIMEOUT_SECONDS: float = 10.0

    # Auth
    JWT_SECRET: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOW_ORIGINS.split(",") if o.strip()]

    @property
    def store_key(self) -> str:
        # service key bypasses row-level policies; ownership is checked here
        return self.SUPABASE_SERVICE_KEY or self.SUPABASE_ANON_KEY

@lru_cache
def get_settings() -> Settings:
    return Settings()
