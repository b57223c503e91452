from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Loads all environment variables into a single, accessible object."""
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    SUPABASE_TABLE: str = "validations"

    PERSISTENCE_REQUIRED: bool = False
    PERSISTENCE_TIMEOUT: float = 10.0
    MEMORY_REPOSITORY_LIMIT: int = 1000

    PROBE_DEFAULT_TIMEOUT: float = 10.0

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    @property
    def SUPABASE_REST_ENDPOINT(self) -> Optional[str]:
        if not self.SUPABASE_URL:
            return None
        return f"{self.SUPABASE_URL.rstrip('/')}/rest/v1/{self.SUPABASE_TABLE}"

    @property
    def persistence_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_ROLE_KEY)

settings = Settings()
