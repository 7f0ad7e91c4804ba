from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./fitlog.db"
    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"

    # Bearer tokens (HS256). Set JWT_SECRET in any shared deployment.
    JWT_SECRET: str = "dev-secret-change-me"
    ACCESS_TOKEN_TTL_HOURS: int = 24
    REFRESH_TOKEN_TTL_DAYS: int = 7

    # Legacy imports treat 0 like "not provided". Flip to keep explicit zeros.
    KEEP_ZERO_VALUES: bool = False

    # "*" or a comma separated list of origins
    CORS_ORIGINS: str = "*"

    # Prebuilt dashboard bundle (index.html + assets), served when present
    FRONTEND_DIR: str | None = None

    # Used by the fitlog-seed command
    SEED_EMAIL: str = "me@example.com"
    SEED_PASSWORD: str = "changeme123"
    SEED_NAME: str = "Me"

    @property
    def cors_origins(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
