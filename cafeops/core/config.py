import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


class Settings:
    def __init__(self) -> None:
        self.database_url: str = os.getenv(
            "DATABASE_URL",
            "sqlite+aiosqlite:///./cafeops.db"
        )
        self.database_echo: bool = os.getenv("DATABASE_ECHO", "False").lower() == "true"

        # Server
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "5000"))
        self.frontend_url: str = os.getenv("FRONTEND_URL", "http://localhost:3000")

        # "development" includes exception text in 500 responses
        self.environment: str = os.getenv("APP_ENV", "production").strip().lower()
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        self.minimum_staff_count: int = int(os.getenv("MINIMUM_STAFF_COUNT", "3"))

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.frontend_url.split(",") if o.strip()]


settings = Settings()
