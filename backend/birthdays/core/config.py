import os
from typing import Optional

from sqlalchemy.engine import URL

from birthdays.core.errors import StartupError

REQUIRED_VARIABLES = ("DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME")


class Settings:
    PROJECT_NAME: str = "Birthdays"

    # process
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = bool(os.getenv("DEBUG", ""))
    LOG_DIR: str = os.getenv("LOG_DIR", "")  # empty disables the file handler

    # database
    DB_HOST: Optional[str] = os.getenv("DB_HOST")
    DB_PORT: Optional[str] = os.getenv("DB_PORT")
    DB_USER: Optional[str] = os.getenv("DB_USER")
    DB_PASSWORD: Optional[str] = os.getenv("DB_PASSWORD")
    DB_NAME: Optional[str] = os.getenv("DB_NAME")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")  # overrides the DB_* parts when set
    DB_CONNECT_RETRIES: int = int(os.getenv("DB_CONNECT_RETRIES", "5"))

    def check_environment(self):
        """raise StartupError for the first required variable that is missing"""
        if self.DATABASE_URL:
            return
        for variable in REQUIRED_VARIABLES:
            if not getattr(self, variable):
                raise StartupError(f"Required environment variable {variable} is not set")

    @property
    def database_url(self):
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "postgresql+psycopg2",
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=int(self.DB_PORT) if self.DB_PORT else None,
            database=self.DB_NAME,
        )

settings = Settings()
