"""Configuration management for diyprojects."""

import os

from dotenv import load_dotenv
from sqlalchemy.engine import URL

# Load environment variables from .env file
load_dotenv()


class Config:
    """Application configuration."""

    # Application
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Database
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")

    # Discrete connection settings, used when DATABASE_URL is not set
    DB_HOST: str | None = os.getenv("DB_HOST")
    DB_PORT: int = int(os.getenv("DB_PORT", "3306"))
    DB_NAME: str = os.getenv("DB_NAME", "projects")
    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASSWORD: str | None = os.getenv("DB_PASSWORD")

    DEFAULT_DATABASE_URL: str = "sqlite:///./diyprojects.db"

    def database_url(self) -> str | URL:
        """Return the URL the engine should connect to."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST:
            return URL.create(
                "mysql+pymysql",
                username=self.DB_USER,
                password=self.DB_PASSWORD,
                host=self.DB_HOST,
                port=self.DB_PORT,
                database=self.DB_NAME,
            )
        return self.DEFAULT_DATABASE_URL


config = Config()
