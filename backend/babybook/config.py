from pydantic_settings import BaseSettings
from typing import Optional
import os
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Baby Book"
    API_V1_STR: str = "/api/v1"

    # Backend
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./babybook.db")
    BACKEND_API_KEY: str = os.getenv("BACKEND_API_KEY", "public-anon-key")

    # Security
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your-secret-key-here-replace-this-in-production")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))

    # Storage
    UPLOAD_FOLDER: str = os.getenv("UPLOAD_FOLDER", "./uploads")
    STORAGE_BUCKET: str = os.getenv("STORAGE_BUCKET", "aariv-media")
    STORAGE_PUBLIC_URL: str = os.getenv("STORAGE_PUBLIC_URL", "/uploads")

    # Bootstrap admin
    FIRST_ADMIN_EMAIL: Optional[str] = os.getenv("FIRST_ADMIN_EMAIL")
    FIRST_ADMIN_PASSWORD: Optional[str] = os.getenv("FIRST_ADMIN_PASSWORD")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Server
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))

    class Config:
        case_sensitive = True


settings = Settings()
