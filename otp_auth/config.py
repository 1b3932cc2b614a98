from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List
import os

class Settings(BaseSettings):
    # === APP ===
    APP_NAME: str = Field(default=os.environ.get("APP_NAME", "PaperStack"), description="Product name used in emails")
    CORS_ORIGINS: List[str] = Field(default=["*"], description="Allowed CORS origins")

    # === DATABASE ===
    DATABASE_URL: str = Field(default=os.environ.get("DATABASE_URL", "sqlite:///./otp_auth.db"), description="SQLAlchemy database URL")

    # === JWT AUTH ===
    SECRET_KEY: str = Field(default=os.environ.get("SECRET_KEY", "change-me"), description="Secret key for JWT token signing")
    ALGORITHM: str = Field(default=os.environ.get("ALGORITHM", "HS256"), description="JWT algorithm")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 1440)), description="JWT token expiration time in minutes")

    # === OTP ===
    OTP_LENGTH: int = Field(default=int(os.environ.get("OTP_LENGTH", 6)), description="Number of digits in a verification code")
    OTP_EXPIRE_MINUTES: int = Field(default=int(os.environ.get("OTP_EXPIRE_MINUTES", 5)), description="Verification code validity in minutes")

    # === EMAIL ===
    EMAIL_HOST: str = Field(default=os.environ.get("EMAIL_HOST", ""), description="SMTP host")
    EMAIL_PORT: int = Field(default=int(os.environ.get("EMAIL_PORT", 587)), description="SMTP port")
    EMAIL_HOST_USER: str = Field(default=os.environ.get("EMAIL_HOST_USER", ""), description="SMTP username")
    EMAIL_HOST_PASSWORD: str = Field(default=os.environ.get("EMAIL_HOST_PASSWORD", ""), description="SMTP password")
    EMAIL_FROM: str = Field(default=os.environ.get("EMAIL_FROM", "noreply@paperstack.com"), description="Email sender address")

    # === DEBUG MODE ===
    DEBUG: bool = Field(default=os.environ.get("DEBUG", "False").lower() == "true", description="Debug mode")

    class Config:
        env_file = ".env"
        case_sensitive = False

# Create settings instance
settings = Settings()
