import os
from typing import List, Optional
from pydantic import validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Razorpay Relay Backend")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    PORT: int = int(os.getenv("PORT", "3000"))

    RAZORPAY_KEY_ID: str = os.getenv("RAZORPAY_KEY_ID", "")
    RAZORPAY_KEY_SECRET: str = os.getenv("RAZORPAY_KEY_SECRET", "")
    RAZORPAY_WEBHOOK_SECRET: str = os.getenv("RAZORPAY_WEBHOOK_SECRET", "")
    RAZORPAY_TIMEOUT_SECONDS: float = float(os.getenv("RAZORPAY_TIMEOUT_SECONDS", "10"))

    # CORS
    FRONTEND_URL: Optional[str] = os.getenv("FRONTEND_URL")

    @validator("FRONTEND_URL", pre=True)
    def blank_frontend_url(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def cors_origins(self) -> List[str]:
        return [self.FRONTEND_URL] if self.FRONTEND_URL else ["*"]

    @property
    def razorpay_configured(self) -> bool:
        return bool(self.RAZORPAY_KEY_ID and self.RAZORPAY_KEY_SECRET)

    class Config:
        case_sensitive = True

settings = Settings()
