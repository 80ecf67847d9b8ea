"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    DATABASE_URL: str
    STUDENT_API_BASE_URL: str
    STUDENT_API_TIMEOUT: float
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'students.db'}")
        self.STUDENT_API_BASE_URL = os.getenv("STUDENT_API_BASE_URL", "http://studentapi:8080/")
        self.STUDENT_API_TIMEOUT = float(os.getenv("STUDENT_API_TIMEOUT", "10"))
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self._validate()

    def _validate(self):
        if self.STUDENT_API_TIMEOUT <= 0:
            raise RuntimeError("STUDENT_API_TIMEOUT must be a positive number of seconds")
        if not self.STUDENT_API_BASE_URL.startswith(("http://", "https://")):
            raise RuntimeError("STUDENT_API_BASE_URL must be an http(s) URL")


settings = Settings()
