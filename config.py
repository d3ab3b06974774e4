from enum import Enum
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class VerificationStrategy(str, Enum):
    OTP = "otp"      # 6자리 코드를 이메일로 발송
    LINK = "link"    # 검증 링크를 이메일로 발송
    NONE = "none"    # 가입 즉시 인증된 계정으로 생성


class Settings(BaseSettings):
    DATABASE_URL: str
    DB_POOL_TIMEOUT: int = 5
    DB_CONNECT_TIMEOUT: int = 5
    DB_READ_TIMEOUT: int = 45

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_DAYS: int = 7

    ENVIRONMENT: str = "development"
    FRONTEND_URL: str = "http://localhost:5173"
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:5174",
    ]

    VERIFICATION_STRATEGY: VerificationStrategy = VerificationStrategy.OTP
    BCRYPT_ROUNDS: int = 12

    # 로그인 잠금 정책
    MAX_LOGIN_ATTEMPTS: int = 5
    LOCK_DURATION_MINUTES: int = 120

    # 토큰 / OTP 유효 기간
    OTP_EXPIRE_MINUTES: int = 10
    OTP_MAX_ATTEMPTS: int = 3
    VERIFICATION_TOKEN_EXPIRE_HOURS: int = 24
    RESET_TOKEN_EXPIRE_MINUTES: int = 60

    # 이메일 설정
    SMTP_SERVER: str = "smtp-relay.brevo.com"
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    FROM_EMAIL: str = ""
    FROM_NAME: str = "Yoga Planner"

    # SMS 게이트웨이 설정
    SMS_API_URL: str = ""
    SMS_API_KEY: str = ""
    SMS_FROM_NUMBER: str = ""
    SMS_TIMEOUT_SECONDS: float = 10.0

    NOTIFICATION_MAX_RETRIES: int = 3
    NOTIFICATION_RETRY_DELAY_SECONDS: float = 2.0

    SCHEDULER_ENABLED: bool = True
    TOKEN_SWEEP_INTERVAL_MINUTES: int = 60

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

settings = Settings()
