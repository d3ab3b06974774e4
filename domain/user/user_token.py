"""
검증 토큰 / OTP / 비밀번호 재설정 토큰 생성

링크 토큰은 원문을 한 번만 노출하고 DB에는 SHA-256 해시만 저장한다.
OTP도 해시로 저장하며 비교는 상수 시간으로 수행한다.
"""
import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

OTP_LENGTH = 6
LINK_TOKEN_BYTES = 32


def utcnow() -> datetime:
    """DB 저장용 naive UTC 시각"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_link_token() -> str:
    return secrets.token_hex(LINK_TOKEN_BYTES)


def generate_otp() -> str:
    return f"{secrets.randbelow(10 ** OTP_LENGTH):0{OTP_LENGTH}d}"


def issue_verification_token(user, expire_hours: int) -> str:
    """이메일 검증 링크 토큰 발급, 원문 토큰 반환"""
    token = generate_link_token()
    user.verification_token_hash = hash_token(token)
    user.verification_token_expire = utcnow() + timedelta(hours=expire_hours)
    return token


def issue_otp(user, expire_minutes: int) -> str:
    """새 OTP 발급, 시도 횟수 초기화"""
    code = generate_otp()
    user.otp_hash = hash_token(code)
    user.otp_expire = utcnow() + timedelta(minutes=expire_minutes)
    user.otp_attempts = 0
    return code


def issue_password_reset_token(user, expire_minutes: int) -> str:
    token = generate_link_token()
    user.reset_password_token_hash = hash_token(token)
    user.reset_password_expire = utcnow() + timedelta(minutes=expire_minutes)
    return token


def clear_verification(user) -> None:
    user.verification_token_hash = None
    user.verification_token_expire = None
    user.otp_hash = None
    user.otp_expire = None
    user.otp_attempts = 0


def clear_password_reset(user) -> None:
    user.reset_password_token_hash = None
    user.reset_password_expire = None


@dataclass
class OTPCheck:
    success: bool
    message: str


def check_otp(user, code: str, max_attempts: int, now: Optional[datetime] = None) -> OTPCheck:
    """
    OTP 검증

    실패 시 user.otp_attempts 가 증가하므로 호출 측에서 commit 해야 한다.
    시도 횟수가 max_attempts 에 도달하면 올바른 코드여도 거부된다.
    """
    now = now or utcnow()

    if not user.otp_hash or not user.otp_expire:
        return OTPCheck(False, "No OTP found. Please request a new one.")

    if user.otp_expire < now:
        return OTPCheck(False, "OTP has expired. Please request a new one.")

    if (user.otp_attempts or 0) >= max_attempts:
        return OTPCheck(False, "Too many failed attempts. Please request a new OTP.")

    if hmac.compare_digest(user.otp_hash, hash_token(code)):
        return OTPCheck(True, "OTP verified successfully")

    user.otp_attempts = (user.otp_attempts or 0) + 1
    remaining = max(max_attempts - user.otp_attempts, 0)
    return OTPCheck(False, f"Invalid OTP. {remaining} attempts remaining.")
