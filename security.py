from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Response
from fastapi.security import APIKeyCookie
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from config import settings
from database import session
from domain.user import user_crud
from exceptions import UnauthorizedError

# 비밀번호 해싱 및 세션 토큰(JWT) 설정

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
SESSION_EXPIRE_DAYS = settings.SESSION_EXPIRE_DAYS
SESSION_COOKIE_NAME = "token"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)
cookie_scheme = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(days=SESSION_EXPIRE_DAYS)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt

def create_session_token(user_id: int) -> str:
    return create_access_token(data={"sub": str(user_id)})

def decode_token(token: str):
    """토큰을 디코딩하여 페이로드를 반환 (서명/만료 오류 시 None)"""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        return None

def _cookie_policy() -> dict:
    # 배포 환경은 프론트엔드가 다른 도메인이므로 cross-site 허용
    if settings.is_production:
        return {"samesite": "none", "secure": True}
    return {"samesite": "strict", "secure": False}

def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        path="/",
        **_cookie_policy(),
    )

def clear_session_cookie(response: Response) -> None:
    """즉시 만료되는 빈 값으로 쿠키를 덮어씀"""
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        **_cookie_policy(),
    )

def get_current_user(token: Optional[str] = Depends(cookie_scheme), db: Session = Depends(session.get_db)):
    if not token:
        raise UnauthorizedError("Not authorized, no token")

    payload = decode_token(token)
    if payload is None:
        raise UnauthorizedError("Token invalid or expired")

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise UnauthorizedError("Token invalid or expired")

    user = user_crud.get_user_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user
