from datetime import datetime
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from domain.user import user_model, user_schema
from domain.user.user_token import hash_token, utcnow


def get_user_by_id(db: Session, user_id: int):
    return db.query(user_model.User).filter(user_model.User.id == user_id).first()

def get_user_by_email(db: Session, email: str):
    """이메일로 사용자 조회 (대소문자 무시)"""
    return db.query(user_model.User).filter(user_model.User.email == email.strip().lower()).first()

def get_user_by_phone(db: Session, phone: str):
    return db.query(user_model.User).filter(user_model.User.phone == phone).first()

def email_taken_by_other(db: Session, email: str, user_id: int) -> bool:
    return db.query(user_model.User.id).filter(
        user_model.User.email == email,
        user_model.User.id != user_id,
    ).first() is not None

def phone_taken_by_other(db: Session, phone: str, user_id: int) -> bool:
    return db.query(user_model.User.id).filter(
        user_model.User.phone == phone,
        user_model.User.id != user_id,
    ).first() is not None

def get_user_by_verification_token(db: Session, token: str, now: Optional[datetime] = None):
    """유효 기간 내의 이메일 검증 토큰으로 사용자 조회"""
    now = now or utcnow()
    return db.query(user_model.User).filter(
        user_model.User.verification_token_hash == hash_token(token),
        user_model.User.verification_token_expire > now,
    ).first()

def get_user_by_reset_token(db: Session, token: str, now: Optional[datetime] = None):
    """유효 기간 내의 비밀번호 재설정 토큰으로 사용자 조회"""
    now = now or utcnow()
    return db.query(user_model.User).filter(
        user_model.User.reset_password_token_hash == hash_token(token),
        user_model.User.reset_password_expire > now,
    ).first()

def create_user(db: Session, user: user_schema.UserCreate, password_hash: str, is_verified: bool):
    db_user = user_model.User(
        name=user.name,
        email=user.email,
        password_hash=password_hash,
        phone=user.phone,
        age=user.age,
        fitness_level=user.fitness_level.value if user.fitness_level else None,
        goal=user.goal,
        is_verified=is_verified,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

def delete_user(db: Session, db_user: user_model.User):
    db.delete(db_user)
    db.commit()

def save(db: Session, db_user: user_model.User):
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

def update_user_info(db: Session, db_user: user_model.User, changes: dict):
    """전달된 필드만 반영"""
    for field, value in changes.items():
        # null 은 "변경 없음" 으로 취급 (값을 지우지 않음)
        if value is None:
            continue
        if field == "fitness_level":
            value = user_schema.FitnessLevel(value).value
        setattr(db_user, field, value)
    return save(db, db_user)

def purge_expired_tokens(db: Session, now: Optional[datetime] = None) -> int:
    """
    만료된 검증/OTP/재설정 토큰 정리

    잠금 관련 필드(login_attempts, lock_until)는 건드리지 않는다.

    Returns:
        int: 정리된 필드 묶음 수
    """
    now = now or utcnow()
    User = user_model.User
    cleared = 0

    cleared += db.query(User).filter(
        and_(User.verification_token_expire.isnot(None), User.verification_token_expire < now)
    ).update(
        {User.verification_token_hash: None, User.verification_token_expire: None},
        synchronize_session=False,
    )
    cleared += db.query(User).filter(
        and_(User.otp_expire.isnot(None), User.otp_expire < now)
    ).update(
        {User.otp_hash: None, User.otp_expire: None, User.otp_attempts: 0},
        synchronize_session=False,
    )
    cleared += db.query(User).filter(
        and_(User.reset_password_expire.isnot(None), User.reset_password_expire < now)
    ).update(
        {User.reset_password_token_hash: None, User.reset_password_expire: None},
        synchronize_session=False,
    )
    db.commit()
    return cleared
