from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from database.session import Base
from domain.user import user_lockout
from domain.user.user_token import utcnow

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(30), unique=True, index=True, nullable=True)
    age = Column(Integer)
    fitness_level = Column(String(20))  # beginner, intermediate, advanced
    goal = Column(String(200))

    # 이메일 인증
    is_verified = Column(Boolean, nullable=False, default=False)
    verification_token_hash = Column(String(64), index=True)
    verification_token_expire = Column(DateTime)
    otp_hash = Column(String(64))
    otp_expire = Column(DateTime)
    otp_attempts = Column(Integer, nullable=False, default=0)

    # 비밀번호 재설정
    reset_password_token_hash = Column(String(64), index=True)
    reset_password_expire = Column(DateTime)

    # 로그인 잠금
    login_attempts = Column(Integer, nullable=False, default=0)
    lock_until = Column(DateTime)

    last_login = Column(DateTime)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    plans = relationship("YogaPlan", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_locked(self) -> bool:
        return user_lockout.is_locked(self)
