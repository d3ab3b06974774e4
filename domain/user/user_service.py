"""
계정 서비스

가입, 이메일 인증(OTP / 링크), 로그인 잠금, 비밀번호 재설정, 프로필 수정을 담당한다.
설정은 전역 변수 대신 생성자로 전달받는다.
"""
import logging

from fastapi import BackgroundTasks, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import security
from config import Settings, VerificationStrategy, settings
from database.session import get_db
from domain.user import user_crud, user_lockout, user_model, user_schema, user_token
from exceptions import (
    AccountLockedError,
    ConflictError,
    ForbiddenError,
    InvalidTokenError,
    NotFoundError,
    ServiceFailureError,
    UnauthorizedError,
    ValidationError,
)
from services.notification_service import NotificationService, get_notification_service

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If a user with that email exists, a password reset link has been sent."
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class AccountService:

    def __init__(self, db: Session, config: Settings, notifier: NotificationService):
        self.db = db
        self.config = config
        self.notifier = notifier

    @property
    def strategy(self) -> VerificationStrategy:
        return self.config.VERIFICATION_STRATEGY

    def _require_strategy(self, strategy: VerificationStrategy) -> None:
        if self.strategy != strategy:
            raise NotFoundError(f"{strategy.value.upper()} verification is not enabled")

    def _verification_url(self, token: str) -> str:
        return f"{self.config.FRONTEND_URL.rstrip('/')}/verify-email/{token}"

    def _reset_url(self, token: str) -> str:
        return f"{self.config.FRONTEND_URL.rstrip('/')}/reset-password/{token}"

    def _send_verification(self, db_user: user_model.User, resend: bool = False) -> bool:
        """현재 전략에 맞는 인증 코드/링크를 새로 발급하고 발송"""
        if self.strategy == VerificationStrategy.OTP:
            code = user_token.issue_otp(db_user, self.config.OTP_EXPIRE_MINUTES)
            user_crud.save(self.db, db_user)
            return self.notifier.email.send_otp_email(db_user.email, db_user.name, code, resend=resend)

        token = user_token.issue_verification_token(db_user, self.config.VERIFICATION_TOKEN_EXPIRE_HOURS)
        user_crud.save(self.db, db_user)
        return self.notifier.email.send_verification_email(
            db_user.email, db_user.name, self._verification_url(token)
        )

    def register(self, payload: user_schema.UserCreate) -> dict:
        if user_crud.get_user_by_email(self.db, payload.email):
            raise ConflictError("User with this email already exists")
        if payload.phone and user_crud.get_user_by_phone(self.db, payload.phone):
            raise ConflictError("User with this phone number already exists")

        requires_verification = self.strategy != VerificationStrategy.NONE
        password_hash = security.get_password_hash(payload.password)
        try:
            db_user = user_crud.create_user(
                self.db, payload, password_hash, is_verified=not requires_verification
            )
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("User with this email or phone number already exists")

        if not requires_verification:
            logger.info(f"User registered (pre-verified): user_id={db_user.id}")
            return {
                "message": "Registration successful! You can now log in.",
                "requires_verification": False,
                "email": db_user.email,
            }

        if not self._send_verification(db_user):
            # 인증 메일을 보내지 못하면 가입 자체를 취소
            logger.error(f"Verification delivery failed, rolling back registration: user_id={db_user.id}")
            user_crud.delete_user(self.db, db_user)
            raise ServiceFailureError("Failed to send verification email. Please try again.")

        logger.info(f"User registered, awaiting verification: user_id={db_user.id}")
        if self.strategy == VerificationStrategy.OTP:
            message = "Registration successful! Please check your email for the OTP verification code."
        else:
            message = "Registration successful! Please check your email to verify your account."
        return {
            "message": message,
            "requires_verification": True,
            "email": db_user.email,
        }

    def verify_email(self, token: str) -> None:
        self._require_strategy(VerificationStrategy.LINK)

        db_user = user_crud.get_user_by_verification_token(self.db, token)
        if db_user is None:
            raise InvalidTokenError("Invalid or expired verification token")

        db_user.is_verified = True
        user_token.clear_verification(db_user)
        user_crud.save(self.db, db_user)
        logger.info(f"Email verified via link: user_id={db_user.id}")

    def verify_otp(self, email: str, code: str) -> None:
        self._require_strategy(VerificationStrategy.OTP)

        db_user = user_crud.get_user_by_email(self.db, email)
        if db_user is None:
            raise NotFoundError("User not found")
        if db_user.is_verified:
            raise ValidationError("Email is already verified")

        result = user_token.check_otp(db_user, code, self.config.OTP_MAX_ATTEMPTS)
        if not result.success:
            # 실패 횟수 저장
            user_crud.save(self.db, db_user)
            raise InvalidTokenError(result.message)

        db_user.is_verified = True
        user_token.clear_verification(db_user)
        user_crud.save(self.db, db_user)
        logger.info(f"Email verified via OTP: user_id={db_user.id}")

    def resend_verification(self, email: str, strategy: VerificationStrategy) -> None:
        self._require_strategy(strategy)

        db_user = user_crud.get_user_by_email(self.db, email)
        if db_user is None:
            raise NotFoundError("User not found")
        if db_user.is_verified:
            raise ValidationError("Email is already verified")

        if not self._send_verification(db_user, resend=True):
            raise ServiceFailureError("Failed to resend verification email")

    def login(self, email: str, password: str) -> user_model.User:
        db_user = user_crud.get_user_by_email(self.db, email)
        if db_user is None:
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        # 잠금 중에는 비밀번호 비교 자체를 하지 않음
        if user_lockout.is_locked(db_user):
            raise AccountLockedError()

        if not security.verify_password(password, db_user.password_hash):
            user_lockout.register_failure(
                db_user,
                max_attempts=self.config.MAX_LOGIN_ATTEMPTS,
                lock_minutes=self.config.LOCK_DURATION_MINUTES,
            )
            user_crud.save(self.db, db_user)
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        if not db_user.is_verified:
            if self.strategy == VerificationStrategy.OTP:
                hint = "Check your inbox for the verification code."
            else:
                hint = "Check your inbox for the verification link."
            raise ForbiddenError(
                f"Please verify your email before logging in. {hint}",
                extra={"requiresVerification": True, "email": db_user.email},
            )

        user_lockout.register_success(db_user)
        db_user.last_login = user_token.utcnow()
        user_crud.save(self.db, db_user)
        logger.info(f"User logged in: user_id={db_user.id}")
        return db_user

    def forgot_password(self, email: str) -> str:
        db_user = user_crud.get_user_by_email(self.db, email)
        if db_user is None:
            return FORGOT_PASSWORD_MESSAGE

        token = user_token.issue_password_reset_token(db_user, self.config.RESET_TOKEN_EXPIRE_MINUTES)
        user_crud.save(self.db, db_user)

        if not self.notifier.email.send_password_reset_email(db_user.email, db_user.name, self._reset_url(token)):
            user_token.clear_password_reset(db_user)
            user_crud.save(self.db, db_user)
            raise ServiceFailureError("Failed to send password reset email. Please try again.")

        return FORGOT_PASSWORD_MESSAGE

    def reset_password(self, token: str, new_password: str, background_tasks: BackgroundTasks) -> None:
        db_user = user_crud.get_user_by_reset_token(self.db, token)
        if db_user is None:
            raise InvalidTokenError("Invalid or expired password reset token")

        db_user.password_hash = security.get_password_hash(new_password)
        user_token.clear_password_reset(db_user)
        user_lockout.reset(db_user)
        user_crud.save(self.db, db_user)
        logger.info(f"Password reset: user_id={db_user.id}")

        background_tasks.add_task(self.notifier.password_changed, db_user.email, db_user.name)

    def update_profile(self, db_user: user_model.User, payload: user_schema.UserUpdate) -> user_model.User:
        changes = payload.model_dump(exclude_unset=True)

        email = changes.get("email")
        if email and email != db_user.email and user_crud.email_taken_by_other(self.db, email, db_user.id):
            raise ConflictError("Email is already in use by another account")

        phone = changes.get("phone")
        if phone and phone != db_user.phone and user_crud.phone_taken_by_other(self.db, phone, db_user.id):
            raise ConflictError("Phone number is already in use by another account")

        try:
            return user_crud.update_user_info(self.db, db_user, changes)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email or phone number is already in use by another account")


def get_account_service(
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
) -> AccountService:
    return AccountService(db, settings, notifier)
