from fastapi import APIRouter, BackgroundTasks, Depends, Response
from starlette import status

import security
from config import VerificationStrategy
from domain.user import user_schema
from domain.user.user_service import AccountService, get_account_service

router = APIRouter(
    prefix="/users",
    tags=["User"]
)

@router.post("/register", response_model=user_schema.RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: user_schema.UserCreate,
    service: AccountService = Depends(get_account_service),
):
    """회원가입 (검증 전략에 따라 OTP 또는 인증 링크 발송)"""
    return service.register(payload)

@router.post("/login", response_model=user_schema.UserResponse)
def login(
    payload: user_schema.UserLogin,
    response: Response,
    service: AccountService = Depends(get_account_service),
):
    user = service.login(payload.email, payload.password)
    security.set_session_cookie(response, security.create_session_token(user.id))
    return {"message": "Login successful", "user": user_schema.User.model_validate(user)}

@router.post("/logout", response_model=user_schema.MessageResponse)
def logout(response: Response):
    security.clear_session_cookie(response)
    return {"message": "Logged out successfully"}

@router.post("/verify-otp")
def verify_otp(
    payload: user_schema.OTPVerifyRequest,
    service: AccountService = Depends(get_account_service),
):
    service.verify_otp(payload.email, payload.otp)
    return {"message": "Email verified successfully! You can now login.", "success": True}

@router.post("/resend-otp")
def resend_otp(
    payload: user_schema.EmailRequest,
    service: AccountService = Depends(get_account_service),
):
    service.resend_verification(payload.email, VerificationStrategy.OTP)
    return {"message": "OTP has been resent to your email", "success": True}

@router.get("/verify-email/{token}", response_model=user_schema.MessageResponse)
def verify_email(token: str, service: AccountService = Depends(get_account_service)):
    service.verify_email(token)
    return {"message": "Email verified successfully! You can now log in."}

@router.post("/resend-verification", response_model=user_schema.MessageResponse)
def resend_verification(
    payload: user_schema.EmailRequest,
    service: AccountService = Depends(get_account_service),
):
    service.resend_verification(payload.email, VerificationStrategy.LINK)
    return {"message": "Verification email sent! Please check your inbox."}

@router.post("/forgot-password", response_model=user_schema.MessageResponse)
def forgot_password(
    payload: user_schema.EmailRequest,
    service: AccountService = Depends(get_account_service),
):
    """가입 여부와 관계없이 동일한 응답"""
    return {"message": service.forgot_password(payload.email)}

@router.post("/reset-password/{token}", response_model=user_schema.MessageResponse)
def reset_password(
    token: str,
    payload: user_schema.PasswordResetRequest,
    background_tasks: BackgroundTasks,
    service: AccountService = Depends(get_account_service),
):
    service.reset_password(token, payload.password, background_tasks)
    return {"message": "Password reset successful! You can now log in with your new password."}

@router.get("/me", response_model=user_schema.User)
def get_current_user_info(current_user = Depends(security.get_current_user)):
    """현재 로그인한 사용자 정보 조회"""
    return current_user

@router.put("/profile", response_model=user_schema.UserResponse)
def update_user_profile(
    user_update: user_schema.UserUpdate,
    current_user = Depends(security.get_current_user),
    service: AccountService = Depends(get_account_service),
):
    """사용자 프로필 정보 업데이트"""
    user = service.update_profile(current_user, user_update)
    return {"message": "Profile updated successfully", "user": user_schema.User.model_validate(user)}
