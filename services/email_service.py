import smtplib
import ssl
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from html import escape
from typing import Optional
import logging

from config import Settings, settings

logger = logging.getLogger(__name__)

SIGNATURE = "- Yoga Planner App Team"

class EmailService:
    """이메일 발송 서비스 클래스"""

    def __init__(self, config: Settings):
        self.smtp_server = config.SMTP_SERVER
        self.smtp_port = config.SMTP_PORT
        self.smtp_username = config.SMTP_USERNAME
        self.smtp_password = config.SMTP_PASSWORD
        self.from_email = config.FROM_EMAIL if config.FROM_EMAIL else config.SMTP_USERNAME
        self.from_name = config.FROM_NAME
        self.otp_expire_minutes = config.OTP_EXPIRE_MINUTES
        self.verification_expire_hours = config.VERIFICATION_TOKEN_EXPIRE_HOURS
        self.reset_expire_minutes = config.RESET_TOKEN_EXPIRE_MINUTES

    def send_email(
        self,
        to_email: str,
        subject: str,
        text_content: str,
        html_content: Optional[str] = None,
    ) -> bool:
        """
        이메일 발송

        Args:
            to_email: 수신자 이메일
            subject: 이메일 제목
            text_content: 텍스트 내용
            html_content: HTML 내용 (없으면 텍스트 줄바꿈을 <br>로 변환)

        Returns:
            bool: 발송 성공 여부
        """
        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = f"{self.from_name} <{self.from_email}>"
            message["To"] = to_email

            if html_content is None:
                html_content = escape(text_content).replace("\n", "<br>")

            # 수신 클라이언트는 마지막 파트를 우선 표시
            message.attach(MIMEText(text_content, "plain", "utf-8"))
            message.attach(MIMEText(html_content, "html", "utf-8"))

            context = ssl.create_default_context()
            with smtplib.SMTP(self.smtp_server, self.smtp_port, timeout=30) as server:
                server.starttls(context=context)
                if self.smtp_username:
                    server.login(self.smtp_username, self.smtp_password)
                server.send_message(message)

            logger.info(f"Email sent: {to_email} - {subject}")
            return True

        except (smtplib.SMTPException, ssl.SSLError, OSError) as e:
            logger.error(f"Email delivery failed: {to_email} - {subject} - {str(e)}")
            return False

    def send_otp_email(self, to_email: str, user_name: str, otp: str, resend: bool = False) -> bool:
        """가입 인증용 OTP 발송"""
        intro = (
            f"Your new verification code is: {otp}"
            if resend
            else f"Thank you for registering with Yoga Planner!\n\nYour verification code is: {otp}"
        )
        text = (
            f"Hello {user_name},\n\n{intro}\n\n"
            f"This code will expire in {self.otp_expire_minutes} minutes.\n\n"
            f"If you didn't request this code, please ignore this email.\n\n{SIGNATURE}"
        )
        return self.send_email(to_email, "Verify Your Email - Yoga Planner", text)

    def send_verification_email(self, to_email: str, user_name: str, verification_url: str) -> bool:
        text = (
            f"Hi {user_name},\n\nThank you for registering with Yoga Planner App!\n\n"
            f"Please verify your email by clicking the link below:\n{verification_url}\n\n"
            f"This link will expire in {self.verification_expire_hours} hours.\n\n"
            f"If you didn't create this account, please ignore this email.\n\n{SIGNATURE}"
        )
        return self.send_email(to_email, "Verify Your Email - Yoga Planner App", text)

    def send_password_reset_email(self, to_email: str, user_name: str, reset_url: str) -> bool:
        text = (
            f"Hi {user_name},\n\nYou requested to reset your password.\n\n"
            f"Please click the link below to reset your password:\n{reset_url}\n\n"
            f"This link will expire in {self.reset_expire_minutes} minutes.\n\n"
            f"If you didn't request this, please ignore this email and your password "
            f"will remain unchanged.\n\n{SIGNATURE}"
        )
        return self.send_email(to_email, "Password Reset Request - Yoga Planner App", text)

    def send_password_changed_email(self, to_email: str, user_name: str) -> bool:
        text = (
            f"Hi {user_name},\n\nYour password has been successfully reset.\n\n"
            f"If you didn't make this change, please contact us immediately.\n\n{SIGNATURE}"
        )
        return self.send_email(to_email, "Password Reset Successful", text)

    def send_plan_created_email(self, to_email: str, user_name: str, plan_name: str) -> bool:
        text = (
            f"Hi {user_name or 'User'},\n\nYour yoga plan \"{plan_name}\" has been created successfully!\n"
            f"Keep practicing and stay consistent.\n\n{SIGNATURE}"
        )
        return self.send_email(to_email, "Yoga Plan Created Successfully", text)

    def send_plan_completed_email(self, to_email: str, user_name: str, plan_name: str) -> bool:
        text = (
            f"Hi {user_name or 'User'},\n\nCongratulations! You have completed your yoga plan "
            f"\"{plan_name}\"!\n\nKeep up the great work and stay consistent.\n\n{SIGNATURE}"
        )
        return self.send_email(to_email, "Yoga Plan Completed", text)

# 전역 이메일 서비스 인스턴스
email_service = EmailService(settings)

def get_email_service() -> EmailService:
    return email_service
