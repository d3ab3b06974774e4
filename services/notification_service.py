"""
요청 처리와 분리된 알림 발송

BackgroundTasks 로 응답 이후에 실행되므로 발송 실패는 호출자에게 전달되지 않고
로그로만 남는다. 가입/비밀번호 찾기처럼 결과가 필요한 발송은 EmailService 를
직접 호출한다.
"""
import logging
import time
from typing import Callable, Optional

from fastapi import Depends

from config import Settings, settings
from services.email_service import EmailService, get_email_service
from services.sms_service import SmsService, get_sms_service

logger = logging.getLogger(__name__)


class NotificationService:

    def __init__(self, config: Settings, email: EmailService, sms: SmsService):
        self.email = email
        self.sms = sms
        self.max_retries = max(config.NOTIFICATION_MAX_RETRIES, 1)
        self.retry_delay = config.NOTIFICATION_RETRY_DELAY_SECONDS

    def deliver(self, send: Callable[..., bool], *args, description: str = "notification") -> bool:
        """send 가 True 를 반환할 때까지 재시도"""
        for attempt in range(1, self.max_retries + 1):
            if send(*args):
                return True
            logger.warning(f"{description} failed (attempt {attempt}/{self.max_retries})")
            if attempt < self.max_retries and self.retry_delay > 0:
                time.sleep(self.retry_delay)

        logger.error(f"{description} gave up after {self.max_retries} attempts")
        return False

    def password_changed(self, to_email: str, user_name: str) -> None:
        self.deliver(
            self.email.send_password_changed_email, to_email, user_name,
            description="Password changed email",
        )

    def plan_created(self, to_email: str, user_name: str, phone: Optional[str], plan_name: str) -> None:
        self.deliver(
            self.email.send_plan_created_email, to_email, user_name, plan_name,
            description="Plan creation email",
        )
        if phone and self.sms.configured:
            self.deliver(
                self.sms.send_plan_created_sms, phone, user_name, plan_name,
                description="Plan creation SMS",
            )

    def plan_completed(self, to_email: str, user_name: str, plan_name: str) -> None:
        self.deliver(
            self.email.send_plan_completed_email, to_email, user_name, plan_name,
            description="Plan completion email",
        )


def get_notification_service(
    email: EmailService = Depends(get_email_service),
    sms: SmsService = Depends(get_sms_service),
) -> NotificationService:
    return NotificationService(settings, email, sms)
