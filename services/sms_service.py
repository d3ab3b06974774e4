import logging
import re

import httpx

from config import Settings, settings

logger = logging.getLogger(__name__)


def normalize_phone(phone: str) -> str:
    # +91-98765 43210 -> +919876543210
    digits = re.sub(r"[^0-9]", "", str(phone or ""))
    if not digits:
        return ""
    return f"+{digits}" if str(phone).strip().startswith("+") else digits


class SmsService:
    """HTTP SMS 게이트웨이 클라이언트"""

    def __init__(self, config: Settings):
        self.api_url = config.SMS_API_URL
        self.api_key = config.SMS_API_KEY
        self.from_number = config.SMS_FROM_NUMBER
        self.timeout = config.SMS_TIMEOUT_SECONDS

    @property
    def configured(self) -> bool:
        return bool(self.api_url and self.api_key and self.from_number)

    def send_sms(self, to_number: str, text: str) -> bool:
        """SMS 발송, 성공 여부 반환"""
        if not self.configured:
            logger.info("SMS gateway not configured, skipping message")
            return False

        to = normalize_phone(to_number)
        if not to:
            logger.warning("SMS skipped: invalid destination number")
            return False

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    self.api_url,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={"from": self.from_number, "to": to, "text": text},
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"SMS delivery failed: {to} - {str(e)}")
            return False

        logger.info(f"SMS sent: {to}")
        return True

    def send_plan_created_sms(self, to_number: str, user_name: str, plan_name: str) -> bool:
        text = f"Hi {user_name or 'User'}, your yoga plan \"{plan_name}\" is ready! Stay consistent."
        return self.send_sms(to_number, text)

sms_service = SmsService(settings)

def get_sms_service() -> SmsService:
    return sms_service
