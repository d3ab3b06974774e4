"""
Pytest configuration and fixtures

환경 변수는 앱 import 전에 설정해야 한다.
모든 테스트는 인메모리 SQLite 위에서 돌고, 테스트마다 스키마를 새로 만든다.
이메일/SMS 는 실제로 발송하지 않고 outbox 에 기록한다.
"""
import os
import re

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-0123456789"
os.environ["ENVIRONMENT"] = "development"
os.environ["VERIFICATION_STRATEGY"] = "otp"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["NOTIFICATION_RETRY_DELAY_SECONDS"] = "0"
os.environ["FRONTEND_URL"] = "http://frontend.test"

import pytest
from fastapi.testclient import TestClient

from config import settings
from database.session import Base, SessionLocal, engine
from main import app
from services.email_service import EmailService, get_email_service
from services.sms_service import SmsService, get_sms_service

OTP_PATTERN = re.compile(r"verification code is: (\d{6})")
VERIFY_LINK_PATTERN = re.compile(r"/verify-email/([0-9a-f]{64})")
RESET_LINK_PATTERN = re.compile(r"/reset-password/([0-9a-f]{64})")

PASSWORD = "Secret123!"


class FakeEmailService(EmailService):
    """SMTP 대신 outbox 에 기록"""

    def __init__(self):
        super().__init__(settings)
        self.outbox = []
        self.fail = False

    def send_email(self, to_email, subject, text_content, html_content=None):
        if self.fail:
            return False
        self.outbox.append({"to": to_email, "subject": subject, "text": text_content})
        return True

    def messages_to(self, email):
        return [m for m in self.outbox if m["to"] == email]

    def _last_match(self, email, pattern):
        for message in reversed(self.messages_to(email)):
            match = pattern.search(message["text"])
            if match:
                return match.group(1)
        raise AssertionError(f"no matching email sent to {email}")

    def last_otp(self, email):
        return self._last_match(email, OTP_PATTERN)

    def last_verification_token(self, email):
        return self._last_match(email, VERIFY_LINK_PATTERN)

    def last_reset_token(self, email):
        return self._last_match(email, RESET_LINK_PATTERN)


class FakeSmsService(SmsService):

    def __init__(self):
        super().__init__(settings)
        self.outbox = []

    @property
    def configured(self):
        return True

    def send_sms(self, to_number, text):
        self.outbox.append({"to": to_number, "text": text})
        return True


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mailer():
    return FakeEmailService()


@pytest.fixture
def sms():
    return FakeSmsService()


@pytest.fixture
def client(mailer, sms):
    app.dependency_overrides[get_email_service] = lambda: mailer
    app.dependency_overrides[get_sms_service] = lambda: sms
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user_payload(**overrides):
    payload = {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "password": PASSWORD,
        "phone": "+919876543210",
        "age": 29,
        "fitnessLevel": "beginner",
        "goal": "Improve flexibility",
    }
    payload.update(overrides)
    return payload


class AuthFlow:
    """가입 -> OTP 인증 -> 로그인 헬퍼"""

    def __init__(self, client, mailer):
        self.client = client
        self.mailer = mailer

    def register(self, **overrides):
        return self.client.post("/api/users/register", json=make_user_payload(**overrides))

    def verify(self, email):
        otp = self.mailer.last_otp(email)
        return self.client.post("/api/users/verify-otp", json={"email": email, "otp": otp})

    def login(self, email, password=PASSWORD):
        return self.client.post("/api/users/login", json={"email": email, "password": password})

    def signup_and_login(self, **overrides):
        payload = make_user_payload(**overrides)
        assert self.register(**overrides).status_code == 201
        assert self.verify(payload["email"]).status_code == 200
        response = self.login(payload["email"], payload["password"])
        assert response.status_code == 200
        return response.json()["user"]


@pytest.fixture
def auth(client, mailer):
    return AuthFlow(client, mailer)


@pytest.fixture
def user_payload():
    return make_user_payload
