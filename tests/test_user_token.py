from datetime import timedelta
from types import SimpleNamespace

from domain.user import user_token


def make_user(**fields):
    defaults = dict(
        otp_hash=None,
        otp_expire=None,
        otp_attempts=0,
        verification_token_hash=None,
        verification_token_expire=None,
        reset_password_token_hash=None,
        reset_password_expire=None,
    )
    defaults.update(fields)
    return SimpleNamespace(**defaults)


def test_generate_otp_is_six_digits():
    for _ in range(50):
        code = user_token.generate_otp()
        assert len(code) == 6
        assert code.isdigit()


def test_generate_otp_keeps_leading_zeros(monkeypatch):
    monkeypatch.setattr(user_token.secrets, "randbelow", lambda upper: 42)
    assert user_token.generate_otp() == "000042"


def test_link_token_is_32_random_bytes():
    token = user_token.generate_link_token()
    assert len(token) == 64
    assert token != user_token.generate_link_token()


def test_hash_token_is_deterministic_and_not_the_raw_value():
    token = user_token.generate_link_token()
    assert user_token.hash_token(token) == user_token.hash_token(token)
    assert user_token.hash_token(token) != token


def test_issue_verification_token_stores_only_hash():
    user = make_user()
    token = user_token.issue_verification_token(user, expire_hours=24)

    assert user.verification_token_hash == user_token.hash_token(token)
    assert token not in user.verification_token_hash
    remaining = user.verification_token_expire - user_token.utcnow()
    assert timedelta(hours=23, minutes=59) < remaining <= timedelta(hours=24)


def test_issue_password_reset_token_expires_in_one_hour():
    user = make_user()
    token = user_token.issue_password_reset_token(user, expire_minutes=60)

    assert user.reset_password_token_hash == user_token.hash_token(token)
    remaining = user.reset_password_expire - user_token.utcnow()
    assert timedelta(minutes=59) < remaining <= timedelta(minutes=60)


def test_issue_otp_resets_attempts():
    user = make_user(otp_attempts=3)
    code = user_token.issue_otp(user, expire_minutes=10)

    assert user.otp_attempts == 0
    assert user.otp_hash == user_token.hash_token(code)
    assert user.otp_hash != code


def test_check_otp_accepts_correct_code():
    user = make_user()
    code = user_token.issue_otp(user, expire_minutes=10)

    result = user_token.check_otp(user, code, max_attempts=3)

    assert result.success
    assert user.otp_attempts == 0


def test_check_otp_counts_wrong_guesses():
    user = make_user()
    code = user_token.issue_otp(user, expire_minutes=10)
    wrong = "000000" if code != "000000" else "111111"

    result = user_token.check_otp(user, wrong, max_attempts=3)

    assert not result.success
    assert user.otp_attempts == 1
    assert "2 attempts remaining" in result.message


def test_check_otp_rejects_correct_code_after_three_failures():
    user = make_user()
    code = user_token.issue_otp(user, expire_minutes=10)
    wrong = "000000" if code != "000000" else "111111"

    for _ in range(3):
        assert not user_token.check_otp(user, wrong, max_attempts=3).success

    result = user_token.check_otp(user, code, max_attempts=3)
    assert not result.success
    assert "Too many failed attempts" in result.message


def test_check_otp_rejects_expired_code():
    user = make_user()
    code = user_token.issue_otp(user, expire_minutes=10)
    user.otp_expire = user_token.utcnow() - timedelta(seconds=1)

    result = user_token.check_otp(user, code, max_attempts=3)

    assert not result.success
    assert "expired" in result.message


def test_check_otp_without_code():
    result = user_token.check_otp(make_user(), "123456", max_attempts=3)
    assert not result.success
    assert "No OTP found" in result.message


def test_clear_verification_unsets_all_fields():
    user = make_user()
    user_token.issue_otp(user, expire_minutes=10)
    user_token.issue_verification_token(user, expire_hours=24)

    user_token.clear_verification(user)

    assert user.otp_hash is None
    assert user.otp_expire is None
    assert user.verification_token_hash is None
    assert user.verification_token_expire is None
