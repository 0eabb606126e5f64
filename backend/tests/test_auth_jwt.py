from jose import jwt

from kcnotes.config import Settings
from kcnotes.utils.jwt_auth import check_auth, create_access_token, decode_token

settings = Settings(secret="dev-secret-for-tests")


def test_token_round_trip():
    token = create_access_token(12, "userA", settings)
    claims = decode_token(token, settings)
    assert claims["sub"] == "12"
    assert claims["username"] == "userA"
    assert abs(claims["exp"] - claims["iat"] - settings.jwt_exp_minutes * 60) <= 1

    identity = check_auth(f"Bearer {token}", settings)
    assert identity.user_id == 12
    assert identity.username == "userA"
    assert identity.expires_at == claims["exp"]


def test_scheme_is_case_insensitive():
    token = create_access_token(1, "userA", settings)
    assert check_auth(f"bearer {token}", settings).user_id == 1


def test_rejections():
    token = create_access_token(1, "userA", settings)
    assert check_auth(None, settings) is None
    assert check_auth("", settings) is None
    assert check_auth(token, settings) is None
    assert check_auth(f"Token {token}", settings) is None
    assert check_auth("Bearer", settings) is None
    assert check_auth("Bearer garbage", settings) is None


def test_expired_token_rejected():
    token = create_access_token(1, "userA", settings, expires_minutes=-1)
    assert check_auth(f"Bearer {token}", settings) is None


def test_wrong_secret_rejected():
    token = create_access_token(1, "userA", Settings(secret="other"))
    assert check_auth(f"Bearer {token}", settings) is None


def test_token_without_numeric_subject_rejected():
    token = jwt.encode({"sub": "userA"}, settings.secret, algorithm="HS256")
    assert check_auth(f"Bearer {token}", settings) is None

    token = jwt.encode({"username": "userA"}, settings.secret, algorithm="HS256")
    assert check_auth(f"Bearer {token}", settings) is None


def test_missing_secret_never_authenticates():
    token = create_access_token(1, "userA", settings)
    assert check_auth(f"Bearer {token}", Settings(secret="")) is None
