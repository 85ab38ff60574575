from datetime import datetime
import importlib
import pathlib
import sys

from jose import jwt

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))


def test_access_token_expiration_respects_env(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1")
    import app.auth as auth
    importlib.reload(auth)

    token = auth.create_access_token(data={"sub": "learner@example.com"})
    decoded = jwt.decode(token, auth.SECRET_KEY, algorithms=[auth.ALGORITHM])
    exp = datetime.utcfromtimestamp(decoded["exp"])
    delta = exp - datetime.utcnow()
    assert 45 <= delta.total_seconds() <= 75
    assert decoded["sub"] == "learner@example.com"

    monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MINUTES", raising=False)
    importlib.reload(auth)


def test_password_hash_round_trip():
    from app.auth import get_password_hash, verify_password

    hashed = get_password_hash("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)
