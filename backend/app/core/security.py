from datetime import datetime, timedelta, timezone
from jose import jwt
from passlib.context import CryptContext
from app.core.config import JWT_SECRET, JWT_ALG, JWT_EXPIRE_MINUTES
from app.core.validate import id_invalid

_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    return _pwd.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    return _pwd.verify(password, password_hash)

def create_access_token(user_id: int, expires_minutes: int = JWT_EXPIRE_MINUTES) -> str:
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=expires_minutes)
    payload = {"sub": str(user_id), "iat": int(now.timestamp()), "exp": exp}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

def decode_token(token: str) -> dict:
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])

def user_id_from_token(token: str) -> int:
    """Return the integer user id carried in ``sub``.

    Raises ``ValueError`` when the claim is missing or not a positive integer,
    and ``jose.JWTError`` when the token itself does not verify.
    """
    payload = decode_token(token)
    sub = payload.get("sub")
    if not sub:
        raise ValueError("No sub")
    user_id = int(sub)
    if id_invalid(user_id):
        raise ValueError("Invalid sub")
    return user_id
