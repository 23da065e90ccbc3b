"""
Password hashing and access tokens. Tokens are HS256 JWTs issued by
"tubely-access" whose subject is the user's UUID.
"""
import logging
import uuid
from datetime import datetime, timedelta
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.config import get_settings
from app.database import get_db
from app.errors import http_error
from app.models.user import User
from app.schemas.user import TokenPayload

logger = logging.getLogger(__name__)

settings = get_settings()
security = HTTPBearer(auto_error=False)

TOKEN_ISSUER = "tubely-access"

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str | None) -> bool:
    return bool(hashed) and pwd_context.verify(plain, hashed)


def create_access_token(user_id: str, email: str) -> str:
    now = datetime.utcnow()
    claims = {
        "iss": TOKEN_ISSUER,
        "sub": user_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str) -> TokenPayload | None:
    """
    Claims of a valid tubely access token, or None. Rejects a bad signature,
    an expired token, a foreign issuer and a subject that is not a UUID.
    """
    try:
        claims = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            issuer=TOKEN_ISSUER,
            options={"require_sub": True, "require_exp": True, "require_iss": True},
        )
        return TokenPayload(
            sub=str(uuid.UUID(claims["sub"])),
            email=claims.get("email", ""),
            exp=claims["exp"],
            iss=claims["iss"],
        )
    except (JWTError, KeyError, ValueError) as e:
        logger.info("Rejected token: %s", e)
        return None


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """Token from 'Authorization: Bearer <token>'. 401 if missing or malformed."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Couldn't find JWT",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> User:
    payload = decode_token(token)
    user = db.query(User).filter(User.id == payload.sub).first() if payload else None

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Couldn't validate JWT",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def parse_video_id(video_id: str) -> str:
    """
    Path dependency: validate videoID as a UUID. List it before get_current_user
    in an endpoint signature so a malformed id is rejected before auth runs.
    """
    try:
        return str(uuid.UUID(video_id))
    except ValueError as e:
        raise http_error(status.HTTP_400_BAD_REQUEST, "Invalid ID", e)
