"""
Task Manager - JWT Token Management

Creates and validates JWT access tokens carrying:
- User ID (_id and sub)
- Issued-at and expiry

Security:
- Short-lived tokens (30 minutes default)
- Verified from the signature alone, no database access
- Revocability lives in refresh sessions, not in access tokens
"""

from datetime import datetime, timedelta
from typing import Optional

from jose import ExpiredSignatureError, JOSEError, JWTError, jwt
from pydantic import BaseModel, Field

from taskmanager.config import Settings, settings


class InvalidTokenError(Exception):
    """Raised when JWT validation fails."""


class TokenExpiredError(InvalidTokenError):
    """Raised when a correctly signed JWT is past its expiry."""


class TokenSigningError(Exception):
    """Raised when a JWT cannot be signed."""


class TokenPayload(BaseModel):
    """
    JWT token payload structure.
    
    Attributes:
        id: User ID (serialized as _id)
        sub: Subject, same user ID
        exp: Expiration timestamp
        iat: Issued-at timestamp
    """
    id: str = Field(..., alias="_id", description="User ID")
    sub: str = Field(..., description="User ID")
    exp: datetime = Field(..., description="Expiration time")
    iat: datetime = Field(..., description="Issued at time")
    
    class Config:
        populate_by_name = True


def create_access_token(
    user_id,
    config: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Create a new JWT access token.
    
    Args:
        user_id: User's unique identifier
        config: Settings carrying the signing key and TTL
        now: Issue instant (naive UTC), defaults to current time
        
    Returns:
        Encoded JWT string
        
    Raises:
        TokenSigningError: If no signing key is configured or encoding fails
    """
    config = config or settings
    now = now or datetime.utcnow()
    expire = now + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    
    if not config.SECRET_KEY:
        raise TokenSigningError("No signing key configured")
    
    payload = {
        "_id": str(user_id),
        "sub": str(user_id),
        "exp": expire,
        "iat": now,
    }
    
    try:
        return jwt.encode(
            payload,
            config.SECRET_KEY,
            algorithm=config.JWT_ALGORITHM
        )
    except JOSEError as e:
        raise TokenSigningError(f"Token signing failed: {str(e)}")


def decode_access_token(token: str, config: Optional[Settings] = None) -> TokenPayload:
    """
    Verify and decode a JWT access token.
    
    Raises:
        TokenExpiredError: Signature is valid but the token has expired
        InvalidTokenError: Token is malformed, tampered, or missing claims
    """
    config = config or settings
    
    if not token:
        raise InvalidTokenError("jwt must be provided")
    
    try:
        payload = jwt.decode(
            token,
            config.SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM]
        )
        return TokenPayload(**payload)
    except ExpiredSignatureError as e:
        raise TokenExpiredError(f"Token expired: {str(e)}")
    except JWTError as e:
        raise InvalidTokenError(f"Token validation failed: {str(e)}")
    except ValueError as e:
        # Signed but missing required claims
        raise InvalidTokenError(f"Token payload invalid: {str(e)}")


def verify_access_token(token: str, config: Optional[Settings] = None) -> str:
    """
    Verify an access token and return the user ID it was issued for.
    
    Raises:
        TokenExpiredError, InvalidTokenError
    """
    return decode_access_token(token, config).id

