"""
Task Manager - Password Hashing Utilities

Password hashing using bcrypt. The work factor comes from configuration
and defaults to 10.

Security:
- Never log or expose plaintext passwords
- bcrypt includes salt automatically
- Comparison is done by bcrypt.checkpw
"""

import bcrypt


# Work factor for bcrypt (2^10 = 1024 iterations)
BCRYPT_WORK_FACTOR = 10


def hash_password(password: str, work_factor: int = BCRYPT_WORK_FACTOR) -> str:
    """
    Hash a password using bcrypt.
    
    Args:
        password: Plaintext password
        work_factor: bcrypt cost (log2 rounds)
        
    Returns:
        bcrypt hash string (includes salt)
        
    Example:
        >>> hashed = hash_password("longenough")
        >>> hashed.startswith("$2b$")
        True
    """
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=work_factor)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a bcrypt hash.
    
    Args:
        plain_password: Plaintext password to verify
        hashed_password: bcrypt hash to check against
        
    Returns:
        True if password matches, False otherwise
    """
    try:
        password_bytes = plain_password.encode("utf-8")
        hashed_bytes = hashed_password.encode("utf-8")
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except (ValueError, TypeError, AttributeError):
        # Invalid hash format
        return False

