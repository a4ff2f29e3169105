import hashlib
import hmac
import re

from fin_api.errors import BadParamInput


EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


# ===== PASSWORD DIGEST UTILITIES =====

def digest_password(password: str) -> str:
    """Deterministic one-way digest of a password (hex SHA-256)"""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(plain_password: str, password_digest: str) -> bool:
    """Verify a password against its stored digest"""
    return hmac.compare_digest(digest_password(plain_password), password_digest)


# ===== EMAIL VALIDATION =====

def validate_email(email: str) -> str:
    """Check the shape of an email address and return it normalized"""
    candidate = email.strip()
    if not EMAIL_PATTERN.match(candidate):
        raise BadParamInput("Invalid email format")
    return candidate.lower()
