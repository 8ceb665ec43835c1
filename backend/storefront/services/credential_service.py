from typing import Optional

import bcrypt

from storefront.utils.logger import get_logger

log = get_logger("auth")

# bcrypt only looks at the first 72 bytes; newer releases raise instead of truncating
BCRYPT_MAX_BYTES = 72


def _secret_bytes(value: str) -> bytes:
    return value.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain: str, rounds: Optional[int] = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds) if rounds else bcrypt.gensalt()
    return bcrypt.hashpw(_secret_bytes(plain), salt).decode("ascii")


def verify_password(submitted: Optional[str], stored_hash: Optional[str]) -> bool:
    """
    Check a submitted admin secret against a stored bcrypt hash.

    Fails closed: a missing secret, a missing/blank configured hash or a hash
    bcrypt cannot parse all count as a mismatch. The submitted value is never
    logged.
    """
    if not submitted or not stored_hash or not stored_hash.strip():
        if not (stored_hash or "").strip():
            log.warning("ADMIN_PASSWORD_HASH is not configured; rejecting login")
        return False
    try:
        return bcrypt.checkpw(_secret_bytes(submitted), stored_hash.strip().encode("ascii"))
    except (ValueError, TypeError):
        log.error("ADMIN_PASSWORD_HASH is malformed; rejecting login")
        return False
