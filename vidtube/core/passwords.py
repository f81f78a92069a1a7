"""PBKDF2 password hashing for user accounts."""

import binascii
import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 390_000


def hash_password(password: str, *, iterations: int = ITERATIONS) -> str:
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return "$".join(
        [ALGORITHM, str(iterations), binascii.hexlify(salt).decode(), binascii.hexlify(digest).decode()]
    )


def verify_password(password: str, encoded: str | None) -> bool:
    """Return ``True`` when ``password`` matches the stored hash."""
    if not encoded:
        return False
    try:
        algorithm, iterations, salt_hex, digest_hex = encoded.split("$")
    except ValueError:
        return False
    if algorithm != ALGORITHM:
        return False
    derived = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), binascii.unhexlify(salt_hex), int(iterations)
    )
    return hmac.compare_digest(derived, binascii.unhexlify(digest_hex))
