"""
Credential hashing with bcrypt.

Hashes are salted per call, so the same plaintext never produces the same
digest twice. Verification never raises on malformed digests. bcrypt only
reads the first 72 bytes of a password and current releases refuse longer
input, so callers check `exceeds_bcrypt_limit` before hashing.
"""

import bcrypt

BCRYPT_ROUNDS = 12
MAX_PASSWORD_BYTES = 72


def exceeds_bcrypt_limit(plaintext: str) -> bool:
    return len(plaintext.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(plaintext: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Return a bcrypt digest (60 chars) for plaintext"""
    digest = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds))
    return digest.decode("utf-8")


def verify_password(plaintext: str, digest: str) -> bool:
    """True iff plaintext was hashed into digest; False for any malformed digest"""
    if not plaintext or not digest:
        return False
    try:
        return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def burn_verification_time() -> None:
    """Spend one bcrypt check so unknown accounts cost the same as known ones"""
    bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(BCRYPT_ROUNDS))
