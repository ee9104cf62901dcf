"""
Password hashing utilities for gateway users.

Uses Argon2id (OWASP recommended) via argon2-cffi. The hash string embeds its
own salt and parameters, so only the hash is stored.
"""
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

# Argon2id configuration (OWASP recommendations)
# https://cheatsheetseries.owasp.org/cheatsheets/Password_Storage_Cheat_Sheet.html
_ph = PasswordHasher(
    time_cost=2,        # Number of iterations
    memory_cost=19456,  # Memory usage in KiB (19 MiB)
    parallelism=1,      # Number of parallel threads
    hash_len=32,        # Length of the hash in bytes
    salt_len=16         # Length of the salt in bytes
)


def hash_password(password: str) -> str:
    """
    Hash a password for storage.

    Args:
        password: The plain-text password

    Returns:
        str: Argon2id hash including salt and parameters
    """
    return _ph.hash(password)


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Verify a password against the stored hash.

    Args:
        password: The password provided by the client
        stored_hash: The Argon2id hash stored in the database

    Returns:
        bool: True if the password matches, False otherwise
    """
    try:
        return _ph.verify(stored_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def check_needs_rehash(stored_hash: str) -> bool:
    """
    Check if a stored hash was produced with outdated parameters.

    Args:
        stored_hash: The Argon2id hash to check

    Returns:
        bool: True if the hash should be updated on next successful login
    """
    return _ph.check_needs_rehash(stored_hash)
