"""
Session id generation and hashing utilities.

Only hashes of session ids are kept server-side.
"""

import secrets
import hashlib


def generate_token(length: int = 32) -> str:
    """
    Generate a cryptographically secure random token.

    Args:
        length: Number of bytes (token will be 2x this in hex chars)

    Returns:
        Hex-encoded token string
    """
    return secrets.token_hex(length)


def hash_token(token: str) -> str:
    """Create a SHA-256 hash of a token for storage."""
    return hashlib.sha256(token.encode()).hexdigest()
