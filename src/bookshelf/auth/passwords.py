"""Password hashing with bcrypt.

bcrypt is CPU bound, so both operations run in a worker thread to keep the
event loop serving other requests.
"""

import asyncio

import bcrypt

DEFAULT_ROUNDS = 10


def _hash(password: str, rounds: int) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def _check(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("ascii"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


async def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash ``password`` with a fresh salt at the given cost factor."""
    return await asyncio.to_thread(_hash, password, rounds)


async def verify_password(password: str, hashed: str) -> bool:
    """Compare ``password`` against a stored bcrypt hash in constant time."""
    return await asyncio.to_thread(_check, password, hashed)
