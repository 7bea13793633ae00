"""bcrypt password hasher."""

import bcrypt
import structlog

logger = structlog.get_logger()

# Cost factor for production hashes. Each increment doubles the work.
BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher:
    """Hash and verify passwords with bcrypt.

    Both operations are CPU-bound and synchronous; async callers should run
    them through ``asyncio.to_thread``.
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self._rounds = rounds
        # Target for dummy_verify; never matches any account.
        self._dummy_hash = self.hash("dummy-password-for-timing")

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash ``password`` with a new random salt.

        Raises ValueError for passwords bcrypt cannot take (over 72 bytes).
        """
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password exceeds {MAX_PASSWORD_BYTES} bytes")
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """Compare ``password`` with ``hashed``. Never raises."""
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            logger.warning("password_verify_rejected_input")
            return False

    def dummy_verify(self, password: str) -> bool:
        """Spend the same work as a real check against a throwaway hash.

        Used when no account matched so unknown emails cost the same as
        wrong passwords. Always returns False.
        """
        self.verify(password, self._dummy_hash)
        return False
