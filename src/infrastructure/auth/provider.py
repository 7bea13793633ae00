"""Password hashing provider protocol."""

from typing import Protocol


class IPasswordHasher(Protocol):
    """Protocol for one-way password hashers."""

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password with a freshly drawn salt.

        Args:
            password: The plaintext password

        Returns:
            The encoded hash, salt and cost factor included
        """
        ...

    def verify(self, password: str, hashed: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Args:
            password: The plaintext password
            hashed: A value previously returned by ``hash``

        Returns:
            True on a match, False on a mismatch or unusable input
        """
        ...

    def dummy_verify(self, password: str) -> bool:
        """Do the work of ``verify`` without a stored hash. Always False."""
        ...
