"""Abstract interface for caller authentication."""

from abc import ABC, abstractmethod


class TokenVerifier(ABC):
    """Verifies bearer tokens issued by the external auth service."""

    @abstractmethod
    def verify(self, token: str) -> str:
        """
        Validates a token and extracts the caller's internal user id.

        Raises:
            AuthenticationError: If the token is missing, malformed, or expired.
        """
