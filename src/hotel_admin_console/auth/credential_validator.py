"""Shared-secret validation for the admin login.

The console has a single operator account guarded by one configured secret.
"""

import hmac


class SharedSecretValidator:
    """Validates the shared admin secret.

    Uses a constant-time comparison and simple return values for results.
    """

    def __init__(self, secret: str) -> None:
        """Initialize validator with the configured secret.

        Args:
            secret: The shared admin secret

        Raises:
            ValueError: If secret is empty
        """
        if not secret:
            raise ValueError("A shared admin secret must be provided")

        self._secret = secret.encode("utf-8")

    def validate(self, candidate: str) -> bool:
        """Validate a submitted secret.

        Args:
            candidate: The secret submitted at login

        Returns:
            bool: True if it matches exactly, False otherwise
        """
        return hmac.compare_digest(candidate.encode("utf-8"), self._secret)
