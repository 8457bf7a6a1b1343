"""Session gate: authenticated/anonymous state backed by one persisted flag."""

import logging
from enum import Enum

from hotel_admin_console.auth.credential_validator import SharedSecretValidator
from hotel_admin_console.observability.metrics import record_login_attempt
from hotel_admin_console.repositories.kv_store import SESSION_KEY, KeyValueStore

logger = logging.getLogger(__name__)

AUTHENTICATED_MARKER = "true"


class SessionState(str, Enum):
    """Enumeration of session states."""

    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class SessionGate:
    """Boolean session gate guarding the admin dashboard.

    anonymous -> authenticated on a correct shared secret,
    authenticated -> anonymous on logout. The state survives restarts through
    the ``hotel_admin_auth`` flag. There is no expiry and no token.
    """

    def __init__(self, kv_store: KeyValueStore, validator: SharedSecretValidator) -> None:
        """Initialize the gate from the persisted flag.

        Args:
            kv_store: Persistence adapter holding the session flag
            validator: Shared secret validator used by login
        """
        self.kv_store = kv_store
        self.validator = validator
        flag = kv_store.load(SESSION_KEY)
        self._state = (
            SessionState.AUTHENTICATED if flag == AUTHENTICATED_MARKER else SessionState.ANONYMOUS
        )

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state is SessionState.AUTHENTICATED

    def login(self, secret: str) -> bool:
        """Attempt to authenticate with the shared secret.

        A wrong secret leaves the current state unchanged. If the flag cannot
        be persisted the session is still opened for this process.

        Args:
            secret: Submitted secret

        Returns:
            bool: True if the secret was accepted, False otherwise
        """
        if not self.validator.validate(secret):
            logger.warning("Rejected admin login attempt")
            record_login_attempt(False)
            return False

        self._state = SessionState.AUTHENTICATED
        if not self.kv_store.save(SESSION_KEY, AUTHENTICATED_MARKER):
            logger.error("Failed to persist session flag, session will not survive a restart")

        record_login_attempt(True)
        logger.info("Admin session opened")
        return True

    def logout(self) -> None:
        """Close the session and clear the persisted flag."""
        self._state = SessionState.ANONYMOUS
        if not self.kv_store.remove(SESSION_KEY):
            logger.error("Failed to clear persisted session flag")

        logger.info("Admin session closed")
