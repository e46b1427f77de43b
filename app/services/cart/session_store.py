"""
In-memory store of carts keyed by session id.

Each issued session owns one Cart. Sessions expire after a period of
inactivity; every access renews the expiry. Only ids issued by the store
are recognised, so unknown cookie values never create carts. The store is
per process and is not shared between workers.
"""

import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from app.domain.models import Cart

logger = logging.getLogger(__name__)

DEFAULT_IDLE_TIMEOUT_SECONDS = 3600


def _now() -> float:
    return datetime.now(timezone.utc).timestamp()


class CartSessionStore:
    """Maps issued session ids to their carts, expiring idle sessions."""

    def __init__(self, idle_timeout_seconds: int = DEFAULT_IDLE_TIMEOUT_SECONDS):
        """
        Initialize store.

        Args:
            idle_timeout_seconds: Seconds without access after which a session expires
        """
        self.idle_timeout_seconds = idle_timeout_seconds
        self._sessions: Dict[str, Dict[str, Any]] = {}

    def create_session(self) -> Tuple[str, Cart]:
        """
        Issue a new session id with an empty cart.

        Returns:
            Tuple of (session id, cart)
        """
        self.cleanup_expired()

        session_id = secrets.token_urlsafe(24)
        cart = Cart()
        current_time = _now()
        self._sessions[session_id] = {
            "cart": cart,
            "created_at": current_time,
            "expires_at": current_time + self.idle_timeout_seconds,
        }

        logger.debug("Issued new cart session")
        return session_id, cart

    def get(self, session_id: Optional[str]) -> Optional[Cart]:
        """
        Cart of an issued, unexpired session.

        Returns:
            The session cart, or None if the id is unknown or expired
        """
        if not session_id:
            return None

        entry = self._sessions.get(session_id)
        if entry is None:
            return None

        current_time = _now()
        if current_time > entry["expires_at"]:
            del self._sessions[session_id]
            return None

        entry["expires_at"] = current_time + self.idle_timeout_seconds
        return entry["cart"]

    def cleanup_expired(self) -> int:
        """
        Remove expired sessions.

        Returns:
            int: Number of sessions removed
        """
        current_time = _now()
        expired_ids = [
            session_id for session_id, entry in self._sessions.items() if current_time > entry["expires_at"]
        ]

        for session_id in expired_ids:
            del self._sessions[session_id]

        if expired_ids:
            logger.debug(f"Cleaned up {len(expired_ids)} expired cart sessions")

        return len(expired_ids)

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions
