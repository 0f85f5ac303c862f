import logging
from dataclasses import dataclass
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class AccessResult:
    authorized: bool
    email: Optional[str]
    message: str

class AccessPolicy:
    """Email allow-list. An empty list lets everyone in."""

    def __init__(self, allowed_emails: Iterable[str] = ()):
        self.allowed_emails = frozenset(allowed_emails)

    def is_authorized(self, identity: Optional[str]) -> bool:
        if not self.allowed_emails:
            return True
        return identity in self.allowed_emails

    def check(self, identity: Optional[str]) -> AccessResult:
        logger.debug("Checking access for user: %s", identity)

        if not self.allowed_emails:
            return AccessResult(True, identity, "Access granted (no whitelist configured)")

        authorized = self.is_authorized(identity)
        if not authorized:
            logger.warning("Access denied for %s", identity)
        return AccessResult(authorized, identity, "Access granted" if authorized else "Access denied")
