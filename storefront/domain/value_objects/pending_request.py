"""Pending request value object.

A `PendingRequest` describes an outbound call independently of the transport,
so it can be rebuilt and sent again after a token refresh.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

AUTHORIZATION_HEADER = "Authorization"


def bearer(token: str) -> str:
    return f"Bearer {token}"


@dataclass
class PendingRequest:
    """An outbound call: method, path, headers, query and body.

    Attributes:
        method: Upper-case HTTP method.
        url: Path relative to the API base URL, or an absolute URL.
        headers: Request-specific headers (merged over the client defaults).
        params: Query parameters.
        json: JSON body, serialized by the transport.
        content: Raw body, used when ``json`` is not given.
        retried: Whether this request was already resubmitted once after a
            token refresh. A retried request is never refreshed again.
    """

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[Dict[str, Any]] = None
    json: Any = None
    content: Optional[bytes] = None
    retried: bool = False

    def __post_init__(self):
        self.method = self.method.upper()
        self.headers = dict(self.headers)

    def mark_retried(self) -> None:
        self.retried = True

    def with_bearer(self, token: str) -> "PendingRequest":
        """Return a copy carrying ``Authorization: Bearer <token>``."""
        headers = dict(self.headers)
        headers[AUTHORIZATION_HEADER] = bearer(token)
        return replace(self, headers=headers)
