from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any

from linkredirect.dao.exceptions import MalformedLinkError


# fmt: off
@dataclass(frozen=True)
class LinkModel:
    url: str                                # Target URL the slug redirects to
    slug: str | None = None                 # Slug as stored alongside the link
    expiration: int | None = None           # Absolute expiry as epoch seconds
    expiry_redirect_url: str | None = None  # Fallback target once the link expired

    @classmethod
    def from_dict(cls, data: Any) -> 'LinkModel':
        """Build a LinkModel from a stored JSON link document.

        Unknown fields (id, createdAt, comment, ...) are ignored.

        Raises:
            MalformedLinkError:
                If the document is not an object or lacks a string 'url'.
        """
        if not isinstance(data, dict) or not isinstance(data.get('url'), str) or not data['url']:
            raise MalformedLinkError("Link record must be a JSON object with a non-empty 'url'.")

        expiration = data.get('expiration')
        if expiration is not None:
            if isinstance(expiration, bool) or not isinstance(expiration, (int, float)):
                raise MalformedLinkError(f"Link record 'expiration' must be epoch seconds (got {expiration!r}).")
            expiration = int(expiration)

        return cls(
            url=data['url'],
            slug=data.get('slug'),
            expiration=expiration,
            expiry_redirect_url=data.get('expiryRedirectUrl') or None,
        )

    def to_dict(self) -> dict[str, Any]:
        data = {'url': self.url, 'slug': self.slug, 'expiration': self.expiration, 'expiryRedirectUrl': self.expiry_redirect_url}
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class ParsedPath:
    slug: str                               # First path segment, case preserved, never contains '?'
    payload_segment: str | None = None      # Rest of the path after the slug (base64 JSON blob)


@dataclass(frozen=True)
class RequestContext:
    path: str                               # Raw request path
    source_ip: str | None = None            # Client IP as seen by API Gateway
    user_agent: str | None = None
    referer: str | None = None
    requested_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class RedirectDecision:
    location: str                           # Final redirect target (Location header)
    status_code: int                        # Configured 3xx redirect status
    slug: str | None = None                 # Resolved slug, None for the home redirect
    expired: bool = False                   # True when the expiry redirect URL was used
# fmt: on
