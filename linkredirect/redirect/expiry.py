"""Link expiry evaluation

A link can expire through two independent mechanisms:

1. Stored absolute expiry: `LinkModel.expiration` (epoch seconds, 0 = never) is in the past.
2. Date token: the request carries a date under the token parameter (by default
   `urltoken`, in the query string or the base64 JSON payload) which lies
   before the current date.

The stored expiry is evaluated first; when it fires, the token isn't looked at.
An unparsable token never grants access: it yields INVALID_TOKEN.

Token formats:
    - plain ISO-8601 date or datetime, e.g. '2026-12-31' or '2026-12-31T18:00:00+02:00'
    - legacy base64-encoded date string, e.g. 'MjAyNi0xMi0zMQ==' ('2026-12-31')

Date comparison:
    compare_dates_only=True  -> compare UTC calendar dates, time of day ignored
    compare_dates_only=False -> compare full timestamps (naive tokens are UTC)
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from datetime import datetime, UTC
from enum import StrEnum
from typing import Any

from linkredirect.models import LinkModel
from linkredirect.types import Params


logger = logging.getLogger(__name__)


class ExpiryState(StrEnum):
    VALID = 'VALID'
    EXPIRED_WITH_FALLBACK = 'EXPIRED_WITH_FALLBACK'
    EXPIRED_NO_FALLBACK = 'EXPIRED_NO_FALLBACK'
    INVALID_TOKEN = 'INVALID_TOKEN'


class ExpiryReason(StrEnum):
    EXPIRATION = 'expiration'
    TOKEN = 'token'


# fmt: off
@dataclass(frozen=True)
class ExpiryOutcome:
    state: ExpiryState
    target_url: str | None = None        # Expiry redirect URL (EXPIRED_WITH_FALLBACK only)
    reason: ExpiryReason | None = None   # Mechanism which judged the link expired or invalid

    @property
    def expired(self) -> bool:
        return self.state in (ExpiryState.EXPIRED_WITH_FALLBACK, ExpiryState.EXPIRED_NO_FALLBACK)
# fmt: on


VALID = ExpiryOutcome(ExpiryState.VALID)


def parse_date_token(value: Any) -> datetime | None:
    """Parse a date token into an aware datetime

    Returns:
        datetime | None: None if the value isn't a recognizable date.

    Example:
        >>> parse_date_token('2026-12-31')
        datetime.datetime(2026, 12, 31, 0, 0, tzinfo=datetime.timezone.utc)
        >>> parse_date_token('MjAyNi0xMi0zMQ==')
        datetime.datetime(2026, 12, 31, 0, 0, tzinfo=datetime.timezone.utc)
        >>> parse_date_token('tomorrow') is None
        True
    """
    if not isinstance(value, str) or not value.strip():
        return None

    parsed = _parse_iso(value.strip())
    if parsed is None:
        decoded = _decode_base64_text(value.strip())
        parsed = _parse_iso(decoded.strip()) if decoded else None
    return parsed


def _parse_iso(text: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)


def _decode_base64_text(text: str) -> str | None:
    try:
        return base64.b64decode(text + '=' * (-len(text) % 4), validate=True).decode('utf-8')
    except (binascii.Error, ValueError):
        return None


def _expired(link: LinkModel, reason: ExpiryReason) -> ExpiryOutcome:
    if link.expiry_redirect_url:
        return ExpiryOutcome(ExpiryState.EXPIRED_WITH_FALLBACK, target_url=link.expiry_redirect_url, reason=reason)
    return ExpiryOutcome(ExpiryState.EXPIRED_NO_FALLBACK, reason=reason)


def evaluate_expiry(
    link: LinkModel,
    params: Params,
    *,
    token_param: str,
    now: datetime | None = None,
    dates_only: bool = True,
) -> ExpiryOutcome:
    """Decide whether `link` is expired for this request

    Args:
        link (LinkModel):
            The resolved link.
        params (dict):
            Merged request parameters (query + payload), before exclusions.
        token_param (str):
            Name of the parameter carrying the date token.
        now (datetime | None):
            Current time; defaults to datetime.now(UTC).
        dates_only (bool):
            If True, compare calendar dates only (time of day ignored).

    Returns:
        ExpiryOutcome: VALID, EXPIRED_WITH_FALLBACK, EXPIRED_NO_FALLBACK or INVALID_TOKEN.
    """
    now = now or datetime.now(UTC)

    # An expiration of 0 means "never expires"
    if link.expiration and int(now.timestamp()) > link.expiration:
        return _expired(link, ExpiryReason.EXPIRATION)

    token = params.get(token_param)
    if token is None or token == '':
        return VALID

    token_date = parse_date_token(token)
    if token_date is None:
        logger.warning('Failed to parse date token.', extra={'slug': link.slug, 'token': token})
        return ExpiryOutcome(ExpiryState.INVALID_TOKEN, reason=ExpiryReason.TOKEN)

    if dates_only:
        expired = token_date.astimezone(UTC).date() < now.astimezone(UTC).date()
    else:
        expired = token_date < now

    return _expired(link, ExpiryReason.TOKEN) if expired else VALID
