import base64
import binascii
import json
import logging

from linkredirect.types import Params


logger = logging.getLogger(__name__)


def decode_payload(segment: str | None) -> Params | None:
    """Decode a base64 JSON path segment into a parameter map

    The segment is standard (not URL-safe) base64; missing '=' padding is
    tolerated. Anything that doesn't decode to a JSON object yields None and
    the redirect proceeds without payload parameters.

    Example:
        >>> decode_payload('eyJmb28iOiAiYmFyIn0=')
        {'foo': 'bar'}
        >>> decode_payload('not-base64!!') is None
        True
    """
    if not segment:
        return None

    padded = segment + '=' * (-len(segment) % 4)
    # Deeply nested JSON exhausts the parser's recursion limit, so RecursionError counts as malformed
    try:
        data = json.loads(base64.b64decode(padded, validate=True).decode('utf-8'))
    except (binascii.Error, ValueError, RecursionError) as e:
        logger.warning('Failed to decode base64 JSON payload.', extra={'payload': segment, 'reason': str(e)})
        return None

    if not isinstance(data, dict):
        logger.warning('Base64 JSON payload is not an object.', extra={'payload': segment})
        return None

    return data
