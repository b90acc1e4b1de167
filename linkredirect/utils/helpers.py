"""Helper utilities for AWS lambda functions.

Functions:
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler: Callable) -> Callable
        Decorator: Turn unhandled handler exceptions into a 500 response
    request_context(event: dict) -> RequestContext
        Extract client request details from an API Gateway event
"""

import os
import json
import logging
import functools
from collections.abc import Callable

from linkredirect.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from linkredirect.exceptions import MissingEnvironmentVariableError
from linkredirect.models import RequestContext
from linkredirect.types import LambdaEvent
from linkredirect.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: APPCONFIG_APP_ID, APPCONFIG_ENV_ID
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {", ".join(missing)}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with 500 instead of crashing on unhandled exceptions.

    When running locally the exception is re-raised so it shows up in SAM logs.
    """

    @functools.wraps(handler)
    def wrapper(event, context):
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in lambda handler. Responding with 500.')
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps({'message': 'Internal Server Error', 'error_code': UNKNOWN_INTERNAL_SERVER_ERROR}),
            }

    return wrapper


def request_context(event: LambdaEvent) -> RequestContext:
    """Extract client request details from an API Gateway (REST) event"""
    headers = {k.lower(): v for k, v in (event.get('headers') or {}).items()}
    identity = (event.get('requestContext') or {}).get('identity') or {}
    return RequestContext(
        path=event.get('path') or '/',
        source_ip=identity.get('sourceIp'),
        user_agent=headers.get('user-agent') or identity.get('userAgent'),
        referer=headers.get('referer'),
    )
