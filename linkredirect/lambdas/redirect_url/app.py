import json
import logging
from typing import Any

from linkredirect.dao.redis import LinkRedisDAO, AccessLogRedisDAO
from linkredirect.dao.exceptions import DataStoreError
from linkredirect.exceptions import ConfigurationError, InfrastructureError, InvalidLinkTokenError, LinkGoneError
from linkredirect.redirect import RedirectConfig, RedirectEngine
from linkredirect.redirect.path import flatten_query
from linkredirect.types import LambdaEvent, LambdaResponse, QueryParams
from linkredirect.utils import load_config, guarantee_500_response, request_context
from linkredirect.lambdas.redirect_url.constants import (
    HOME_REDIRECT,
    REDIRECT_SUCCESS,
    REDIRECT_EXPIRED,
    SHORT_URL_NOT_FOUND,
    LINK_EXPIRED,
    INVALID_LINK_TOKEN,
    DATA_STORE_UNAVAILABLE,
)


logger = logging.getLogger(__name__)


def response_500(message: str | None = None) -> dict:
    base = 'Internal Server Error'
    body = {'message': base if not message else f'{base} ({message})'}
    return {
        'statusCode': 500,
        'body': json.dumps(body),
    }


def response_404(message: str | None = None, error_code: str | None = None) -> dict:
    base = 'Not Found'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 404,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def response_410(*, status_message: str, message: str, error_code: str) -> dict:
    return {
        'statusCode': 410,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps({'statusMessage': status_message, 'message': message, 'errorCode': error_code}),
    }


def response_redirect(*, location: str, status_code: int) -> dict:
    return {
        'statusCode': status_code,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def query_parameters(event: LambdaEvent) -> QueryParams:
    """Extract query string parameters from an API Gateway event

    Prefers `multiValueQueryStringParameters`, so repeated keys become lists.
    """
    multi = event.get('multiValueQueryStringParameters')
    if multi:
        return flatten_query(multi)
    return dict(event.get('queryStringParameters') or {})


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: Any) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect short links

    This Lambda handler follows this procedure to redirect links:
    - Step 1: Load the application's config and build the redirect engine
    - Step 2: Resolve the request path (slug + optional base64 JSON payload)
    - Step 3: Redirect client to the target, expiry or home URL

    HTTP responses:
        3xx: Successful redirect (status code from config, 302 by default)
            headers:
                Location: target URL destination
        404: Not found
            message: no link matches the slug (or the data store is unavailable)
        410: Gone
            message: link expired ('This link has expired.') or
                     date token is malformed ('Invalid urltoken.')
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (dict):
            API Gateway event payload (REST proxy integration).
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'path': '/promo', 'queryStringParameters': {'coupon': 'SAVE10'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://shop.example/sale?coupon=SAVE10'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
        redirect_config = RedirectConfig.from_dict(app_config.get('redirect'))
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load AppConfig for redirect URL function. Responding with 500.')
        return response_500()
    else:
        logger.debug('Assuming Redis as the backend database for links')
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items() if k != 'prefix'}
        prefix = app_config['redis'].get('prefix')

    path = event.get('path') or '/'

    # 1- Build the redirect engine with its data store collaborators
    try:
        link_dao = LinkRedisDAO(**redis_config, prefix=prefix)
    except DataStoreError:
        logger.exception(
            'Data store unavailable. Responding with 404.',
            extra={'path': path, 'event': DATA_STORE_UNAVAILABLE},
        )
        return response_404(error_code=SHORT_URL_NOT_FOUND)

    access_log = AccessLogRedisDAO(redis_client=link_dao.redis, prefix=prefix) if redirect_config.access_log else None
    engine = RedirectEngine(link_dao, redirect_config, access_log=access_log)

    # 2- Resolve the request path
    try:
        decision = engine.resolve(path, query_parameters(event), request_context(event))
    except LinkGoneError as e:
        error_code = INVALID_LINK_TOKEN if isinstance(e, InvalidLinkTokenError) else LINK_EXPIRED
        logger.info(
            'Link is gone. Responding with 410.',
            extra={'slug': e.slug, 'event': error_code},
        )
        return response_410(status_message=e.status_message, message=e.message, error_code=error_code)

    if decision is None:
        logger.info(
            'Link not found. Responding with 404.',
            extra={'path': path, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(error_code=SHORT_URL_NOT_FOUND)

    # 3- Redirect client
    if decision.slug is None:
        event_code = HOME_REDIRECT
    elif decision.expired:
        event_code = REDIRECT_EXPIRED
    else:
        event_code = REDIRECT_SUCCESS
    logger.info(
        'Redirecting client. Responding with %s.',
        decision.status_code,
        extra={'slug': decision.slug, 'event': event_code},
    )
    return response_redirect(location=decision.location, status_code=decision.status_code)
