from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Process-local link cache upper bound (1 hour in seconds)
    ONE_HOUR = 3_600


class DefaultRedirect:
    """Default redirect settings used when AppConfig omits a value."""

    STATUS_CODE = 302
    ALLOWED_STATUS_CODES = frozenset({301, 302, 303, 307, 308})
    WITH_QUERY = True
    CASE_SENSITIVE = False
    RESERVED_SLUGS = ('dashboard',)
    SLUG_PATTERN = r'^[a-z0-9]+(?:-[a-z0-9]+)*$'
    TOKEN_PARAM = 'urltoken'
    COMPARE_DATES_ONLY = True
    ACCESS_LOG = True
    ACCESS_LOG_MAXLEN = 10_000  # Approximate max entries per access log stream


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
