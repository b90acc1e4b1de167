class LinkRedirectError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkredirect_error'


class ConfigurationError(LinkRedirectError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class InfrastructureError(LinkRedirectError):
    """Base exception for all infrastructure (AWS) errors."""

    error_code = 'infra:infrastructure_error'


class AppConfigError(InfrastructureError):
    """Raised when AppConfig responds with erroneous data."""

    error_code = 'infra:appconfig_error'


class LinkGoneError(LinkRedirectError):
    """Base exception for links which must be answered with 410 Gone.

    Attributes:
        slug (str | None):
            Slug of the link which is gone.
        status_message (str):
            Short HTTP status message (e.g. 'Link Expired').
        message (str):
            Human readable explanation for the client.
    """

    error_code = 'redirect:link_gone_error'
    status_code = 410
    status_message = 'Gone'
    message = 'This link is no longer available.'

    def __init__(self, slug: str | None = None):
        super().__init__(self.message)
        self.slug = slug


class LinkExpiredError(LinkGoneError):
    """Raised when a link expired and has no expiry redirect URL."""

    error_code = 'redirect:link_expired_error'
    status_message = 'Link Expired'
    message = 'This link has expired.'


class InvalidLinkTokenError(LinkGoneError):
    """Raised when the date token attached to a request can't be parsed."""

    error_code = 'redirect:invalid_link_token_error'
    status_message = 'Invalid Link'
    message = 'Invalid urltoken.'
