from linkredirect.utils.config import app_env, app_name, app_prefix, load_config
from linkredirect.utils.helpers import require_environment, guarantee_500_response, request_context
from linkredirect.utils.logging import initialize_logging


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'require_environment',
    'guarantee_500_response',
    'request_context',
    'initialize_logging',
]
