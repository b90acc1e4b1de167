from linkredirect.dao.base.link_base_dao import LinkBaseDAO
from linkredirect.dao.base.access_log_base_dao import AccessLogBaseDAO


__all__ = [
    'LinkBaseDAO',
    'AccessLogBaseDAO',
]
