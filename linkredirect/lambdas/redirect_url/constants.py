# Log event and error codes
HOME_REDIRECT = 'HOME_REDIRECT'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
REDIRECT_EXPIRED = 'REDIRECT_EXPIRED'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
LINK_EXPIRED = 'LINK_EXPIRED'
INVALID_LINK_TOKEN = 'INVALID_LINK_TOKEN'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
