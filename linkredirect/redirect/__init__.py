from linkredirect.redirect.config import RedirectConfig
from linkredirect.redirect.path import parse_path, query_from_path
from linkredirect.redirect.lookup import LinkLookup
from linkredirect.redirect.payload import decode_payload
from linkredirect.redirect.params import merge_params
from linkredirect.redirect.expiry import ExpiryOutcome, ExpiryState, evaluate_expiry, parse_date_token
from linkredirect.redirect.builder import build_redirect
from linkredirect.redirect.engine import RedirectEngine


__all__ = [
    'RedirectConfig',
    'parse_path',
    'query_from_path',
    'LinkLookup',
    'decode_payload',
    'merge_params',
    'ExpiryOutcome',
    'ExpiryState',
    'evaluate_expiry',
    'parse_date_token',
    'build_redirect',
    'RedirectEngine',
]
