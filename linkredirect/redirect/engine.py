"""Redirect resolution engine

RedirectEngine turns a request path (plus query parameters) into a redirect
decision:

    PathParser -> LinkLookup -> PayloadDecoder + query -> ParameterMerger
               -> ExpiryEvaluator -> RedirectBuilder

Results:
    RedirectDecision:
        Redirect the client (link target, expiry redirect URL, or home URL).
    None:
        No link matches the path; the caller responds with 404.
    LinkExpiredError / InvalidLinkTokenError (raised):
        The link is expired without an expiry redirect URL, or the date token
        is malformed; the caller responds with 410.

Example:
    >>> engine = RedirectEngine(LinkRedisDAO(), RedirectConfig())
    >>> engine.resolve('/promo', {'coupon': 'SAVE10'})
    RedirectDecision(location='https://shop.example/sale?coupon=SAVE10', status_code=302, slug='promo', expired=False)
"""

import logging
from datetime import datetime

from linkredirect.models import LinkModel, RedirectDecision, RequestContext
from linkredirect.exceptions import InvalidLinkTokenError, LinkExpiredError
from linkredirect.dao.base import AccessLogBaseDAO, LinkBaseDAO
from linkredirect.redirect.config import RedirectConfig
from linkredirect.redirect.path import parse_path, query_from_path
from linkredirect.redirect.lookup import LinkLookup
from linkredirect.redirect.payload import decode_payload
from linkredirect.redirect.params import merge_params
from linkredirect.redirect.expiry import ExpiryState, evaluate_expiry
from linkredirect.redirect.builder import build_redirect
from linkredirect.types import QueryParams


logger = logging.getLogger(__name__)


class RedirectEngine:
    def __init__(
        self,
        link_dao: LinkBaseDAO,
        config: RedirectConfig | None = None,
        access_log: AccessLogBaseDAO | None = None,
    ):
        self.config = config or RedirectConfig()
        self.lookup = LinkLookup(link_dao, self.config)
        self.access_log = access_log

    def resolve(
        self,
        path: str,
        query: QueryParams | None = None,
        request_context: RequestContext | None = None,
        now: datetime | None = None,
    ) -> RedirectDecision | None:
        """Resolve a request path into a redirect decision

        Args:
            path (str):
                Raw request path, e.g. '/promo/eyJmb28iOiJiYXIifQ=='.
            query (dict | None):
                Query string parameters of the request.
            request_context (RequestContext | None):
                Client request details for the access log.
            now (datetime | None):
                Current time, defaults to datetime.now(UTC).

        Returns:
            RedirectDecision | None: None if no link matches the path.

        Raises:
            LinkExpiredError:
                If the link expired and has no expiry redirect URL.
            InvalidLinkTokenError:
                If the date token can't be parsed.
        """
        if path in ('', '/'):
            if self.config.home_url:
                return RedirectDecision(location=self.config.home_url, status_code=self.config.redirect_status_code)
            return None

        parsed = parse_path(path)
        if parsed is None:
            return None

        link = self.lookup.resolve(parsed.slug)
        if link is None:
            return None

        self._record_access(request_context or RequestContext(path=path), link)

        payload = decode_payload(parsed.payload_segment)
        query_params = {**query_from_path(path), **(query or {})}

        params = merge_params(payload, query_params)
        forwarded = merge_params(payload, query_params, exclude=self.config.excluded_params)

        outcome = evaluate_expiry(
            link,
            params,
            token_param=self.config.token_param,
            now=now,
            dates_only=self.config.compare_dates_only,
        )

        if outcome.state is ExpiryState.INVALID_TOKEN:
            raise InvalidLinkTokenError(link.slug)
        if outcome.state is ExpiryState.EXPIRED_NO_FALLBACK:
            raise LinkExpiredError(link.slug)

        target_url = outcome.target_url if outcome.state is ExpiryState.EXPIRED_WITH_FALLBACK else link.url
        location, status_code = build_redirect(
            target_url,
            forwarded,
            self.config.redirect_with_query,
            self.config.redirect_status_code,
        )
        return RedirectDecision(location=location, status_code=status_code, slug=link.slug, expired=outcome.expired)

    def _record_access(self, request_context: RequestContext, link: LinkModel) -> None:
        if self.access_log is None:
            return
        try:
            self.access_log.record(request_context, link)
        except Exception:
            # Access logging never changes the redirect outcome
            logger.exception('Failed to write access log.', extra={'slug': link.slug})
