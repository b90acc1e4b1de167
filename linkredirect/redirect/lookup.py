"""Slug to link resolution

LinkLookup applies, in order:

1. Reserved slugs (e.g. 'dashboard') and slugs failing the configured slug
   pattern resolve to nothing, without touching the data store.
2. Case-sensitive mode: a single lookup of the slug as received.
3. Case-insensitive mode: a lookup of the lower-cased slug, then, if nothing
   was found and the slug has upper-case characters, a lookup of the slug as
   received. Links created as 'MySlug' stay reachable via '/myslug'.

Data store failures are logged and treated as "not found".
"""

import dataclasses
import logging

from linkredirect.models import LinkModel
from linkredirect.dao.base import LinkBaseDAO
from linkredirect.dao.exceptions import DAOError
from linkredirect.redirect.config import RedirectConfig


logger = logging.getLogger(__name__)


class LinkLookup:
    def __init__(self, dao: LinkBaseDAO, config: RedirectConfig):
        self.dao = dao
        self.config = config

    def accepts(self, slug: str) -> bool:
        """True if `slug` is neither reserved nor malformed"""
        if not slug or '?' in slug:
            return False
        if slug.lower() in self.config.reserved_slugs:
            return False
        return self.config.slug_pattern.fullmatch(slug) is not None

    def resolve(self, slug: str, case_sensitive: bool | None = None) -> LinkModel | None:
        """Resolve `slug` to a link record

        Args:
            slug (str):
                Slug as received in the request path.
            case_sensitive (bool | None):
                Overrides the configured case sensitivity when not None.

        Returns:
            LinkModel | None: The link, or None if no record matches.
        """
        if not self.accepts(slug):
            logger.debug('Slug is reserved or malformed, skipping lookup.', extra={'slug': slug})
            return None

        if case_sensitive is None:
            case_sensitive = self.config.case_sensitive

        if case_sensitive:
            return self._get(slug)

        lower_case_slug = slug.lower()
        link = self._get(lower_case_slug)

        if link is None and lower_case_slug != slug:
            logger.info(
                'Lower-case slug not found, falling back to original slug.',
                extra={'slug': slug, 'lowerCaseSlug': lower_case_slug},
            )
            link = self._get(slug)

        return link

    def _get(self, slug: str) -> LinkModel | None:
        try:
            link = self.dao.get(slug, cache_ttl=self.config.link_cache_ttl)
        except DAOError:
            logger.exception('Link lookup failed. Treating link as not found.', extra={'slug': slug})
            return None

        if link is not None and link.slug is None:
            link = dataclasses.replace(link, slug=slug)
        return link
