"""Abstract base class for link data access objects (DAOs).

This class establishes a consistent contract for all link DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, Cloudflare KV, DynamoDB).

Responsibilities:
    - Provide a read-only interface for retrieving LinkModel objects by slug.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkredirect.dao.redis import LinkRedisDAO

        >>> dao = LinkRedisDAO(...)
        >>> link = dao.get("promo")
        >>> print(link.url)
        https://shop.example/sale

        >>> print(dao.get("missing"))
        None
"""

from abc import ABC, abstractmethod

from linkredirect.models import LinkModel


class LinkBaseDAO(ABC):
    """Interface for link data access objects (DAOs).

    Methods:
        get(slug: str, cache_ttl: int | None = None, **kwargs) -> LinkModel | None:
            Retrieve a LinkModel from the data store by slug.
            Returns None if not found.
            Raises MalformedLinkError if the stored record is not a valid link.
            Raises DataStoreError on connection or read failure.

    NOTE:
        - Links are created and deleted by an external link management API.
          The DAO does not provide an interface to write or delete entries.
    """

    @abstractmethod
    def get(self, slug: str, cache_ttl: int | None = None, **kwargs) -> LinkModel | None:
        """Retrieve a LinkModel from the data store by its slug.

        Args:
            slug (str):
                The exact (case preserved) slug of the link.

            cache_ttl (int | None):
                Optional hint for how long (seconds) the record may be served
                from a cache instead of the data store.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkModel | None: The LinkModel instance if found, otherwise None.

        Raises:
            MalformedLinkError:
                If the stored record can't be decoded into a LinkModel.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
