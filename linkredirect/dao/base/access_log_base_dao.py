from abc import ABC, abstractmethod

from linkredirect.models import LinkModel, RequestContext


class AccessLogBaseDAO(ABC):
    """Interface for access log data access objects (DAOs).

    Access log writes are best-effort: callers log and swallow any error raised
    by `record()`, so implementations are free to raise on failure.
    """

    @abstractmethod
    def record(self, request_context: RequestContext, link: LinkModel, **kwargs) -> None:
        """Record a single access to a link.

        Args:
            request_context (RequestContext):
                Client request details (path, ip, user agent, referer, time).

            link (LinkModel):
                The link that was resolved for this request.

        Raises:
            AccessLogError:
                If the entry can't be written.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
