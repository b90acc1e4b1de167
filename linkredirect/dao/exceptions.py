"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

    MalformedLinkError:
        Raised when a stored link record can't be decoded into a LinkModel.

    AccessLogError:
        Raised when an access log entry can't be written.

Example:
    >>> from linkredirect.dao.exceptions import MalformedLinkError
    >>> raise MalformedLinkError("Link record must be a JSON object with a non-empty 'url'.")
    Traceback (most recent call last):
        ...
    linkredirect.dao.exceptions.MalformedLinkError: Link record must be a JSON object with a non-empty 'url'.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass


class MalformedLinkError(DAOError):
    """Exception raised when a stored link record is not a valid link document."""

    pass


class AccessLogError(DAOError):
    """Exception raised when writing an access log entry fails."""

    pass
