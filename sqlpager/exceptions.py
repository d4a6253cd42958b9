"""
Custom exception classes for the pagination engine.

Errors raised by the host execution capability (SQL or connection failures)
are never wrapped by these classes; they propagate to the caller unchanged.
"""


class PaginationError(Exception):
    """
    Base class for pagination engine errors.
    """

    pass


class MissingPageParameterError(PaginationError):
    """
    Page parameter could not be found.

    Raised when a dialect reported a statement as pageable but no Page object
    can be located in the call parameter. This is an internal consistency
    fault, never a signal to fall back to unpaged execution.
    """

    pass


class DialectUnsupportedError(PaginationError):
    """
    Dialect cannot be used.

    Raised at setup time when a configured dialect class cannot be imported
    or does not implement the Dialect interface.
    """

    pass


class ConfigurationError(PaginationError):
    """
    Interceptor configuration is invalid.

    Raised at setup time for unusable options such as an unknown statement
    cache type.
    """

    pass
