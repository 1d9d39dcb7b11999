"""Exceptions raised by the urest package."""


class UlfiusError(Exception):
    """Base class for every error raised by urest."""


class ParameterError(UlfiusError, ValueError):
    """An argument was missing or had an invalid value."""


class NotFoundError(UlfiusError, LookupError):
    """The requested key, value or index does not exist."""


class TransportError(UlfiusError):
    """Sending a request or a message over the network failed."""