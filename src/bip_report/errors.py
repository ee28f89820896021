class ConfigError(ValueError):
    """Configuration is missing or invalid."""


class DuplicateNameError(ValueError):
    """A connection with the same name already exists."""


class NotFoundError(LookupError):
    """No connection (or result) matches the request."""


class StorageError(RuntimeError):
    """The connection file could not be read or written."""


class ValidationError(ValueError):
    """Input was rejected before anything was sent or stored."""


class NetworkError(RuntimeError):
    """The report request failed in transport or protocol."""
