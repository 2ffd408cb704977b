"""Service-level errors translated to HTTP responses by the endpoints."""


class ServiceError(Exception):
    """Base class for expected service failures."""


class NotFoundError(ServiceError):
    """Requested record does not exist."""


class InvalidInputError(ServiceError):
    """Input passed boundary validation but is still unusable."""
