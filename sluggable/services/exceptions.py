# sluggable/services/exceptions.py

class ServiceError(Exception):
    """Base class for errors raised by the slug services."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class SlugConfigurationError(ServiceError):
    """Raised when a hook is configured with unknown fields or options."""
    pass


class RecordValidationError(ServiceError):
    """Raised when a record reaches the save with field-level errors."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        detail = "; ".join(f"{path} {message}" for path, message in self.errors.items())
        super().__init__(detail or "record is invalid")


class ConflictError(ServiceError):
    """A unique constraint rejected the write."""
    pass
