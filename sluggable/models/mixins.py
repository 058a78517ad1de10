from __future__ import annotations


# --- Errores de validación a nivel de campo ---
class ValidationMixin:
    """Field-level validation errors kept on the instance, outside the mapping.

    ``invalidate`` only records the error; the save is rejected later by the
    validation stage that runs after the slug hook.
    """

    def invalidate(self, path: str, message: str) -> None:
        self.__dict__.setdefault("_validation_errors", {})[path] = message

    @property
    def validation_errors(self) -> dict[str, str]:
        return dict(self.__dict__.get("_validation_errors", {}))

    def clear_validation_errors(self) -> None:
        self.__dict__.pop("_validation_errors", None)
