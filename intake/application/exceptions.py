class TransportError(RuntimeError):
    """Raised when the messaging transport fails to send, edit or delete a message."""

    def __init__(self, message: str, code: str = "TRANSPORT_ERROR", status_code: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class MissingTranslationError(KeyError):
    """Raised when a catalog key is unknown even in the fallback language."""
    pass
