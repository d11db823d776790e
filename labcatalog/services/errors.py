class CatalogError(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CatalogError):
    status_code = 400
    default_message = "Invalid request"


class NotFoundError(CatalogError):
    status_code = 404
    default_message = "Not found"


class ConflictError(CatalogError):
    status_code = 409
    default_message = "Conflict"


class InternalError(CatalogError):
    """Unexpected store failure. ``detail`` is only exposed when ENV is dev."""

    status_code = 500

    def __init__(self, detail: str | None = None):
        super().__init__("Server error")
        self.detail = detail
