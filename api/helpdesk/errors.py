"""Error taxonomy shared by the store and the HTTP layer."""


class HelpdeskError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> str:
        return type(self).__name__


class ValidationError(HelpdeskError):
    status_code = 400


class MissingField(ValidationError):
    def __init__(self, field: str | None = None, message: str | None = None):
        super().__init__(message or f"Field '{field}' is required")
        self.field = field


class InvalidEmployeeId(ValidationError):
    pass


class InvalidEmailDomain(ValidationError):
    pass


class NotFound(HelpdeskError):
    status_code = 404


class PersistenceError(HelpdeskError):
    status_code = 500
