"""Error taxonomy shared by the cart and checkout services.

Services raise these and never pick transport status codes; ``tanmore.main``
maps each ``code`` to an HTTP status at the boundary.
"""


class DomainError(Exception):
    code = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> str:
        return self.message


class ValidationError(DomainError):
    code = "validation_error"

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"validation error: field '{field}' {reason}")
        self.field = field
        self.reason = reason


class AuthError(DomainError):
    code = "auth_error"

    def __init__(self, reason: str) -> None:
        super().__init__(f"auth error: {reason}")
        self.reason = reason


class NotFoundError(DomainError):
    code = "not_found"

    def __init__(self, entity: str) -> None:
        super().__init__(f"not found: {entity}")
        self.entity = entity


class ConflictError(DomainError):
    code = "conflict"

    def __init__(self, reason: str) -> None:
        super().__init__(f"conflict: {reason}")
        self.reason = reason


class ServerError(DomainError):
    code = "server_error"

    def __init__(self, context: str) -> None:
        super().__init__(f"server error: {context}")
        self.context = context


class TableError(ServerError):
    code = "table_error"

    def __init__(self, table: str, reason: str) -> None:
        DomainError.__init__(self, f"table '{table}' error: {reason}")
        self.context = table
        self.table = table
        self.reason = reason
