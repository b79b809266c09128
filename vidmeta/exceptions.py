"""
Domain exceptions mapped to HTTP responses by the API error handler
"""


class VidmetaError(Exception):
    """Базовое исключение сервиса."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Internal server error", code: str = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ConflictError(VidmetaError):
    """Нарушение уникальности (например, email уже занят)."""

    status_code = 400
    code = "CONFLICT"


class AuthenticationError(VidmetaError):
    """Отсутствует, просрочен токен или неверные учётные данные."""

    status_code = 401
    code = "NOT_AUTHENTICATED"


class AuthorizationError(VidmetaError):
    """Личность установлена, но доступ запрещён."""

    status_code = 403
    code = "FORBIDDEN"


class NotFoundOrForbidden(AuthorizationError):
    """
    Ресурс не существует или принадлежит другому пользователю.

    Both cases produce the same status, code and message.
    """

    code = "NOT_FOUND_OR_FORBIDDEN"

    def __init__(self, message: str = "Video not found or access denied"):
        super().__init__(message)


class BackendUnavailable(VidmetaError):
    """Хранилище метаданных недоступно или вернуло ошибку."""

    status_code = 500
