from typing import Literal

ErrorCategory = Literal["validation", "not_found", "storage_error"]


class AppError:
    """Expected failure of a use case, carried inside ``returns.Failure``."""

    def __init__(self, category: ErrorCategory, message: str) -> None:
        self.category = category
        self.message = message

    def __repr__(self) -> str:
        return f"AppError({self.category!r}, {self.message!r})"

    def __str__(self) -> str:
        return self.message
