"""Errors raised by completion services.

Transport failures, non-success statuses and malformed response bodies all
collapse into one exception type so callers handle a single failure kind.
"""


class CompletionError(Exception):
    """The completion service could not produce a usable response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            return f"{base} (status {self.status_code})"
        return base
