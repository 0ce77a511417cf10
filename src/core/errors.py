from __future__ import annotations


class StoreError(Exception):
    """Base class for every failure raised by the store layer."""

    kind = "store_error"

    def __init__(self, message: str, *, target: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        if self.target:
            return f"{self.message} (target={self.target})"
        return self.message


class StoreUnavailable(StoreError):
    kind = "store_unavailable"


class OperationFailed(StoreError):
    kind = "operation_failed"

    def __init__(
        self, message: str, *, target: str | None = None, sql: str | None = None
    ) -> None:
        super().__init__(message, target=target)
        self.sql = sql


class CommitFailed(StoreError):
    kind = "commit_failed"


def format_error_report(exc: BaseException) -> str:
    """
    One-line, user-facing description of a failure: ``"<kind>: <message>"``.
    Store errors include the underlying driver message when one is chained.
    """
    if isinstance(exc, StoreError):
        report = f"{exc.kind}: {exc}"
        cause = exc.__cause__
        if cause is not None and str(cause) and str(cause) not in exc.message:
            report += f" [{type(cause).__name__}: {cause}]"
        return report
    return f"unexpected_error: {type(exc).__name__}: {exc}"
