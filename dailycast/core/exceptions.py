"""Custom exceptions for dailycast.

Every failure that leaves a component carries a machine-readable code and a
details mapping (series name, model kind, step index, path) so the command
that catches it can report enough context to diagnose the run.
"""

from typing import Any

# =============================================================================
# Exception Classes
# =============================================================================


class DailycastError(Exception):
    """Base exception for dailycast application errors.

    All application-specific exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application error.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            details: Additional error context.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    @property
    def title(self) -> str:
        """Short summary of the problem type."""
        return self.code.replace("_", " ").title()


class DataFormatError(DailycastError):
    """Input data could not be parsed.

    Raised for a single malformed row (callers skip the row and warn) or for
    a file that cannot be read at all (fatal for the run).
    """

    def __init__(
        self,
        message: str = "Malformed input data",
        row_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        merged = dict(details or {})
        if row_number is not None:
            merged["row_number"] = row_number
        super().__init__(message=message, code="DATA_FORMAT_ERROR", details=merged)
        self.row_number = row_number


class TrainingFailure(DailycastError):
    """No candidate model could be trained for a series.

    Aborts the run for that series only.
    """

    def __init__(
        self,
        message: str,
        series: str,
        errors: dict[str, str] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="TRAINING_FAILURE",
            details={"series": series, "errors": dict(errors or {})},
        )
        self.series = series
        self.errors = dict(errors or {})


class PredictionFailure(DailycastError):
    """A trained model rejected an input at forecast time."""

    def __init__(
        self,
        message: str,
        step_index: int,
        series: str | None = None,
        input_value: float | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="PREDICTION_FAILURE",
            details={"step_index": step_index, "series": series, "input_value": input_value},
        )
        self.step_index = step_index
        self.series = series
        self.input_value = input_value


class PersistenceError(DailycastError):
    """Model store read or write failed (missing, permission, corrupt blob).

    Not retried automatically.
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="PERSISTENCE_ERROR",
            details={"path": path, "operation": operation},
        )
        self.path = path
        self.operation = operation
