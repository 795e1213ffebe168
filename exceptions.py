"""
Analysis Errors
Fatal conditions that abort an analysis run before any result is shown.
Row-level date problems are not errors; they are dropped and reported in logs.
"""


class AnalysisError(Exception):
    """Base class for errors surfaced to the dashboard user."""


class SchemaError(AnalysisError):
    """The order log is missing one or more required columns."""

    def __init__(self, missing_columns):
        self.missing_columns = list(missing_columns)
        super().__init__(f"Missing required columns: {', '.join(self.missing_columns)}")


class NoUsableDataError(AnalysisError):
    """The input holds no rows, or every row had an unparsable date."""


class EmptyAggregateError(AnalysisError):
    """An extreme was requested from a grouping with no qualifying records."""


class InsufficientHistoryError(AnalysisError):
    """Too few historical periods to extrapolate a forecast."""

    def __init__(self, periods, required):
        self.periods = periods
        self.required = required
        super().__init__(
            f"Forecast needs at least {required} monthly periods of history, found {periods}"
        )
