"""Error types raised while generating a program.

Whole-program validation failures are not exceptions: they are reported as
``ValidationResult(valid=False, error=...)`` by the program validator.
"""


class ProgramGenerationError(Exception):
    """Base exception for program generation errors."""

    pass


class CatalogUnavailableError(ProgramGenerationError):
    """Raised when the exercise catalog cannot be read or is empty (fatal, no retry)."""

    pass


class UpstreamError(ProgramGenerationError):
    """Raised when the completion service fails, times out or returns no text."""

    pass


class MalformedResponseError(ProgramGenerationError):
    """Raised when no JSON object can be extracted from a completion.

    Attributes:
        preview: Leading slice of the offending text
        position: Character offset of the JSON error, when known
    """

    PREVIEW_LENGTH = 200

    def __init__(self, message: str, text: str = "", position: int | None = None) -> None:
        self.preview = text[: self.PREVIEW_LENGTH]
        self.position = position
        super().__init__(message)


class StructureError(ProgramGenerationError):
    """Raised when a week comes back with the wrong number of workouts.

    Attributes:
        expected: Workouts required for the week
        actual: Workouts received (None when the array is missing)
        week: Week number, when known
    """

    def __init__(self, expected: int, actual: int | None, week: int | None = None) -> None:
        self.expected = expected
        self.actual = actual
        self.week = week
        where = f"Week {week}" if week is not None else "Response"
        if actual is None:
            message = f"{where}: missing workouts array (expected {expected} workouts)"
        else:
            message = f"{where}: expected {expected} workouts, got {actual}"
        super().__init__(message)
