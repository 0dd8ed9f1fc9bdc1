"""Domain exceptions for the meal capture workflow.

This module defines the exception hierarchy for capture, analysis, editing
and submission failures. All domain exceptions inherit from MealCaptureError
so the application layer can surface any of them uniformly.
"""


class MealCaptureError(Exception):
    """Base exception for the meal capture domain.

    All domain-specific exceptions should inherit from this class.
    """

    pass


class CaptureError(MealCaptureError):
    """Raised when image acquisition fails.

    Examples:
    - Camera returned no picture
    - Gallery selection was unreadable
    - Image payload is empty
    """

    pass


class AnalysisError(MealCaptureError):
    """Base class for failures of the AI analysis service.

    Only NetworkError, ServiceError and InvalidImageError are raised directly.
    """

    pass


class NetworkError(AnalysisError):
    """Raised when the analysis service cannot be reached or times out."""

    pass


class ServiceError(AnalysisError):
    """Raised when the analysis service answers with an error or an unusable payload.

    Examples:
    - HTTP 5xx or authentication failure
    - Circuit breaker open
    - Structured output missing or malformed
    """

    pass


class InvalidImageError(AnalysisError):
    """Raised when the analysis service rejects the image itself."""

    pass


class ValidationError(MealCaptureError):
    """Raised when user input violates ingredient rules.

    Examples:
    - Ingredient name empty after trimming
    - Patch names a field that does not exist
    """

    pass


class IngredientNotFoundError(MealCaptureError):
    """Raised when updating an ingredient id that is not in the session."""

    pass


class SubmissionError(MealCaptureError):
    """Raised when persisting the finalized session fails."""

    pass


class InvalidTransitionError(MealCaptureError):
    """Raised when an operation is not allowed in the current workflow status.

    Examples:
    - analyze() while an analysis is already running
    - submit() with no ingredients
    """

    pass


class OperationCancelledError(MealCaptureError):
    """Raised when an in-flight analyze/submit call is cancelled by the user."""

    pass
