"""Workflow coordinator - state machine for capture → analyze → edit → submit.

Owns the single active PendingMeal and the workflow status. The status
guard is the only concurrency control: while an analysis or submission is
in flight, every other trigger is rejected.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from mealsnap.application.meal.orchestrators.in_flight import InFlightOperation
from mealsnap.application.meal.orchestrators.outcome import WorkflowOutcome
from mealsnap.application.meal.orchestrators.submission_coordinator import (
    SubmissionCoordinator,
)
from mealsnap.domain.meal.analysis.entities.analysis_result import AnalysisResult
from mealsnap.domain.meal.analysis.ports.analysis_gateway import IAnalysisGateway
from mealsnap.domain.meal.capture.entities.captured_image import CapturedImage
from mealsnap.domain.meal.capture.ports.image_source import IImageSource
from mealsnap.domain.meal.core.entities.ingredient import Ingredient
from mealsnap.domain.meal.core.entities.session import PendingMeal
from mealsnap.domain.meal.core.events import MealCommitted, WorkflowStatusChanged
from mealsnap.domain.meal.core.exceptions import (
    CaptureError,
    InvalidTransitionError,
    MealCaptureError,
    NetworkError,
    ServiceError,
    SubmissionError,
)
from mealsnap.domain.meal.core.value_objects import Language, SessionStatus
from mealsnap.domain.meal.editing.ingredient_editor import IngredientCandidate, IngredientEditor
from mealsnap.domain.shared.ports.event_bus import IEventBus

logger = logging.getLogger(__name__)

DEFAULT_ANALYSIS_TIMEOUT_S = 60.0
DEFAULT_SUBMISSION_TIMEOUT_S = 30.0


class WorkflowCoordinator:
    """
    Coordinate one meal capture session.

    Transitions:
        idle --attach/capture/pick--> awaitingAnalysis
        awaitingAnalysis --analyze()--> analyzing --ok--> editing
                                                  --err--> awaitingAnalysis
        editing --re_analyze()--> reAnalyzing --ok/err--> editing
        editing --submit()--> submitting --ok--> committed (session cleared)
                                         --err--> editing
        committed|failed --reset()--> idle

    Async operations return a WorkflowOutcome instead of raising; guard
    violations raise InvalidTransitionError and change nothing.

    Example:
        >>> coordinator = WorkflowCoordinator(gateway, SubmissionCoordinator(store))
        >>> await coordinator.attach_image(image)
        >>> outcome = await coordinator.analyze()
        >>> coordinator.add_ingredient(IngredientCandidate(name="bread", calories="80"))
        >>> outcome = await coordinator.submit()
        >>> outcome.persisted_id
        'meal_3f2a...'
    """

    def __init__(
        self,
        analysis_gateway: IAnalysisGateway,
        submission_coordinator: SubmissionCoordinator,
        event_bus: Optional[IEventBus] = None,
        image_source: Optional[IImageSource] = None,
        language: Language = Language.ENGLISH,
        analysis_timeout_s: Optional[float] = DEFAULT_ANALYSIS_TIMEOUT_S,
        submission_timeout_s: Optional[float] = DEFAULT_SUBMISSION_TIMEOUT_S,
    ):
        """
        Initialize coordinator.

        Args:
            analysis_gateway: AI analysis adapter
            submission_coordinator: Persists committed meals
            event_bus: Receives WorkflowStatusChanged / MealCommitted (optional)
            image_source: Camera/gallery adapter for capture()/pick() (optional)
            language: Locale sent with every analysis
            analysis_timeout_s: Limit per analysis call, None to disable
            submission_timeout_s: Limit per submission call, None to disable
        """
        self._gateway = analysis_gateway
        self._submission = submission_coordinator
        self._events = event_bus
        self._image_source = image_source
        self._language = language
        self._analysis_timeout_s = analysis_timeout_s
        self._submission_timeout_s = submission_timeout_s

        self._status = SessionStatus.IDLE
        self._session: Optional[PendingMeal] = None
        self._last_error: Optional[MealCaptureError] = None
        self._in_flight: Optional[InFlightOperation] = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def session(self) -> Optional[PendingMeal]:
        return self._session

    @property
    def last_error(self) -> Optional[MealCaptureError]:
        """Error surfaced by the most recent transition, if any."""
        return self._last_error

    @property
    def is_busy(self) -> bool:
        return self._status.is_busy()

    @property
    def language(self) -> Language:
        return self._language

    def set_language(self, language: Language) -> None:
        """
        Change the analysis locale for the current and future sessions.

        Raises:
            InvalidTransitionError: While an operation is in flight
        """
        self._reject_if_busy("change language")
        self._language = language
        if self._session is not None:
            self._session.language = language

    # ------------------------------------------------------------------
    # Image acquisition
    # ------------------------------------------------------------------

    async def attach_image(self, image: CapturedImage) -> WorkflowOutcome:
        """
        Start a session with an image acquired elsewhere.

        Raises:
            InvalidTransitionError: Unless status is idle
        """
        self._require_idle("attach an image")
        return await self._start_session(image)

    async def capture(self) -> WorkflowOutcome:
        """Start a session from the camera."""
        source = self._require_image_source("capture")
        return await self._acquire(source.capture)

    async def pick(self) -> WorkflowOutcome:
        """Start a session from the gallery."""
        source = self._require_image_source("pick")
        return await self._acquire(source.pick)

    async def _acquire(self, acquire: Callable[[], Awaitable[CapturedImage]]) -> WorkflowOutcome:
        await self._transition(SessionStatus.CAPTURING)

        try:
            image = await acquire()
        except asyncio.CancelledError:
            self._set_status(SessionStatus.IDLE)
            raise
        except MealCaptureError as error:
            return await self._fail(SessionStatus.FAILED, self._as_capture_error(error))
        except Exception as e:
            error = CaptureError(f"Image acquisition failed: {e}")
            error.__cause__ = e
            return await self._fail(SessionStatus.FAILED, error)

        return await self._start_session(image)

    async def _start_session(self, image: CapturedImage) -> WorkflowOutcome:
        self._session = PendingMeal(image=image, language=self._language)

        logger.info(
            "Session started",
            extra={
                "session_id": str(self._session.id),
                "origin": image.origin.value,
                "size_bytes": image.size_bytes,
            },
        )

        await self._transition(SessionStatus.AWAITING_ANALYSIS)
        return self._outcome()

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def set_pre_comment(self, text: str) -> None:
        """Hint sent with the first analysis."""
        self._require_session("set a comment").pre_comment = text

    def set_post_comment(self, text: str) -> None:
        """Hint sent with re-analysis; also the submitted description."""
        self._require_session("set a comment").post_comment = text

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    async def analyze(self) -> WorkflowOutcome:
        """
        Run the first analysis of the captured image.

        On success the ingredient list is seeded from the result and the
        session moves to editing. On failure the image is kept and the
        session returns to awaitingAnalysis so the user can retry.

        Raises:
            InvalidTransitionError: Unless status is awaitingAnalysis
        """
        session = self._require_status("analyze", SessionStatus.AWAITING_ANALYSIS)
        return await self._run_analysis(
            session,
            running=SessionStatus.ANALYZING,
            on_failure=SessionStatus.AWAITING_ANALYSIS,
            hint=session.hint_for_analysis(),
        )

    async def re_analyze(self) -> WorkflowOutcome:
        """
        Analyze the same image again with the post-analysis comment.

        On success the ingredient list is REPLACED: user-added ingredients
        are not preserved. On failure the current list is kept.

        Raises:
            InvalidTransitionError: Unless status is editing
        """
        session = self._require_status("re-analyze", SessionStatus.EDITING)
        return await self._run_analysis(
            session,
            running=SessionStatus.RE_ANALYZING,
            on_failure=SessionStatus.EDITING,
            hint=session.hint_for_reanalysis(),
        )

    async def _run_analysis(
        self,
        session: PendingMeal,
        running: SessionStatus,
        on_failure: SessionStatus,
        hint: Optional[str],
    ) -> WorkflowOutcome:
        # Registered before the transition so a status subscriber can cancel().
        operation = InFlightOperation("analysis", self._analysis_timeout_s, NetworkError)
        self._in_flight = operation
        try:
            await self._transition(running)

            logger.info(
                "Analysis started",
                extra={
                    "session_id": str(session.id),
                    "status": running.value,
                    "has_hint": hint is not None,
                    "language": session.language.value,
                },
            )

            result: AnalysisResult = await operation.run(
                self._gateway.analyze(session.image.data, hint, session.language)
            )
            IngredientEditor(session).replace_from_analysis(result)
        except asyncio.CancelledError:
            self._set_status(on_failure)
            raise
        except MealCaptureError as error:
            return await self._fail(on_failure, error)
        except Exception as e:
            error = ServiceError(f"Analysis failed: {e}")
            error.__cause__ = e
            return await self._fail(on_failure, error)
        finally:
            self._in_flight = None

        logger.info(
            "Analysis applied",
            extra={
                "session_id": str(session.id),
                "item_count": result.item_count(),
                "total_calories": session.totals.calories,
            },
        )

        await self._transition(SessionStatus.EDITING)
        return self._outcome(analysis=result)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def add_ingredient(self, candidate: IngredientCandidate) -> Ingredient:
        """
        Add a user ingredient.

        Raises:
            InvalidTransitionError: Unless status is editing
            ValidationError: If the name is empty
        """
        session = self._require_status("add an ingredient", SessionStatus.EDITING)
        return IngredientEditor(session).add(candidate)

    def remove_ingredient(self, ingredient_id: str) -> bool:
        """
        Remove an ingredient (idempotent).

        Raises:
            InvalidTransitionError: Unless status is editing
        """
        session = self._require_status("remove an ingredient", SessionStatus.EDITING)
        return IngredientEditor(session).remove(ingredient_id)

    def update_ingredient(self, ingredient_id: str, patch: Mapping[str, Any]) -> Ingredient:
        """
        Edit fields of an ingredient in place.

        Raises:
            InvalidTransitionError: Unless status is editing
            IngredientNotFoundError: If the id is unknown
            ValidationError: If the patch is invalid
        """
        session = self._require_status("update an ingredient", SessionStatus.EDITING)
        return IngredientEditor(session).update(ingredient_id, patch)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit(self) -> WorkflowOutcome:
        """
        Persist the edited meal.

        On success the session is cleared and status becomes committed.
        On failure the session and its edits are kept for a retry.

        Raises:
            InvalidTransitionError: Unless status is editing with ingredients
        """
        session = self._require_status("submit", SessionStatus.EDITING)
        if not session.has_ingredients():
            raise InvalidTransitionError("Cannot submit: the meal has no ingredients")

        operation = InFlightOperation("submission", self._submission_timeout_s, SubmissionError)
        self._in_flight = operation
        try:
            await self._transition(SessionStatus.SUBMITTING)
            persisted_id = await operation.run(self._submission.commit(session))
        except asyncio.CancelledError:
            self._set_status(SessionStatus.EDITING)
            raise
        except MealCaptureError as error:
            return await self._fail(SessionStatus.EDITING, error)
        except Exception as e:
            error = SubmissionError(f"Submission failed: {e}")
            error.__cause__ = e
            return await self._fail(SessionStatus.EDITING, error)
        finally:
            self._in_flight = None

        ingredient_count = len(session.ingredients)
        total_calories = session.totals.calories
        self._session = None

        await self._transition(SessionStatus.COMMITTED, session_id=session.id)
        await self._publish(
            MealCommitted.create(
                session_id=session.id,
                persisted_id=persisted_id,
                ingredient_count=ingredient_count,
                total_calories=total_calories,
            )
        )
        return WorkflowOutcome(
            status=self._status,
            session_id=session.id,
            persisted_id=persisted_id,
        )

    # ------------------------------------------------------------------
    # Cancellation, discard, reset
    # ------------------------------------------------------------------

    def cancel(self) -> bool:
        """
        Cancel the in-flight analysis or submission.

        The cancelled operation then follows its normal failure transition
        with OperationCancelledError.

        Returns:
            True if something was cancelled
        """
        operation = self._in_flight
        if operation is None:
            return False
        return operation.cancel()

    async def discard(self) -> WorkflowOutcome:
        """
        Drop the current session and return to idle.

        Raises:
            InvalidTransitionError: While busy or when there is no session
        """
        session = self._require_session("discard")
        self._reject_if_busy("discard")

        logger.info("Session discarded", extra={"session_id": str(session.id)})

        self._session = None
        await self._transition(SessionStatus.IDLE, session_id=session.id)
        return self._outcome()

    async def reset(self) -> WorkflowOutcome:
        """
        Leave committed/failed and return to idle.

        Raises:
            InvalidTransitionError: From any other non-idle status
        """
        if self._status is SessionStatus.IDLE:
            return self._outcome()

        if not self._status.is_terminal():
            raise InvalidTransitionError(f"Cannot reset while {self._status.value}")

        self._session = None
        await self._transition(SessionStatus.IDLE)
        return self._outcome()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "WorkflowCoordinator":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Cancel any in-flight call, then close the gateway and the meal store."""
        self.cancel()
        try:
            await self._gateway.aclose()
        finally:
            await self._submission.aclose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_idle(self, action: str) -> None:
        self._check_status(action, SessionStatus.IDLE)

    def _require_status(self, action: str, expected: SessionStatus) -> PendingMeal:
        self._check_status(action, expected)
        return self._require_session(action)

    def _check_status(self, action: str, expected: SessionStatus) -> None:
        self._reject_if_busy(action)
        if self._status is not expected:
            raise InvalidTransitionError(
                f"Cannot {action} while {self._status.value} (requires {expected.value})"
            )

    def _require_session(self, action: str) -> PendingMeal:
        if self._session is None:
            raise InvalidTransitionError(f"Cannot {action}: no active session")
        return self._session

    def _require_image_source(self, action: str) -> IImageSource:
        self._require_idle(action)
        if self._image_source is None:
            raise RuntimeError("No image source configured")
        return self._image_source

    def _reject_if_busy(self, action: str) -> None:
        if self._status.is_busy():
            raise InvalidTransitionError(f"Cannot {action} while {self._status.value}")

    @staticmethod
    def _as_capture_error(error: MealCaptureError) -> CaptureError:
        if isinstance(error, CaptureError):
            return error
        wrapped = CaptureError(str(error))
        wrapped.__cause__ = error
        return wrapped

    def _outcome(self, analysis: Optional[AnalysisResult] = None) -> WorkflowOutcome:
        return WorkflowOutcome(
            status=self._status,
            session_id=self._session.id if self._session else None,
            error=self._last_error,
            analysis=analysis,
        )

    async def _fail(self, status: SessionStatus, error: MealCaptureError) -> WorkflowOutcome:
        logger.warning(
            "Workflow operation failed",
            extra={
                "session_id": str(self._session.id) if self._session else None,
                "from_status": self._status.value,
                "to_status": status.value,
                "error_type": type(error).__name__,
                "error": str(error),
            },
        )
        await self._transition(status, error=error)
        return self._outcome()

    def _set_status(self, status: SessionStatus) -> SessionStatus:
        previous = self._status
        self._status = status
        return previous

    async def _transition(
        self,
        status: SessionStatus,
        error: Optional[MealCaptureError] = None,
        session_id: Any = None,
    ) -> None:
        previous = self._set_status(status)
        self._last_error = error

        logger.debug(
            "Workflow transition",
            extra={"from_status": previous.value, "to_status": status.value},
        )

        await self._publish(
            WorkflowStatusChanged.create(
                session_id=session_id or (self._session.id if self._session else None),
                previous=previous,
                current=status,
                error=error,
            )
        )

    async def _publish(self, event: Any) -> None:
        if self._events is not None:
            await self._events.publish(event)
