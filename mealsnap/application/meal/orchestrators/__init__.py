"""Workflow orchestration for the meal capture session."""

from .outcome import WorkflowOutcome
from .submission_coordinator import SubmissionCoordinator
from .workflow_coordinator import WorkflowCoordinator

__all__ = ["SubmissionCoordinator", "WorkflowCoordinator", "WorkflowOutcome"]
