"""Domain events for the meal capture workflow."""

from .base import DomainEvent
from .meal_committed import MealCommitted
from .workflow_status_changed import WorkflowStatusChanged

__all__ = ["DomainEvent", "MealCommitted", "WorkflowStatusChanged"]
