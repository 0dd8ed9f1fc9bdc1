"""Composition root: Settings → WorkflowCoordinator."""

import logging
from typing import Optional

from mealsnap.application.meal.orchestrators.submission_coordinator import SubmissionCoordinator
from mealsnap.application.meal.orchestrators.workflow_coordinator import WorkflowCoordinator
from mealsnap.config import Settings
from mealsnap.domain.meal.capture.ports.image_source import IImageSource
from mealsnap.domain.shared.ports.event_bus import IEventBus
from mealsnap.infrastructure.events.in_memory_bus import InMemoryEventBus
from mealsnap.infrastructure.meal.providers.factory import (
    create_analysis_gateway,
    create_meal_store,
)

logger = logging.getLogger(__name__)


def create_workflow_coordinator(
    settings: Optional[Settings] = None,
    image_source: Optional[IImageSource] = None,
    event_bus: Optional[IEventBus] = None,
) -> WorkflowCoordinator:
    """
    Wire adapters selected by settings into a coordinator.

    The coordinator owns the gateway and meal store built here (the HTTP
    store keeps a connection pool); release them with ``aclose()`` or by
    using the coordinator as an async context manager.

    Args:
        settings: Configuration (defaults to Settings.from_env())
        image_source: Camera/gallery adapter, if capture()/pick() are used
        event_bus: Bus for workflow events (defaults to a new InMemoryEventBus)

    Example:
        >>> async with create_workflow_coordinator(Settings()) as coordinator:
        ...     await coordinator.attach_image(image)
        ...     outcome = await coordinator.analyze()
    """
    settings = settings or Settings.from_env()

    coordinator = WorkflowCoordinator(
        analysis_gateway=create_analysis_gateway(settings),
        submission_coordinator=SubmissionCoordinator(create_meal_store(settings)),
        event_bus=event_bus if event_bus is not None else InMemoryEventBus(),
        image_source=image_source,
        language=settings.language,
        analysis_timeout_s=settings.analysis_timeout_s,
        submission_timeout_s=settings.submission_timeout_s,
    )

    logger.info(
        "Workflow coordinator created",
        extra={
            "analysis_provider": settings.analysis_provider,
            "meal_store": settings.meal_store,
            "language": settings.language.value,
        },
    )
    return coordinator
