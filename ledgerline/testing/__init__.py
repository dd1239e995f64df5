from .helpers import (
    apply_projection_for_test,
    clear_all_projections,
    clear_projection,
    read_event,
    read_events,
    read_projection_state,
)
from .projection_scenario import ProjectionScenario

__all__ = [
    "ProjectionScenario",
    "apply_projection_for_test",
    "clear_all_projections",
    "clear_projection",
    "read_event",
    "read_events",
    "read_projection_state",
]
