"""Services layer - Application orchestration.

Available services:
- TripPlannerService: Runs the planning tool flow end to end
- ResponseAssembler: Merges stage outputs into the final response
"""

from .assembler import ResponseAssembler
from .orchestrator import PipelineRun, PipelineState, TripPlannerService

__all__ = ["TripPlannerService", "ResponseAssembler", "PipelineRun", "PipelineState"]
