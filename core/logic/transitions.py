# ============================================================================
# STAGE TRANSITIONS
# ============================================================================
# STATUS: Core logic - invocation stage machine rules
# PURPOSE: Decide which IngestStage transitions are valid
# EXPORTS: can_stage_transition, get_terminal_stages, is_stage_terminal
# DEPENDENCIES: core.models.enums
# ============================================================================
"""
State Transition Logic for Archive Invocations.

Contains the rules for valid stage transitions.
Separated from data models for clean architecture.

Exports:
    can_stage_transition: Check if a stage transition is valid
    get_terminal_stages: Get terminal stages
    is_stage_terminal: Check if a stage is terminal

Dependencies:
    core.models.enums: IngestStage
"""

from typing import List

from ..models.enums import IngestStage


_PIPELINE_ORDER = [
    IngestStage.RECEIVED,
    IngestStage.UNPACKED,
    IngestStage.EVALUATED,
    IngestStage.CLASSIFIED,
    IngestStage.ALLOCATED,
    IngestStage.PERSISTING,
    IngestStage.COMPLETED,
]


def can_stage_transition(current: IngestStage, target: IngestStage) -> bool:
    """
    Check if an invocation can move from current to target stage.

    Stages advance strictly one step at a time. PERSISTING may repeat
    (one step per catalog entry). Any non-terminal stage may fail.

    Args:
        current: Current stage
        target: Target stage

    Returns:
        True if transition is valid, False otherwise
    """
    if is_stage_terminal(current):
        return False

    if target == IngestStage.FAILED:
        return True

    if current == target:
        return current == IngestStage.PERSISTING

    # ALLOCATED may complete directly when the batch has zero entries
    if current == IngestStage.ALLOCATED and target == IngestStage.COMPLETED:
        return True

    index = _PIPELINE_ORDER.index(current)
    return index + 1 < len(_PIPELINE_ORDER) and _PIPELINE_ORDER[index + 1] == target


def get_terminal_stages() -> List[IngestStage]:
    """Get list of terminal stages."""
    return [IngestStage.COMPLETED, IngestStage.FAILED]


def is_stage_terminal(stage: IngestStage) -> bool:
    """Check if a stage is terminal."""
    return stage in get_terminal_stages()
