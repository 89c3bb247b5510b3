"""
Core Business Logic Package.

Exports:
    can_stage_transition: Check if an ingest stage transition is valid
    is_stage_terminal: Check if an ingest stage is terminal
"""

from .transitions import (
    can_stage_transition,
    get_terminal_stages,
    is_stage_terminal,
)

__all__ = [
    'can_stage_transition',
    'get_terminal_stages',
    'is_stage_terminal',
]
