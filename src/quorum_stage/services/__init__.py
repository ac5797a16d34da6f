# src/quorum_stage/services/__init__.py
"""Business logic services for the Quorum application."""

from .cascade import CascadeStep, run_cascade
from .lifecycle import ContentLifecycle
from .moderation import ModerationCoordinator
from .reports import ReportPipeline
from .votes import VoteLedger

__all__ = [
    "CascadeStep",
    "ContentLifecycle",
    "ModerationCoordinator",
    "ReportPipeline",
    "VoteLedger",
    "run_cascade",
]
