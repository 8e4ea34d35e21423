"""Orchestration of background tasks and the scan/process workflow."""

from .card_processor import CardProcessor
from .factory import create_analyzer, create_card_processor, create_registry
from .task_orchestrator import OrchestratorState, TaskOrchestrator, normalize_error

__all__ = [
    "CardProcessor",
    "OrchestratorState",
    "TaskOrchestrator",
    "create_analyzer",
    "create_card_processor",
    "create_registry",
    "normalize_error",
]
