"""Orchestration - Matching pipeline and post-match workflows."""

from careflow.orchestrator.pipeline import Confirmation, MatchingPipeline
from careflow.orchestrator.workflow import WorkflowContext, WorkflowDispatcher

__all__ = ["Confirmation", "MatchingPipeline", "WorkflowContext", "WorkflowDispatcher"]
