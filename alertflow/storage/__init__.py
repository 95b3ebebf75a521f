"""
Storage package - In-memory storage for workflow definitions.
"""

from alertflow.storage.memory import (
    StoredWorkflow,
    WorkflowStorage,
    workflow_storage,
)

__all__ = [
    "StoredWorkflow",
    "WorkflowStorage",
    "workflow_storage",
]
