"""
In-Memory Storage for Workflow Engine.

Stores workflow definitions keyed by workflow id. Definitions are kept as
their JSON document and parsed again on every read, so callers always get
a private copy. Can be easily replaced with a database implementation.
"""

from typing import Any, Dict, List
from datetime import datetime
import asyncio
from dataclasses import dataclass, field

from alertflow.engine.errors import WorkflowNotFoundError
from alertflow.engine.graph import WorkflowGraph


@dataclass
class StoredWorkflow:
    """A stored workflow definition."""
    workflow_id: str
    name: str
    definition: WorkflowGraph
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass
class _Record:
    name: str
    document: Dict[str, Any]
    created_at: datetime
    updated_at: datetime


class WorkflowStorage:
    """
    Async-safe in-memory storage for workflow definitions.

    Usage:
        storage = WorkflowStorage()
        await storage.save("wf-1", "My Workflow", graph)
        stored = await storage.get("wf-1")
    """

    def __init__(self):
        self._workflows: Dict[str, _Record] = {}
        self._lock = asyncio.Lock()

    async def save(self, workflow_id: str, name: str, definition: WorkflowGraph) -> StoredWorkflow:
        """
        Save a workflow definition, replacing any existing one.

        Args:
            workflow_id: Unique workflow identifier
            name: Workflow name
            definition: Workflow graph

        Returns:
            The stored workflow
        """
        document = definition.to_document()
        async with self._lock:
            now = datetime.now()
            existing = self._workflows.get(workflow_id)
            record = _Record(
                name=name,
                document=document,
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            self._workflows[workflow_id] = record
            return self._load(workflow_id, record)

    async def get(self, workflow_id: str) -> StoredWorkflow:
        """
        Get a workflow by ID.

        Raises:
            WorkflowNotFoundError: if no workflow is stored under the id
        """
        async with self._lock:
            record = self._workflows.get(workflow_id)
            if record is None:
                raise WorkflowNotFoundError(workflow_id)
            return self._load(workflow_id, record)

    async def list_all(self) -> List[StoredWorkflow]:
        """List all stored workflows."""
        async with self._lock:
            return [self._load(wid, record) for wid, record in self._workflows.items()]

    async def exists(self, workflow_id: str) -> bool:
        """Check if a workflow exists."""
        async with self._lock:
            return workflow_id in self._workflows

    async def clear(self) -> None:
        """Remove all workflows."""
        async with self._lock:
            self._workflows.clear()

    def _load(self, workflow_id: str, record: _Record) -> StoredWorkflow:
        return StoredWorkflow(
            workflow_id=workflow_id,
            name=record.name,
            definition=WorkflowGraph.from_document(record.document),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def __len__(self) -> int:
        return len(self._workflows)


# Global storage instance
workflow_storage = WorkflowStorage()
