"""
Exceptions for the Workflow Engine.

Node handlers raise ``NodeExecutionError`` subclasses; the executor turns
them into failed steps. The remaining errors belong to the layers around
the engine (graph loading and storage).
"""

from typing import List, Optional


class WorkflowError(Exception):
    """Base exception for all workflow engine errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GraphValidationError(WorkflowError):
    """A workflow graph breaks one of the structural rules checked at load time."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(f"Graph validation failed: {'; '.join(self.errors)}")


class WorkflowNotFoundError(WorkflowError):
    """No workflow is stored under the requested id."""

    def __init__(self, workflow_id: str):
        self.workflow_id = workflow_id
        super().__init__(f"Workflow '{workflow_id}' not found")


class NodeExecutionError(WorkflowError):
    """A node could not be processed. Reported as a failed step."""


class MissingVariableError(NodeExecutionError):
    """A required variable is absent from the environment or has the wrong type."""

    def __init__(self, key: str, message: Optional[str] = None):
        self.key = key
        super().__init__(message or f"{key} not found in variables")


class InvalidMetadataError(NodeExecutionError):
    """Node metadata does not have the shape the node type expects."""


class LocationNotFoundError(NodeExecutionError):
    """No coordinates are configured for the requested location."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"coordinates not found for city: {location}")


class DataLookupError(NodeExecutionError):
    """The external data source failed, timed out or was cancelled."""


class UnknownNodeTypeError(NodeExecutionError):
    """The node type has no registered handler."""

    def __init__(self, node_type: str):
        self.node_type = node_type
        super().__init__(f"Unknown node type: {node_type}")
