"""
Engine package - Core workflow execution components.
"""

from alertflow.engine.state import Environment
from alertflow.engine.graph import WorkflowGraph, Node, NodeData, Edge, Position
from alertflow.engine.node import NodeType, NodeContext, node_handler
from alertflow.engine.executor import (
    Executor,
    ExecutionResponse,
    ExecutionStatus,
    ExecutionStep,
    execute_workflow,
)
from alertflow.engine.errors import (
    WorkflowError,
    GraphValidationError,
    NodeExecutionError,
    DataLookupError,
)

__all__ = [
    "Environment",
    "WorkflowGraph",
    "Node",
    "NodeData",
    "Edge",
    "Position",
    "NodeType",
    "NodeContext",
    "node_handler",
    "Executor",
    "ExecutionResponse",
    "ExecutionStatus",
    "ExecutionStep",
    "execute_workflow",
    "WorkflowError",
    "GraphValidationError",
    "NodeExecutionError",
    "DataLookupError",
]
