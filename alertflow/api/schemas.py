"""
Pydantic Schemas for API Request/Response Models.

These schemas define the structure of data flowing through the API,
providing automatic validation and documentation.
"""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

from alertflow.engine.graph import Edge, Node, WorkflowGraph


# ============================================================
# Workflow Schemas
# ============================================================

class WorkflowResponse(BaseModel):
    """A stored workflow definition."""
    id: str
    nodes: List[Node]
    edges: List[Edge]


class WorkflowSummary(BaseModel):
    """Summary of a stored workflow."""
    id: str
    name: str
    node_count: int
    created_at: str
    updated_at: str


class WorkflowListResponse(BaseModel):
    """Response listing all workflows."""
    workflows: List[WorkflowSummary]
    total: int


class WorkflowDiagramResponse(BaseModel):
    """Mermaid rendering of a workflow."""
    id: str
    mermaid_diagram: str


# ============================================================
# Execution Schemas
# ============================================================

class ConditionInput(BaseModel):
    """Comparison settings for condition nodes."""
    operator: Optional[Any] = Field(None, description="Comparison operator")
    threshold: Optional[Any] = Field(
        None,
        description="Threshold as a number or numeric string",
    )


class ExecutionRequest(BaseModel):
    """Request to execute a workflow."""
    form_data: Dict[str, Any] = Field(default_factory=dict, alias="formData")
    condition: Optional[ConditionInput] = None
    workflow_definition: Optional[WorkflowGraph] = Field(None, alias="workflowDefinition")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "formData": {
                    "name": "Alice",
                    "email": "alice@example.com",
                    "city": "Sydney",
                },
                "condition": {"operator": "greater_than", "threshold": 25},
            }
        }


class ExecutionStepModel(BaseModel):
    """A single step in the execution trace."""
    nodeId: str
    type: str
    label: str
    description: str
    status: str
    output: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class ExecutionResponseModel(BaseModel):
    """Response after executing a workflow."""
    executedAt: str
    status: str
    steps: List[ExecutionStepModel]

    class Config:
        json_schema_extra = {
            "example": {
                "executedAt": "2024-01-01T12:00:00Z",
                "status": "completed",
                "steps": [
                    {
                        "nodeId": "start",
                        "type": "start",
                        "label": "Start",
                        "description": "Begin weather check workflow",
                        "status": "completed",
                    }
                ],
            }
        }


# ============================================================
# Error Schemas
# ============================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[Union[str, List[str]]] = None
    status_code: int
