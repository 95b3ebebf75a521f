"""
Workflow API Routes.

Endpoints for reading and executing stored workflows.
"""

from typing import Any, Dict
import asyncio
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
import logging

from alertflow.api.schemas import (
    ErrorResponse,
    ExecutionRequest,
    ExecutionResponseModel,
    WorkflowDiagramResponse,
    WorkflowListResponse,
    WorkflowResponse,
    WorkflowSummary,
)
from alertflow.engine.errors import GraphValidationError, WorkflowNotFoundError
from alertflow.engine.executor import Executor
from alertflow.engine.state import is_number
from alertflow.storage.memory import StoredWorkflow, workflow_storage


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/workflows", tags=["Workflows"])


def get_executor(request: Request) -> Executor:
    """Get the executor created at application startup."""
    return request.app.state.executor


async def _load_workflow(workflow_id: str) -> StoredWorkflow:
    try:
        return await workflow_storage.get(workflow_id)
    except WorkflowNotFoundError as e:
        logger.error(f"Failed to get workflow {workflow_id}: {e}")
        raise HTTPException(status_code=404, detail=f"Workflow not found: {e}")


# ============================================================
# Workflow Endpoints
# ============================================================

@router.get(
    "/",
    response_model=WorkflowListResponse,
)
async def list_workflows() -> WorkflowListResponse:
    """List all stored workflows."""
    stored = await workflow_storage.list_all()

    summaries = [
        WorkflowSummary(
            id=workflow.workflow_id,
            name=workflow.name,
            node_count=len(workflow.definition.nodes),
            created_at=workflow.created_at.isoformat(),
            updated_at=workflow.updated_at.isoformat(),
        )
        for workflow in stored
    ]
    return WorkflowListResponse(workflows=summaries, total=len(summaries))


@router.get(
    "/{workflow_id}",
    response_model=WorkflowResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_workflow(workflow_id: str) -> WorkflowResponse:
    """Get the definition of a workflow."""
    logger.debug(f"Returning workflow definition for id {workflow_id}")
    stored = await _load_workflow(workflow_id)

    definition = stored.definition
    return WorkflowResponse(
        id=definition.id,
        nodes=definition.nodes,
        edges=definition.edges,
    )


@router.get(
    "/{workflow_id}/diagram",
    response_model=WorkflowDiagramResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_workflow_diagram(workflow_id: str) -> WorkflowDiagramResponse:
    """Get a Mermaid diagram of a workflow."""
    stored = await _load_workflow(workflow_id)
    return WorkflowDiagramResponse(
        id=workflow_id,
        mermaid_diagram=stored.definition.to_mermaid(),
    )


# ============================================================
# Execution Endpoints
# ============================================================

def build_inputs(request: ExecutionRequest) -> Dict[str, Any]:
    """
    Merge form data and condition settings into the execution inputs.

    The threshold is normalised to a float; numeric strings are accepted.

    Raises:
        ValueError: if the threshold is neither a number nor a numeric string
    """
    inputs = dict(request.form_data)

    condition = request.condition
    if condition is None:
        return inputs

    if isinstance(condition.operator, str):
        inputs["operator"] = condition.operator

    threshold = condition.threshold
    if threshold is None:
        return inputs

    if is_number(threshold):
        inputs["threshold"] = float(threshold)
    elif isinstance(threshold, str):
        try:
            inputs["threshold"] = float(threshold)
        except ValueError:
            raise ValueError("Invalid threshold value")
    else:
        raise ValueError("Invalid threshold type")

    return inputs


DISCONNECT_POLL_INTERVAL = 0.5


async def watch_disconnect(
    http_request: Request,
    cancellation: asyncio.Event,
    interval: float = DISCONNECT_POLL_INTERVAL,
) -> None:
    """Set `cancellation` once the client has disconnected."""
    while not cancellation.is_set():
        if await http_request.is_disconnected():
            logger.info(f"Client disconnected from {http_request.url.path}, cancelling execution")
            cancellation.set()
            return
        await asyncio.sleep(interval)


@router.post(
    "/{workflow_id}/execute",
    response_model=ExecutionResponseModel,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid inputs"},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse, "description": "Invalid workflow definition"},
    },
)
async def execute_workflow(
    workflow_id: str,
    request: ExecutionRequest,
    http_request: Request,
    executor: Executor = Depends(get_executor),
):
    """
    Execute a workflow with the given form data and condition.

    If `workflowDefinition` is supplied it replaces the stored definition
    for this execution and is saved. The response status is 200 even when
    the execution fails; inspect the `status` field. A client disconnect
    cancels a pending weather lookup.
    """
    logger.debug(f"Handling workflow execution for id {workflow_id}")
    stored = await _load_workflow(workflow_id)

    graph = stored.definition
    if request.workflow_definition is not None:
        logger.debug(f"Using provided workflow definition for {workflow_id}")
        graph = request.workflow_definition
    else:
        logger.debug(f"Using stored workflow definition for {workflow_id}")

    try:
        graph.ensure_valid()
    except GraphValidationError as e:
        logger.error(f"Invalid workflow definition for {workflow_id}: {e}")
        raise HTTPException(status_code=422, detail=e.errors)

    try:
        inputs = build_inputs(request)
    except ValueError as e:
        logger.error(f"Invalid condition for {workflow_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    if request.workflow_definition is not None:
        try:
            await workflow_storage.save(workflow_id, stored.name, graph)
            logger.debug(f"Saved updated workflow definition for {workflow_id}")
        except Exception as e:
            logger.error(f"Failed to save updated workflow definition for {workflow_id}: {e}")

    cancellation = asyncio.Event()
    watcher = asyncio.create_task(watch_disconnect(http_request, cancellation))
    try:
        result = await executor.execute(graph, inputs, cancellation)
    finally:
        watcher.cancel()

    logger.info(f"Executed workflow {workflow_id}: {result.status.value}")
    return JSONResponse(content=result.to_dict())
