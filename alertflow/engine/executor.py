"""
Workflow Executor.

The executor walks a workflow graph from its start node, runs each node's
handler against a private environment, follows the edges that match the
environment, and records one step per visited node.
"""

from typing import Any, Dict, List, Mapping, Optional
from dataclasses import dataclass, field
from enum import Enum
import asyncio
import logging
import time

from alertflow.engine.errors import NodeExecutionError
from alertflow.engine.graph import START_TYPE, Node, WorkflowGraph
from alertflow.engine.node import (
    NodeContext,
    TemperatureLookup,
    dispatch,
    rfc3339,
    utc_now,
)
from alertflow.engine.state import Environment


logger = logging.getLogger(__name__)


NO_START_NODE = "No start node found in workflow"


class ExecutionStatus(str, Enum):
    """Status of a step or of a whole execution."""
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ExecutionStep:
    """A single step in the execution trace."""
    node_id: str
    type: str
    label: str = ""
    description: str = ""
    status: ExecutionStatus = ExecutionStatus.COMPLETED
    output: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @classmethod
    def for_node(cls, node: Node) -> "ExecutionStep":
        return cls(
            node_id=node.id,
            type=node.type,
            label=node.label,
            description=node.description,
        )

    @property
    def failed(self) -> bool:
        return self.status == ExecutionStatus.FAILED

    def fail(self, error: str) -> None:
        self.status = ExecutionStatus.FAILED
        self.error = error

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "nodeId": self.node_id,
            "type": self.type,
            "label": self.label,
            "description": self.description,
            "status": self.status.value,
        }
        if self.output:
            data["output"] = self.output
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class ExecutionResponse:
    """Result of a workflow execution."""
    status: ExecutionStatus
    executed_at: str
    steps: List[ExecutionStep] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "executedAt": self.executed_at,
            "status": self.status.value,
            "steps": [step.to_dict() for step in self.steps],
        }


class Executor:
    """
    Workflow executor.

    Holds the collaborators shared by every execution (the temperature
    lookup and alert settings); all per-run state lives inside
    ``execute``, so one executor can serve concurrent requests.

    Usage:
        executor = Executor(lookup=weather_lookup)
        response = await executor.execute(graph, {"city": "Sydney"})
    """

    def __init__(
        self,
        lookup: Optional[TemperatureLookup] = None,
        alert_sender: str = "weather-alerts@example.com",
        alert_subject: str = "Weather Alert",
    ):
        """
        Initialize the executor.

        Args:
            lookup: Temperature lookup used by integration nodes
            alert_sender: Sender address of alert drafts
            alert_subject: Subject line of alert drafts
        """
        self.lookup = lookup
        self.alert_sender = alert_sender
        self.alert_subject = alert_subject

    async def execute(
        self,
        graph: WorkflowGraph,
        inputs: Mapping[str, Any],
        cancellation: Optional[asyncio.Event] = None,
    ) -> ExecutionResponse:
        """
        Execute the workflow with the given inputs.

        Never raises for workflow problems: a missing start node, an
        unknown node type or a failing node all end up in the returned
        trace with status ``failed``.

        Args:
            graph: The workflow graph (not modified)
            inputs: Initial variables (copied, not modified)
            cancellation: Optional event that abandons a pending lookup

        Returns:
            ExecutionResponse with the ordered step trace
        """
        start_time = time.time()
        env = Environment(inputs)
        context = NodeContext(
            lookup=self.lookup,
            cancellation=cancellation,
            alert_sender=self.alert_sender,
            alert_subject=self.alert_subject,
        )
        nodes = graph.node_index()

        current = graph.find_node_by_type(START_TYPE)
        if current is None:
            logger.error(f"Workflow '{graph.id}' has no start node")
            step = ExecutionStep(node_id="system", type="system", label="System Error")
            step.fail(NO_START_NODE)
            return self._create_response(ExecutionStatus.FAILED, [step])

        steps: List[ExecutionStep] = []

        while current is not None:
            step = await self._execute_node(current, env, context)
            steps.append(step)

            if step.failed:
                logger.info(
                    f"Workflow '{graph.id}' failed at node '{current.id}' "
                    f"after {len(steps)} steps"
                )
                return self._create_response(ExecutionStatus.FAILED, steps)

            next_id = graph.get_next_node_id(current.id, env)
            if next_id is None:
                break

            current = nodes.get(next_id)
            if current is None:
                logger.warning(
                    f"Edge target '{next_id}' not found in workflow '{graph.id}', stopping"
                )

        logger.info(
            f"Workflow '{graph.id}' completed: {len(steps)} steps "
            f"in {(time.time() - start_time) * 1000:.1f}ms"
        )
        return self._create_response(ExecutionStatus.COMPLETED, steps)

    async def _execute_node(
        self,
        node: Node,
        env: Environment,
        context: NodeContext,
    ) -> ExecutionStep:
        """Execute a single node and record the outcome."""
        step = ExecutionStep.for_node(node)

        logger.info(f"Executing node: {node.id} ({node.type})")

        try:
            step.output = await dispatch(node, env, context)
        except NodeExecutionError as e:
            logger.error(f"Node {node.id} failed: {e}")
            step.fail(str(e))
        except Exception as e:
            logger.exception(f"Node {node.id} raised an unexpected error: {e}")
            step.fail(str(e) or type(e).__name__)

        return step

    def _create_response(
        self,
        status: ExecutionStatus,
        steps: List[ExecutionStep],
    ) -> ExecutionResponse:
        return ExecutionResponse(
            status=status,
            executed_at=rfc3339(utc_now()),
            steps=steps,
        )


async def execute_workflow(
    graph: WorkflowGraph,
    inputs: Mapping[str, Any],
    lookup: Optional[TemperatureLookup] = None,
    cancellation: Optional[asyncio.Event] = None,
) -> ExecutionResponse:
    """
    Convenience function to execute a workflow.

    Args:
        graph: The workflow graph
        inputs: Initial variables
        lookup: Optional temperature lookup
        cancellation: Optional cancellation event

    Returns:
        ExecutionResponse
    """
    executor = Executor(lookup=lookup)
    return await executor.execute(graph, inputs, cancellation)
