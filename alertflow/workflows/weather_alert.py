"""
Weather Alert Workflow.

The sample workflow registered at startup. It collects a user's name,
email and city, fetches the current temperature for the city, compares it
with the requested threshold and drafts an alert email when the condition
is met.

Workflow flow:
```
start → form → weather-api → condition ─┬─→ email → end   (true)
                                        └─→ end           (false)
```
"""

from typing import Any, Dict, List
import logging

from alertflow.engine.graph import Edge, Node, NodeData, Position, WorkflowGraph


logger = logging.getLogger(__name__)


SAMPLE_WORKFLOW_ID = "550e8400-e29b-41d4-a716-446655440000"
SAMPLE_WORKFLOW_NAME = "Weather Alert Workflow"

CITY_OPTIONS: List[Dict[str, Any]] = [
    {"city": "Sydney", "lat": -33.8688, "lon": 151.2093},
    {"city": "Melbourne", "lat": -37.8136, "lon": 144.9631},
    {"city": "Brisbane", "lat": -27.4698, "lon": 153.0251},
    {"city": "Perth", "lat": -31.9505, "lon": 115.8605},
    {"city": "Adelaide", "lat": -34.9285, "lon": 138.6007},
]


def _edge_style(color: str, width: int = 3) -> Dict[str, Any]:
    return {"stroke": color, "strokeWidth": width}


def create_weather_alert_workflow(workflow_id: str = SAMPLE_WORKFLOW_ID) -> WorkflowGraph:
    """
    Create the Weather Alert workflow graph.

    Args:
        workflow_id: Id to give the graph

    Returns:
        The workflow graph
    """
    nodes = [
        Node(
            id="start",
            type="start",
            position=Position(x=-160, y=300),
            data=NodeData(
                label="Start",
                description="Begin weather check workflow",
                metadata={"hasHandles": {"source": True, "target": False}},
            ),
        ),
        Node(
            id="form",
            type="form",
            position=Position(x=152, y=304),
            data=NodeData(
                label="User Input",
                description="Process collected data - name, email, location",
                metadata={
                    "hasHandles": {"source": True, "target": True},
                    "inputFields": ["name", "email", "city"],
                    "outputVariables": ["name", "email", "city"],
                },
            ),
        ),
        Node(
            id="weather-api",
            type="integration",
            position=Position(x=460, y=304),
            data=NodeData(
                label="Weather API",
                description="Fetch current temperature for {{city}}",
                metadata={
                    "hasHandles": {"source": True, "target": True},
                    "inputVariables": ["city"],
                    "apiEndpoint": (
                        "https://api.open-meteo.com/v1/forecast"
                        "?latitude={lat}&longitude={lon}&current_weather=true"
                    ),
                    "options": [dict(option) for option in CITY_OPTIONS],
                    "outputVariables": ["temperature"],
                },
            ),
        ),
        Node(
            id="condition",
            type="condition",
            position=Position(x=794, y=304),
            data=NodeData(
                label="Check Condition",
                description="Evaluate temperature threshold",
                metadata={
                    "hasHandles": {"source": ["true", "false"], "target": True},
                    "conditionExpression": "temperature {{operator}} {{threshold}}",
                    "outputVariables": ["conditionMet"],
                },
            ),
        ),
        Node(
            id="email",
            type="email",
            position=Position(x=1096, y=88),
            data=NodeData(
                label="Send Alert",
                description="Email weather alert notification",
                metadata={
                    "hasHandles": {"source": True, "target": True},
                    "inputVariables": ["name", "city", "temperature"],
                    "emailTemplate": {
                        "subject": "Weather Alert",
                        "body": "Weather alert for {{city}}! Temperature is {{temperature}}°C!",
                    },
                    "outputVariables": ["emailSent"],
                },
            ),
        ),
        Node(
            id="end",
            type="end",
            position=Position(x=1360, y=302),
            data=NodeData(
                label="Complete",
                description="Workflow execution finished",
                metadata={"hasHandles": {"source": False, "target": True}},
            ),
        ),
    ]

    edges = [
        Edge(id="e1", source="start", target="form", type="smoothstep", animated=True,
             style=_edge_style("#10b981"), label="Initialize"),
        Edge(id="e2", source="form", target="weather-api", type="smoothstep", animated=True,
             style=_edge_style("#3b82f6"), label="Submit Data"),
        Edge(id="e3", source="weather-api", target="condition", type="smoothstep", animated=True,
             style=_edge_style("#f97316"), label="Temperature Data"),
        Edge(id="e4", source="condition", target="email", type="smoothstep", animated=True,
             source_handle="true", style=_edge_style("#10b981"), label="✓ Condition Met",
             label_style={"fill": "#10b981", "fontWeight": "bold"}),
        Edge(id="e5", source="condition", target="end", type="smoothstep", animated=True,
             source_handle="false", style=_edge_style("#6b7280"), label="✗ No Alert Needed",
             label_style={"fill": "#6b7280", "fontWeight": "bold"}),
        Edge(id="e6", source="email", target="end", type="smoothstep", animated=True,
             style=_edge_style("#ef4444", 2), label="Alert Sent",
             label_style={"fill": "#ef4444", "fontWeight": "bold"}),
    ]

    return WorkflowGraph(id=workflow_id, nodes=nodes, edges=edges)


async def register_weather_alert_workflow() -> WorkflowGraph:
    """
    Register the Weather Alert workflow in storage.

    This makes the workflow available immediately via the API
    without needing to create it first.
    """
    from alertflow.storage.memory import workflow_storage

    workflow = create_weather_alert_workflow()

    await workflow_storage.save(
        workflow_id=SAMPLE_WORKFLOW_ID,
        name=SAMPLE_WORKFLOW_NAME,
        definition=workflow,
    )

    logger.info(f"Registered {SAMPLE_WORKFLOW_NAME} with ID: {SAMPLE_WORKFLOW_ID}")
    return workflow
