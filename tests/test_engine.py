"""
Tests for the Workflow Engine core components.
"""

import pytest
from typing import Any, Dict, List, Optional, Tuple

from alertflow.engine.errors import (
    DataLookupError,
    GraphValidationError,
    InvalidMetadataError,
    LocationNotFoundError,
    MissingVariableError,
    UnknownNodeTypeError,
)
from alertflow.engine.executor import (
    ExecutionStatus,
    Executor,
    NO_START_NODE,
    execute_workflow,
)
from alertflow.engine.graph import Edge, Node, NodeData, WorkflowGraph
from alertflow.engine.node import (
    NodeContext,
    dispatch,
    process_condition,
    process_email,
    process_form,
    process_integration,
    resolve_coordinates,
)
from alertflow.engine.state import Environment, require_records, require_string_list
from alertflow.workflows.weather_alert import create_weather_alert_workflow


# ============================================================
# Helpers
# ============================================================

def make_node(node_id: str, node_type: str, **metadata) -> Node:
    return Node(
        id=node_id,
        type=node_type,
        data=NodeData(label=node_id.title(), metadata=metadata),
    )


def make_graph(nodes: List[Node], edges: List[Tuple[str, str, str]]) -> WorkflowGraph:
    return WorkflowGraph(
        id="test-workflow",
        nodes=nodes,
        edges=[
            Edge(id=f"e{i}", source=source, target=target, source_handle=branch or None)
            for i, (source, target, branch) in enumerate(edges, start=1)
        ],
    )


def fixed_lookup(temperature: float = 30.0):
    """A deterministic lookup that records its calls."""
    calls = []

    async def lookup(latitude, longitude, cancellation=None):
        calls.append((latitude, longitude))
        return temperature

    lookup.calls = calls
    return lookup


def failing_lookup(message: str = "weather API error: 503 Service Unavailable"):
    async def lookup(latitude, longitude, cancellation=None):
        raise DataLookupError(message)

    return lookup


SYDNEY = {"city": "Sydney", "lat": -33.8688, "lon": 151.2093}

ALERT_INPUTS = {
    "name": "John Doe",
    "email": "john@example.com",
    "city": "Sydney",
    "threshold": 25.0,
    "operator": "greater_than",
}


# ============================================================
# Environment Tests
# ============================================================

class TestEnvironment:
    """Tests for the variable environment."""

    def test_inputs_are_copied(self):
        """Test that writes never reach the caller's mapping."""
        inputs = {"city": "Sydney"}
        env = Environment(inputs)
        env.set("temperature", 21.5)

        assert "temperature" not in inputs
        assert env.get("temperature") == 21.5
        assert env.get("city") == "Sydney"

    def test_require_number_coerces_int(self):
        env = Environment({"threshold": 25})
        value = env.require_number("threshold")

        assert value == 25.0
        assert isinstance(value, float)

    def test_require_number_rejects_bool_and_string(self):
        env = Environment({"flag": True, "text": "25"})

        with pytest.raises(MissingVariableError):
            env.require_number("flag")
        with pytest.raises(MissingVariableError):
            env.require_number("text")

    def test_require_string_missing(self):
        env = Environment()
        with pytest.raises(MissingVariableError, match="city not found in variables"):
            env.require_string("city")

    def test_get_bool(self):
        env = Environment({"conditionMet": False, "other": 0})

        assert env.get_bool("conditionMet") is False
        assert env.get_bool("other") is None
        assert env.get_bool("missing") is None


class TestMetadataAccessors:
    """Tests for node metadata accessors."""

    def test_string_list(self):
        assert require_string_list({"inputFields": ["a", "b"]}, "inputFields") == ["a", "b"]

    def test_string_list_wrong_shape(self):
        with pytest.raises(InvalidMetadataError, match="invalid inputFields"):
            require_string_list({"inputFields": "name"}, "inputFields")
        with pytest.raises(InvalidMetadataError):
            require_string_list({"inputFields": ["name", 3]}, "inputFields")
        with pytest.raises(InvalidMetadataError):
            require_string_list({}, "inputFields")

    def test_records_skip_non_mappings(self):
        records = require_records({"options": [SYDNEY, "Perth", 7]}, "options")
        assert records == [SYDNEY]


# ============================================================
# Graph Tests
# ============================================================

class TestGraph:
    """Tests for WorkflowGraph."""

    def test_find_start_node(self):
        graph = make_graph(
            [make_node("end", "end"), make_node("begin", "start")],
            [("begin", "end", "")],
        )
        assert graph.find_node_by_type("start").id == "begin"
        assert graph.find_node_by_type("email") is None

    def test_unconditional_edge(self):
        graph = make_graph(
            [make_node("start", "start"), make_node("end", "end")],
            [("start", "end", "")],
        )
        assert graph.get_next_node_id("start", Environment()) == "end"
        assert graph.get_next_node_id("end", Environment()) is None

    def test_conditional_edges(self):
        """Test routing on conditionMet."""
        graph = make_graph(
            [make_node("check", "condition"), make_node("a", "email"), make_node("b", "end")],
            [("check", "a", "true"), ("check", "b", "false")],
        )

        assert graph.get_next_node_id("check", Environment({"conditionMet": True})) == "a"
        assert graph.get_next_node_id("check", Environment({"conditionMet": False})) == "b"
        assert graph.get_next_node_id("check", Environment()) is None

    def test_conditional_edge_ignores_non_bool(self):
        graph = make_graph(
            [make_node("check", "condition"), make_node("a", "email")],
            [("check", "a", "true")],
        )
        assert graph.get_next_node_id("check", Environment({"conditionMet": "true"})) is None

    def test_first_matching_edge_wins(self):
        graph = make_graph(
            [make_node("check", "condition"), make_node("a", "end"), make_node("b", "end")],
            [("check", "a", "false"), ("check", "b", "true")],
        )
        assert graph.get_next_node_id("check", Environment({"conditionMet": True})) == "b"

    def test_sample_workflow_is_valid(self):
        graph = create_weather_alert_workflow()
        assert graph.validate_structure() == []
        assert graph.ensure_valid() is graph

    def test_mixed_edges_rejected(self):
        """Test that mixing branch and plain edges fails validation."""
        graph = make_graph(
            [make_node("check", "condition"), make_node("a", "email"), make_node("b", "end")],
            [("check", "a", "true"), ("check", "b", "")],
        )

        with pytest.raises(GraphValidationError) as exc_info:
            graph.ensure_valid()

        assert any("mixes conditional and unconditional" in e for e in exc_info.value.errors)

    def test_duplicate_branch_rejected(self):
        graph = make_graph(
            [make_node("check", "condition"), make_node("a", "email"), make_node("b", "end")],
            [("check", "a", "true"), ("check", "b", "true")],
        )
        errors = graph.validate_structure()
        assert any("more than one 'true' edge" in e for e in errors)

    def test_fan_out_and_unknown_tag_rejected(self):
        graph = make_graph(
            [make_node("start", "start"), make_node("a", "end"), make_node("b", "end"),
             make_node("check", "condition")],
            [("start", "a", ""), ("start", "b", ""), ("check", "a", "maybe")],
        )
        errors = graph.validate_structure()

        assert any("parallel branches" in e for e in errors)
        assert any("unknown branch tag 'maybe'" in e for e in errors)

    def test_duplicate_ids_and_starts_rejected(self):
        graph = make_graph(
            [make_node("start", "start"), make_node("start", "start")],
            [],
        )
        errors = graph.validate_structure()

        assert any("Duplicate node id 'start'" in e for e in errors)
        assert any("Multiple start nodes" in e for e in errors)

    def test_missing_start_is_left_to_executor(self):
        graph = make_graph([make_node("end", "end")], [])
        assert graph.validate_structure() == []

    def test_missing_end_rejected(self):
        graph = make_graph(
            [make_node("start", "start"), make_node("form", "form")],
            [("start", "form", "")],
        )

        with pytest.raises(GraphValidationError) as exc_info:
            graph.ensure_valid()

        assert exc_info.value.errors == ["Graph has no end node"]

    def test_document_round_trip(self):
        """Test that the JSON document form is lossless."""
        graph = create_weather_alert_workflow()
        document = graph.to_document()

        assert document["edges"][3]["sourceHandle"] == "true"
        assert document["edges"][3]["labelStyle"] == {"fill": "#10b981", "fontWeight": "bold"}

        restored = WorkflowGraph.from_document(document)
        assert restored == graph
        assert restored.nodes[2].metadata["options"][0] == SYDNEY

    def test_mermaid_generation(self):
        mermaid = create_weather_alert_workflow().to_mermaid()

        assert mermaid.startswith("graph TD")
        assert "condition -->|true| email" in mermaid
        assert "condition -->|false| end" in mermaid


# ============================================================
# Node Handler Tests
# ============================================================

class TestFormNode:
    """Tests for form nodes."""

    @pytest.mark.asyncio
    async def test_copies_required_fields(self):
        node = make_node("form", "form", inputFields=["name", "email"])
        env = Environment({"name": "John Doe", "email": "john@example.com", "city": "Perth"})

        output = await process_form(node, env, NodeContext())

        assert output == {"name": "John Doe", "email": "john@example.com"}

    @pytest.mark.asyncio
    async def test_missing_field(self):
        node = make_node("form", "form", inputFields=["name", "email"])
        env = Environment({"name": "John Doe"})

        with pytest.raises(MissingVariableError, match="missing required input field: email"):
            await process_form(node, env, NodeContext())

    @pytest.mark.asyncio
    async def test_invalid_metadata(self):
        node = make_node("form", "form", inputFields="name,email")

        with pytest.raises(InvalidMetadataError):
            await process_form(node, Environment({"name": "x"}), NodeContext())


class TestIntegrationNode:
    """Tests for integration nodes."""

    def test_resolve_coordinates(self):
        node = make_node("weather", "integration", options=[SYDNEY])

        coordinates = resolve_coordinates(node, "Sydney")
        assert coordinates.latitude == -33.8688
        assert coordinates.longitude == 151.2093

        assert resolve_coordinates(node, "sydney") is None
        assert resolve_coordinates(node, "Hobart") is None

    def test_zero_coordinates_are_found(self):
        node = make_node("weather", "integration", options=[{"city": "Null Island", "lat": 0, "lon": 0}])

        coordinates = resolve_coordinates(node, "Null Island")
        assert coordinates is not None
        assert (coordinates.latitude, coordinates.longitude) == (0.0, 0.0)

    @pytest.mark.asyncio
    async def test_fetches_temperature(self):
        node = make_node("weather", "integration", options=[SYDNEY])
        env = Environment({"city": "Sydney"})
        lookup = fixed_lookup(28.4)

        output = await process_integration(node, env, NodeContext(lookup=lookup))

        assert output == {"temperature": 28.4, "location": "Sydney"}
        assert env.get("temperature") == 28.4
        assert lookup.calls == [(-33.8688, 151.2093)]

    @pytest.mark.asyncio
    async def test_missing_city(self):
        node = make_node("weather", "integration", options=[SYDNEY])

        with pytest.raises(MissingVariableError, match="city"):
            await process_integration(node, Environment(), NodeContext(lookup=fixed_lookup()))

    @pytest.mark.asyncio
    async def test_unknown_city(self):
        node = make_node("weather", "integration", options=[SYDNEY])
        lookup = fixed_lookup()

        with pytest.raises(LocationNotFoundError, match="coordinates not found for city: Hobart"):
            await process_integration(node, Environment({"city": "Hobart"}), NodeContext(lookup=lookup))
        assert lookup.calls == []

    @pytest.mark.asyncio
    async def test_lookup_failure_is_wrapped(self):
        node = make_node("weather", "integration", options=[SYDNEY])
        env = Environment({"city": "Sydney"})

        with pytest.raises(DataLookupError, match="^failed to fetch weather data: weather API error"):
            await process_integration(node, env, NodeContext(lookup=failing_lookup()))
        assert "temperature" not in env

    @pytest.mark.asyncio
    async def test_unexpected_lookup_error_is_wrapped(self):
        async def broken_lookup(latitude, longitude, cancellation=None):
            raise RuntimeError("boom")

        node = make_node("weather", "integration", options=[SYDNEY])
        env = Environment({"city": "Sydney"})

        with pytest.raises(DataLookupError, match="^failed to fetch weather data: boom$"):
            await process_integration(node, env, NodeContext(lookup=broken_lookup))
        assert "temperature" not in env


class TestConditionNode:
    """Tests for condition nodes."""

    async def _evaluate(self, variables: Dict[str, Any]) -> Tuple[Dict[str, Any], Environment]:
        env = Environment(variables)
        output = await process_condition(make_node("condition", "condition"), env, NodeContext())
        return output, env

    @pytest.mark.asyncio
    async def test_greater_than(self):
        output, env = await self._evaluate(
            {"temperature": 30.0, "threshold": 25.0, "operator": "greater_than"}
        )

        assert output["conditionMet"] is True
        assert env.get("conditionMet") is True
        assert output["actualValue"] == 30.0
        assert output["message"] == "Temperature 30.0°C greater_than 25.0°C - condition met"

    @pytest.mark.asyncio
    async def test_less_than(self):
        output, _ = await self._evaluate(
            {"temperature": 20.0, "threshold": 25.0, "operator": "less_than"}
        )
        assert output["conditionMet"] is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operator,expected", [
        ("equals", True),
        ("greater_than_or_equal", True),
        ("less_than_or_equal", True),
        ("greater_than", False),
        ("less_than", False),
    ])
    async def test_boundary_operators(self, operator, expected):
        output, _ = await self._evaluate(
            {"temperature": 25.0, "threshold": 25.0, "operator": operator}
        )
        assert output["conditionMet"] is expected

    @pytest.mark.asyncio
    async def test_int_threshold_matches_float(self):
        as_int, _ = await self._evaluate({"temperature": 30.0, "threshold": 25})
        as_float, _ = await self._evaluate({"temperature": 30.0, "threshold": 25.0})

        assert as_int == as_float
        assert as_int["threshold"] == 25.0

    @pytest.mark.asyncio
    async def test_default_operator(self):
        output, _ = await self._evaluate({"temperature": 20.0, "threshold": 25.0})
        assert output["operator"] == "greater_than"
        assert output["conditionMet"] is False
        assert output["message"].endswith("condition not met")

    @pytest.mark.asyncio
    async def test_unrecognised_operator_is_echoed(self):
        output, env = await self._evaluate(
            {"temperature": 30.0, "threshold": 25.0, "operator": "roughly"}
        )

        assert output["operator"] == "roughly"
        assert output["conditionMet"] is True
        assert env.get("conditionMet") is True
        assert output["message"] == "Temperature 30.0°C roughly 25.0°C - condition met"

    @pytest.mark.asyncio
    async def test_missing_temperature(self):
        with pytest.raises(MissingVariableError, match="temperature not found"):
            await self._evaluate({"threshold": 25.0})

    @pytest.mark.asyncio
    async def test_non_numeric_threshold(self):
        with pytest.raises(MissingVariableError, match="threshold not found"):
            await self._evaluate({"temperature": 30.0, "threshold": "25"})


class TestEmailNode:
    """Tests for email nodes."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("variables", [
        {"conditionMet": False},
        {"conditionMet": False, "city": "Sydney", "temperature": 30.0, "email": "a@b.c"},
        {},
    ])
    async def test_condition_not_met(self, variables):
        output = await process_email(make_node("email", "email"), Environment(variables), NodeContext())

        assert output == {"emailSent": False, "message": "Condition not met, no email sent"}

    @pytest.mark.asyncio
    async def test_draft_when_condition_met(self):
        env = Environment({
            "conditionMet": True,
            "city": "Sydney",
            "temperature": 30.0,
            "email": "john@example.com",
        })
        context = NodeContext(alert_sender="alerts@test.local", alert_subject="Heat")

        output = await process_email(make_node("email", "email"), env, context)

        assert output["emailSent"] is True
        assert output["deliveryStatus"] == "sent"
        assert output["messageId"].startswith("msg_")
        assert len(output["messageId"]) > len("msg_")

        draft = output["emailDraft"]
        assert draft["to"] == "john@example.com"
        assert draft["from"] == "alerts@test.local"
        assert draft["subject"] == "Heat"
        assert draft["body"] == "Weather alert for Sydney! Temperature is 30.0°C!"
        assert draft["timestamp"].endswith("Z")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["city", "temperature", "email"])
    async def test_missing_variable_when_condition_met(self, missing):
        variables = {
            "conditionMet": True,
            "city": "Sydney",
            "temperature": 30.0,
            "email": "john@example.com",
        }
        del variables[missing]

        with pytest.raises(MissingVariableError, match=missing):
            await process_email(make_node("email", "email"), Environment(variables), NodeContext())


class TestDispatch:
    """Tests for handler dispatch."""

    @pytest.mark.asyncio
    async def test_start_and_end_are_noops(self):
        env = Environment({"a": 1})

        assert await dispatch(make_node("s", "start"), env, NodeContext()) is None
        assert await dispatch(make_node("e", "end"), env, NodeContext()) is None
        assert env.snapshot() == {"a": 1}

    @pytest.mark.asyncio
    async def test_unknown_type(self):
        with pytest.raises(UnknownNodeTypeError, match="Unknown node type: webhook"):
            await dispatch(make_node("hook", "webhook"), Environment(), NodeContext())


# ============================================================
# Executor Tests
# ============================================================

def alert_graph() -> WorkflowGraph:
    """start → form → weather → condition → (email → end | end)"""
    return make_graph(
        [
            make_node("start", "start"),
            make_node("form", "form", inputFields=["name", "email", "city"]),
            make_node("weather", "integration", options=[SYDNEY]),
            make_node("condition", "condition"),
            make_node("email", "email"),
            make_node("end", "end"),
        ],
        [
            ("start", "form", ""),
            ("form", "weather", ""),
            ("weather", "condition", ""),
            ("condition", "email", "true"),
            ("condition", "end", "false"),
            ("email", "end", ""),
        ],
    )


def step_ids(response) -> List[str]:
    return [step.node_id for step in response.steps]


class TestExecutor:
    """Tests for the Executor."""

    @pytest.mark.asyncio
    async def test_no_start_node(self):
        graph = make_graph([make_node("end", "end")], [])

        result = await execute_workflow(graph, {})

        assert result.status == ExecutionStatus.FAILED
        assert len(result.steps) == 1
        assert result.steps[0].node_id == "system"
        assert result.steps[0].type == "system"
        assert result.steps[0].error == NO_START_NODE

    @pytest.mark.asyncio
    async def test_start_to_end(self):
        graph = make_graph(
            [make_node("start", "start"), make_node("end", "end")],
            [("start", "end", "")],
        )

        result = await execute_workflow(graph, {})

        assert result.status == ExecutionStatus.COMPLETED
        assert step_ids(result) == ["start", "end"]
        assert result.executed_at

    @pytest.mark.asyncio
    async def test_form_workflow(self):
        graph = make_graph(
            [
                make_node("start", "start"),
                make_node("form", "form", inputFields=["name", "email"]),
                make_node("end", "end"),
            ],
            [("start", "form", ""), ("form", "end", "")],
        )

        result = await execute_workflow(
            graph, {"name": "John Doe", "email": "john@example.com"}
        )

        assert result.status == ExecutionStatus.COMPLETED
        assert len(result.steps) == 3
        assert result.steps[1].output == {"name": "John Doe", "email": "john@example.com"}

    @pytest.mark.asyncio
    async def test_condition_met_path(self):
        executor = Executor(lookup=fixed_lookup(30.0))

        result = await executor.execute(alert_graph(), ALERT_INPUTS)

        assert result.status == ExecutionStatus.COMPLETED
        assert step_ids(result) == ["start", "form", "weather", "condition", "email", "end"]
        assert result.steps[4].output["emailSent"] is True

    @pytest.mark.asyncio
    async def test_condition_not_met_path(self):
        executor = Executor(lookup=fixed_lookup(18.0))

        result = await executor.execute(alert_graph(), ALERT_INPUTS)

        assert result.status == ExecutionStatus.COMPLETED
        assert step_ids(result) == ["start", "form", "weather", "condition", "end"]
        assert result.steps[3].output["conditionMet"] is False

    @pytest.mark.asyncio
    async def test_failure_stops_walk(self):
        """Test that the failing step is the last one in the trace."""
        inputs = {k: v for k, v in ALERT_INPUTS.items() if k != "email"}

        result = await Executor(lookup=fixed_lookup()).execute(alert_graph(), inputs)

        assert result.status == ExecutionStatus.FAILED
        assert step_ids(result) == ["start", "form"]
        assert result.steps[0].status == ExecutionStatus.COMPLETED
        assert result.steps[1].status == ExecutionStatus.FAILED
        assert result.steps[1].error == "missing required input field: email"

    @pytest.mark.asyncio
    async def test_lookup_failure(self):
        result = await Executor(lookup=failing_lookup("timed out")).execute(
            alert_graph(), ALERT_INPUTS
        )

        assert result.status == ExecutionStatus.FAILED
        assert step_ids(result)[-1] == "weather"
        assert result.steps[-1].error == "failed to fetch weather data: timed out"

    @pytest.mark.asyncio
    async def test_unknown_node_type(self):
        graph = make_graph(
            [make_node("start", "start"), make_node("hook", "webhook"), make_node("end", "end")],
            [("start", "hook", ""), ("hook", "end", "")],
        )

        result = await execute_workflow(graph, {})

        assert result.status == ExecutionStatus.FAILED
        assert step_ids(result) == ["start", "hook"]
        assert result.steps[-1].error == "Unknown node type: webhook"

    @pytest.mark.asyncio
    async def test_broken_edge_ends_workflow(self):
        graph = make_graph(
            [make_node("start", "start"), make_node("end", "end")],
            [("start", "missing", "")],
        )

        result = await execute_workflow(graph, {})

        assert result.status == ExecutionStatus.COMPLETED
        assert step_ids(result) == ["start"]

    @pytest.mark.asyncio
    async def test_unresolved_branch_ends_workflow(self):
        graph = make_graph(
            [make_node("start", "start"), make_node("a", "end")],
            [("start", "a", "true")],
        )

        result = await execute_workflow(graph, {})

        assert result.status == ExecutionStatus.COMPLETED
        assert step_ids(result) == ["start"]

    @pytest.mark.asyncio
    async def test_inputs_not_mutated(self):
        inputs = dict(ALERT_INPUTS)

        await Executor(lookup=fixed_lookup()).execute(alert_graph(), inputs)

        assert inputs == ALERT_INPUTS

    @pytest.mark.asyncio
    async def test_unexpected_lookup_error_is_wrapped(self):
        async def broken_lookup(latitude, longitude, cancellation=None):
            raise RuntimeError("boom")

        result = await Executor(lookup=broken_lookup).execute(alert_graph(), ALERT_INPUTS)

        assert result.status == ExecutionStatus.FAILED
        assert result.steps[-1].node_id == "weather"
        assert result.steps[-1].error == "failed to fetch weather data: boom"

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_failed_step(self, monkeypatch):
        async def broken_dispatch(node, env, context):
            raise RuntimeError("boom")

        monkeypatch.setattr("alertflow.engine.executor.dispatch", broken_dispatch)
        graph = make_graph(
            [make_node("start", "start"), make_node("end", "end")],
            [("start", "end", "")],
        )

        result = await execute_workflow(graph, {})

        assert result.status == ExecutionStatus.FAILED
        assert step_ids(result) == ["start"]
        assert result.steps[-1].error == "boom"

    @pytest.mark.asyncio
    async def test_repeatable(self):
        """Test that identical inputs give identical traces."""
        executor = Executor(lookup=fixed_lookup(30.0))

        first = await executor.execute(alert_graph(), ALERT_INPUTS)
        second = await executor.execute(alert_graph(), ALERT_INPUTS)

        assert first.status == second.status
        assert [(s.node_id, s.status) for s in first.steps] == \
            [(s.node_id, s.status) for s in second.steps]
        # Outputs match except for generated timestamps and message ids
        assert [s.output for s in first.steps[:4]] == [s.output for s in second.steps[:4]]

    @pytest.mark.asyncio
    async def test_to_dict(self):
        result = await Executor(lookup=fixed_lookup(18.0)).execute(alert_graph(), ALERT_INPUTS)
        data = result.to_dict()

        assert data["status"] == "completed"
        assert data["executedAt"] == result.executed_at
        assert data["steps"][0] == {
            "nodeId": "start",
            "type": "start",
            "label": "Start",
            "description": "",
            "status": "completed",
        }
        assert data["steps"][2]["output"] == {"temperature": 18.0, "location": "Sydney"}

    @pytest.mark.asyncio
    async def test_sample_workflow(self):
        result = await Executor(lookup=fixed_lookup(31.0)).execute(
            create_weather_alert_workflow(), ALERT_INPUTS
        )

        assert result.status == ExecutionStatus.COMPLETED
        assert step_ids(result) == ["start", "form", "weather-api", "condition", "email", "end"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
