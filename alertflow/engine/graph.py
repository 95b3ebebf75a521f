"""
Graph Definition for Workflow Engine.

The graph is the declarative workflow document - nodes, edges and the
branch tags that select between conditional edges. It is the same JSON
document the graph editor produces and the store persists, so the models
keep the editor's camelCase field names.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from alertflow.engine.errors import GraphValidationError
from alertflow.engine.state import Environment


# Environment variable written by condition nodes and read by branch edges
CONDITION_MET = "conditionMet"

# Branch tags
BRANCH_TRUE = "true"
BRANCH_FALSE = "false"

START_TYPE = "start"
END_TYPE = "end"


class Position(BaseModel):
    """Editor canvas position. Ignored by the engine."""
    x: float = 0.0
    y: float = 0.0


class NodeData(BaseModel):
    """Display text and type-specific metadata of a node."""
    label: str = ""
    description: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)


class Node(BaseModel):
    """
    A node in the workflow graph.

    ``type`` is kept as a plain string so that documents with node types
    the engine does not know can still be loaded; the executor reports
    those as failed steps.
    """
    id: str
    type: str
    position: Position = Field(default_factory=Position)
    data: NodeData = Field(default_factory=NodeData)

    @property
    def label(self) -> str:
        return self.data.label

    @property
    def description(self) -> str:
        return self.data.description

    @property
    def metadata(self) -> Dict[str, Any]:
        return self.data.metadata


class Edge(BaseModel):
    """
    An edge connecting two nodes.

    ``source_handle`` is the branch tag: empty for an unconditional edge,
    ``"true"`` or ``"false"`` for the branches of a condition node.
    """
    id: str = ""
    source: str
    target: str
    type: str = ""
    animated: bool = False
    style: Dict[str, Any] = Field(default_factory=dict)
    label: str = ""
    label_style: Optional[Dict[str, Any]] = Field(None, alias="labelStyle")
    source_handle: Optional[str] = Field(None, alias="sourceHandle")

    class Config:
        populate_by_name = True

    @property
    def branch(self) -> str:
        return self.source_handle or ""

    @property
    def is_conditional(self) -> bool:
        return self.branch != ""

    def matches(self, env: Environment) -> bool:
        """Check whether this edge should be followed given the environment."""
        if not self.is_conditional:
            return True
        condition_met = env.get_bool(CONDITION_MET)
        if condition_met is None:
            return False
        if self.branch == BRANCH_TRUE:
            return condition_met
        if self.branch == BRANCH_FALSE:
            return not condition_met
        return False


class WorkflowGraph(BaseModel):
    """
    A workflow graph consisting of nodes and edges.

    Edge order is significant: when several edges leave the same node,
    the first one that matches wins.
    """
    id: str = ""
    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)

    def node_index(self) -> Dict[str, Node]:
        """Map node ids to nodes."""
        return {node.id: node for node in self.nodes}

    def find_node_by_type(self, node_type: str) -> Optional[Node]:
        """Get the first node of the given type, in declared order."""
        for node in self.nodes:
            if node.type == node_type:
                return node
        return None

    def outgoing_edges(self, node_id: str) -> List[Edge]:
        """Get the edges leaving a node, in declared order."""
        return [edge for edge in self.edges if edge.source == node_id]

    def get_next_node_id(self, current_node: str, env: Environment) -> Optional[str]:
        """
        Get the id of the next node to execute based on edges and state.

        Args:
            current_node: Current node id
            env: Current environment

        Returns:
            Target id of the first matching edge, or None if no edge matches
        """
        for edge in self.outgoing_edges(current_node):
            if edge.matches(env):
                return edge.target
        return None

    def validate_structure(self) -> List[str]:
        """
        Validate the graph structure.

        Checks node id uniqueness, the single start node, the presence of
        an end node and the shape of the edges leaving each node. A missing start node and edges that
        point at unknown nodes are left to the executor.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        seen = set()
        for node in self.nodes:
            if node.id in seen:
                errors.append(f"Duplicate node id '{node.id}'")
            seen.add(node.id)

        starts = [node.id for node in self.nodes if node.type == START_TYPE]
        if len(starts) > 1:
            errors.append(f"Multiple start nodes: {starts}")

        if not any(node.type == END_TYPE for node in self.nodes):
            errors.append("Graph has no end node")

        sources = []
        for edge in self.edges:
            if edge.source not in sources:
                sources.append(edge.source)

        for source in sources:
            branches = [edge.branch for edge in self.outgoing_edges(source)]
            unconditional = branches.count("")
            conditional = len(branches) - unconditional

            if unconditional and conditional:
                errors.append(
                    f"Node '{source}' mixes conditional and unconditional edges"
                )
            if unconditional > 1:
                errors.append(
                    f"Node '{source}' has {unconditional} unconditional edges; "
                    f"parallel branches are not supported"
                )
            for branch in set(branches) - {"", BRANCH_TRUE, BRANCH_FALSE}:
                errors.append(f"Node '{source}' has unknown branch tag '{branch}'")
            for branch in (BRANCH_TRUE, BRANCH_FALSE):
                if branches.count(branch) > 1:
                    errors.append(
                        f"Node '{source}' has more than one '{branch}' edge"
                    )

        return errors

    def ensure_valid(self) -> "WorkflowGraph":
        """Raise GraphValidationError if the graph is malformed."""
        errors = self.validate_structure()
        if errors:
            raise GraphValidationError(errors)
        return self

    def to_document(self) -> Dict[str, Any]:
        """Serialize the graph to its JSON document form."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "WorkflowGraph":
        """Create a graph from its JSON document form."""
        return cls.model_validate(document)

    def to_mermaid(self) -> str:
        """Generate a Mermaid diagram of the graph."""
        lines = ["graph TD"]

        for node in self.nodes:
            label = (node.label or node.id).replace('"', "'")
            if node.type == START_TYPE:
                lines.append(f'    {node.id}(["{label}"])')
            elif node.type == END_TYPE:
                lines.append(f'    {node.id}(("{label}"))')
            elif node.type == "condition":
                lines.append(f'    {node.id}{{"{label}"}}')
            else:
                lines.append(f'    {node.id}["{label}"]')

        for edge in self.edges:
            if edge.is_conditional:
                lines.append(f"    {edge.source} -->|{edge.branch}| {edge.target}")
            else:
                lines.append(f"    {edge.source} --> {edge.target}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"WorkflowGraph(id='{self.id}', nodes={[n.id for n in self.nodes]}, "
            f"edges={len(self.edges)})"
        )
