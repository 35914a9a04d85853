"""
Domain models for the explorer module.

Terms are rdflib nodes (URIRef, BNode, Literal). This module adds the statement
type the store holds and the value objects handed to UI collaborators: property
rows, the graph projection and the ontology audit records.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Dict, Any, Union

from pydantic import BaseModel, ConfigDict, Field
from rdflib import URIRef, BNode, Literal


Term = Union[URIRef, BNode, Literal]


class TermKind(str, Enum):
    """The three kinds of RDF term."""
    IRI = "iri"
    BLANK_NODE = "blank_node"
    LITERAL = "literal"


def term_kind(term: Term) -> TermKind:
    """Classify an rdflib node.

    Raises:
        TypeError: If the value is not a URIRef, BNode or Literal
    """
    if isinstance(term, URIRef):
        return TermKind.IRI
    if isinstance(term, BNode):
        return TermKind.BLANK_NODE
    if isinstance(term, Literal):
        return TermKind.LITERAL
    raise TypeError(f"Unsupported RDF term: {term!r} ({type(term).__name__})")


@dataclass(frozen=True)
class Statement:
    """A single (subject, predicate, object) fact, optionally in a named graph."""

    subject: Term
    predicate: URIRef
    object: Term
    graph: Optional[Term] = None    # None is the default graph

    def __post_init__(self):
        if term_kind(self.subject) == TermKind.LITERAL:
            raise TypeError(f"Statement subject must be an IRI or blank node, got literal {self.subject!r}")
        if term_kind(self.predicate) != TermKind.IRI:
            raise TypeError(f"Statement predicate must be an IRI, got {self.predicate!r}")
        term_kind(self.object)
        if self.graph is not None and term_kind(self.graph) == TermKind.LITERAL:
            raise TypeError(f"Statement graph must be an IRI or blank node, got literal {self.graph!r}")

    def as_triple(self) -> tuple:
        """Return the plain (s, p, o) tuple, dropping the graph label."""
        return (self.subject, self.predicate, self.object)

    def __str__(self) -> str:
        parts = [self.subject.n3(), self.predicate.n3(), self.object.n3()]
        if self.graph is not None:
            parts.append(self.graph.n3())
        return " ".join(parts) + " ."


class LabelMode(str, Enum):
    """How entity labels are rendered."""
    NORMAL = "normal"       # label predicates, then the IRI's last segment
    ADVANCED = "advanced"   # raw identifiers, no lookup


class MergeResult(BaseModel):
    """Outcome of folding an ontology into a dataset store."""

    model_config = ConfigDict(frozen=True)

    added_count: int = Field(..., description="Ontology statements selected for insertion")
    new_count: int = Field(..., description="Selected statements that were not already in the store")


class OntologyRecord(BaseModel):
    """Audit entry for one ontology merge within a session."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name of the ontology (usually its file name)")
    base_iri: str = Field(..., description="Base IRI the ontology was parsed against")
    merged_statement_count: int = Field(..., description="Number of statements selected by the merge filter")


class PropertyRow(BaseModel):
    """One row of the property view of an entity."""

    model_config = ConfigDict(frozen=True)

    predicate_label: str = Field(..., description="Display label of the predicate")
    predicate_iri: str = Field(..., description="Predicate IRI")
    object_label: str = Field(..., description="Label of an IRI object, or the literal/blank node value")
    object_value: str = Field(..., description="Raw object value (IRI string, literal lexical form or blank node id)")
    object_kind: TermKind = Field(..., description="Kind of the object term")
    object_language: Optional[str] = Field(None, description="Language tag of a literal object")
    object_datatype: Optional[str] = Field(None, description="Datatype IRI of a literal object")
    is_entity: bool = Field(..., description="Object is an IRI the UI can navigate to")
    is_predicate_navigable: bool = Field(..., description="Predicate is itself described in the store")
    predicate_comment: Optional[str] = Field(None, description="rdfs:comment of the predicate, if any")


class GraphNode(BaseModel):
    """A node of the graph projection."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    uri: str


class GraphEdge(BaseModel):
    """A directed, labelled edge of the graph projection."""

    model_config = ConfigDict(frozen=True)

    id: str
    source: str
    target: str
    label: str
    uri: str    # predicate IRI


class GraphProjection(BaseModel):
    """Node/edge view of the relationships among a fixed set of entities."""

    model_config = ConfigDict(frozen=True)

    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.nodes and not self.edges

    def to_elements(self) -> List[Dict[str, Any]]:
        """Render as a flat element list for graph renderers (nodes first, then edges)."""
        elements = [{"group": "nodes", "data": node.model_dump()} for node in self.nodes]
        elements.extend({"group": "edges", "data": edge.model_dump()} for edge in self.edges)
        return elements
