"""
Graph projection of a store onto a fixed set of base entities.

Only statements whose subject and object are both base entities become edges,
so vocabulary introduced by ontology merges, object-only terms and literal
values never appear in the graph view.
"""

import logging
from typing import Callable, Iterable

from rdflib import URIRef
from rdflib.term import Identifier

from .domain import GraphEdge, GraphNode, GraphProjection, Term
from .store import TripleStore

logger = logging.getLogger(__name__)


def edge_id(subject: URIRef, predicate: URIRef, object: URIRef) -> str:
    return f"{subject}-{predicate}-{object}"


def project(store: TripleStore, base_entities: Iterable[URIRef],
            label_resolver: Callable[[Term], str]) -> GraphProjection:
    """Build the node/edge model for the graph view.

    Args:
        store: Store to read; never modified
        base_entities: Entities to show as nodes, in display order; plain
            strings are taken as IRIs
        label_resolver: Callable producing display labels for nodes and predicates

    Returns:
        GraphProjection with one node per distinct base entity and one edge per
        distinct (subject, predicate, object) between base entities
    """
    node_iris = {}
    for entity in base_entities:
        # plain strings are IRIs; rdflib terms are str subclasses too
        if isinstance(entity, str) and not isinstance(entity, Identifier):
            entity = URIRef(entity)
        if not isinstance(entity, URIRef):
            logger.warning(f"Skipping non-IRI base entity in graph projection: {entity!r}")
            continue
        if entity not in node_iris:
            node_iris[entity] = GraphNode(id=str(entity), label=label_resolver(entity), uri=str(entity))

    edges = []
    seen_edges = set()
    if node_iris:
        for statement in store:
            subject, predicate, object = statement.as_triple()
            if not isinstance(object, URIRef):
                continue
            if subject not in node_iris or object not in node_iris:
                continue

            identifier = edge_id(subject, predicate, object)
            # the same triple in several named graphs is a single edge
            if identifier in seen_edges:
                continue
            seen_edges.add(identifier)
            edges.append(GraphEdge(
                id=identifier,
                source=str(subject),
                target=str(object),
                label=label_resolver(predicate),
                uri=str(predicate)
            ))

    logger.debug(f"Projected {len(node_iris)} nodes and {len(edges)} edges")
    return GraphProjection(nodes=list(node_iris.values()), edges=edges)
