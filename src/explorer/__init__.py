"""
RDF Explorer Module

This module provides an in-memory view over an RDF dataset for browsing:
statement lookup, entity labels, selective ontology merging and a node/edge
projection for graph visualisation.

Public Interface:
- ExplorerService: High-level service for all explorer operations

Private Components:
- TripleStore: Insertion-ordered statement store with pattern matching
- LabelResolver, merge filter, graph projection, loader
- Domain models: Statement, PropertyRow, GraphProjection, etc.
"""

from .service import ExplorerService

__all__ = ["ExplorerService"]
