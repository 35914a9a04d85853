"""
High-level explorer service providing the public interface for browsing an RDF dataset.

This is the only public interface into the explorer module. It owns the
session's store, the entities captured at dataset load time, the current label
predicates and the ontology audit list.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Union

from rdflib import URIRef

from .config import ExplorerConfig
from .domain import GraphProjection, LabelMode, OntologyRecord, PropertyRow
from .labels import LabelResolver
from .loader import load_file, load_statements
from .merge import merge_ontology, referenced_iris
from .projection import project
from .store import TripleStore
from .views import list_entities, property_rows

logger = logging.getLogger(__name__)


class ExplorerService:
    """Session over one loaded dataset and the ontologies merged into it."""

    def __init__(self, config: Optional[ExplorerConfig] = None):
        """Initialize an empty session.

        Args:
            config: Optional configuration. If None, defaults are used.
        """
        self.config = config if config is not None else ExplorerConfig()
        self.store = TripleStore()
        self.dataset_name: Optional[str] = None
        self.base_entities: List[URIRef] = []
        self.resolver = LabelResolver(self.store, mode=self.config.label_mode)

        self._referenced: FrozenSet[URIRef] = frozenset()
        self._ontologies: List[OntologyRecord] = []

    @property
    def is_loaded(self) -> bool:
        return self.dataset_name is not None

    def load_dataset(self, content: str, filename: str) -> TripleStore:
        """Replace the session with a freshly parsed dataset.

        Raises:
            RdfLoadError: If the content cannot be parsed
        """
        store = load_statements(content, filename, self.config.base_iri)
        self._install_dataset(store, filename)
        return store

    def load_dataset_file(self, path: Union[str, Path]) -> TripleStore:
        store = load_file(path, self.config.base_iri)
        self._install_dataset(store, os.path.basename(str(path)))
        return store

    def load_ontology(self, content: str, filename: str, name: Optional[str] = None) -> OntologyRecord:
        """Parse an ontology and merge its relevant statements into the dataset.

        Raises:
            ValueError: If no dataset is loaded
            RdfLoadError: If the content cannot be parsed
        """
        if not self.is_loaded:
            raise ValueError("Load a dataset before merging an ontology")
        ontology_store = load_statements(content, filename, self.config.base_iri)
        return self._merge(ontology_store, name or filename)

    def load_ontology_file(self, path: Union[str, Path], name: Optional[str] = None) -> OntologyRecord:
        if not self.is_loaded:
            raise ValueError("Load a dataset before merging an ontology")
        ontology_store = load_file(path, self.config.base_iri)
        return self._merge(ontology_store, name or os.path.basename(str(path)))

    def entities(self) -> List[URIRef]:
        """Navigable entities of the current store (IRI subjects, first-seen order)."""
        return list_entities(self.store)

    def properties(self, entity: Union[str, URIRef]) -> List[PropertyRow]:
        return property_rows(self.store, self.resolver, URIRef(entity))

    def label(self, entity: Union[str, URIRef]) -> str:
        return self.resolver.label(URIRef(entity))

    def comment(self, entity: Union[str, URIRef]) -> Optional[str]:
        return self.resolver.comment(URIRef(entity))

    def graph(self) -> GraphProjection:
        """Graph view of the relationships among the entities loaded with the dataset."""
        return project(self.store, self.base_entities, self.resolver)

    def ontologies(self) -> List[OntologyRecord]:
        return list(self._ontologies)

    def set_mode(self, mode: Union[str, LabelMode]) -> LabelMode:
        """Switch label rendering mode.

        Raises:
            ValueError: If the mode name is unknown
        """
        self.resolver.mode = LabelMode(mode)
        return self.resolver.mode

    def resolve_entity(self, requested: Optional[str] = None) -> Optional[URIRef]:
        """Entity to select initially: the requested IRI if given, else the first entity."""
        if requested:
            return URIRef(requested)
        entities = self.entities()
        return entities[0] if entities else None

    def stats(self) -> Dict[str, Any]:
        return {
            "dataset": self.dataset_name,
            "statements": len(self.store),
            "entities": len(self.entities()),
            "base_entities": len(self.base_entities),
            "label_predicates": [str(p) for p in self.resolver.predicates],
            "ontologies": len(self._ontologies),
            "label_mode": self.resolver.mode.value,
        }

    def _install_dataset(self, store: TripleStore, name: str):
        self.store = store
        self.dataset_name = name
        self.base_entities = list_entities(store)
        self._referenced = referenced_iris(store)
        self._ontologies = []

        mode = self.resolver.mode
        self.resolver = LabelResolver(store, mode=mode)
        logger.info(f"Loaded dataset {name}: {len(store)} statements, {len(self.base_entities)} entities")

    def _merge(self, ontology_store: TripleStore, name: str) -> OntologyRecord:
        # Relevance is judged against the dataset as loaded, so merge order does not matter.
        result = merge_ontology(self.store, ontology_store, self._referenced)
        self.resolver.refresh()

        record = OntologyRecord(name=name, base_iri=self.config.base_iri,
                                merged_statement_count=result.added_count)
        self._ontologies.append(record)
        logger.info(f"Merged ontology {name}: {result.added_count} statements selected, {result.new_count} new")
        return record
