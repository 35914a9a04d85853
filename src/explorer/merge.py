"""
Ontology merge filter.

Only the part of an ontology that touches an IRI already used by the dataset
is folded in: a statement qualifies when its subject, predicate or object is a
referenced IRI. This is a single hop; statements linking two ontology-only
terms are never pulled in.
"""

import logging
from typing import FrozenSet, List, Optional

from rdflib import URIRef

from .domain import MergeResult, Statement
from .store import TripleStore

logger = logging.getLogger(__name__)


def referenced_iris(store: TripleStore) -> FrozenSet[URIRef]:
    """All IRIs appearing in any position of any statement in the store."""
    referenced = set()
    for statement in store:
        for term in statement.as_triple():
            if isinstance(term, URIRef):
                referenced.add(term)
    return frozenset(referenced)


def select_relevant(ontology_store: TripleStore, referenced: FrozenSet[URIRef]) -> List[Statement]:
    """Ontology statements with at least one term in the referenced set, in ontology order."""
    selected = []
    for statement in ontology_store:
        if (statement.predicate in referenced
                or (isinstance(statement.subject, URIRef) and statement.subject in referenced)
                or (isinstance(statement.object, URIRef) and statement.object in referenced)):
            selected.append(statement)
    return selected


def merge_ontology(base_store: TripleStore, ontology_store: TripleStore,
                   referenced: Optional[FrozenSet[URIRef]] = None) -> MergeResult:
    """Fold the relevant part of an ontology into the base store.

    Args:
        base_store: Store to extend; statements are only ever added
        ontology_store: Parsed ontology
        referenced: IRIs that make a statement relevant. Defaults to the IRIs
            currently used by base_store.

    Returns:
        MergeResult whose added_count is the number of statements selected,
        including ones the store already held
    """
    if referenced is None:
        referenced = referenced_iris(base_store)

    candidates = select_relevant(ontology_store, referenced)
    new_count = base_store.add_all(candidates)

    logger.debug(f"Merged ontology: {len(candidates)} of {len(ontology_store)} statements relevant, "
                f"{new_count} new")
    return MergeResult(added_count=len(candidates), new_count=new_count)
