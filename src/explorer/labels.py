"""
Entity label and annotation resolution.

The set of label predicates is a value computed from the store by
`compute_label_predicates`; callers recompute it after every load or merge.
"""

import logging
import re
from typing import Iterable, Iterator, Optional

from rdflib import RDFS, URIRef, Literal

from .domain import LabelMode, Term
from .store import TripleStore

logger = logging.getLogger(__name__)

_SEGMENT_SEPARATORS = re.compile(r"[/#]")


class LabelPredicateSet:
    """Ordered, immutable set of predicates that yield human-readable labels.

    rdfs:label is always present and always first.
    """

    def __init__(self, predicates: Iterable[URIRef] = ()):
        ordered = [RDFS.label]
        for predicate in predicates:
            if predicate not in ordered:
                ordered.append(predicate)
        self._predicates = tuple(ordered)

    def __iter__(self) -> Iterator[URIRef]:
        return iter(self._predicates)

    def __contains__(self, predicate: object) -> bool:
        return predicate in self._predicates

    def __len__(self) -> int:
        return len(self._predicates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LabelPredicateSet):
            return NotImplemented
        return set(self._predicates) == set(other._predicates)

    def __hash__(self) -> int:
        return hash(frozenset(self._predicates))

    def __repr__(self) -> str:
        return f"LabelPredicateSet({[str(p) for p in self._predicates]})"


def compute_label_predicates(store: TripleStore) -> LabelPredicateSet:
    """Collect rdfs:label plus every IRI declared rdfs:subPropertyOf rdfs:label."""
    discovered = []
    for statement in store.match(None, RDFS.subPropertyOf, RDFS.label):
        if isinstance(statement.subject, URIRef):
            discovered.append(statement.subject)
        else:
            logger.warning(f"Ignoring non-IRI sub-property of rdfs:label: {statement.subject!r}")

    predicates = LabelPredicateSet(discovered)
    logger.debug(f"Computed {len(predicates)} label predicates")
    return predicates


def local_name(iri: str) -> str:
    """Last non-empty segment of an IRI split on '/' or '#', or the IRI itself."""
    segments = [segment for segment in _SEGMENT_SEPARATORS.split(iri) if segment]
    return segments[-1] if segments else iri


def label_of(store: TripleStore, predicates: LabelPredicateSet, entity: Term,
             mode: LabelMode = LabelMode.NORMAL) -> str:
    """Display label of a term.

    Advanced mode returns the raw identifier. Otherwise the first label
    predicate (in set order) with a statement about the entity wins, using the
    first such statement in store order; without one, the IRI's last segment
    is used. Never fails.
    """
    if mode == LabelMode.ADVANCED:
        return str(entity)

    if isinstance(entity, Literal):
        return str(entity)

    for predicate in predicates:
        match = store.match(entity, predicate, None).first()
        if match is not None:
            return str(match.object)

    if isinstance(entity, URIRef):
        return local_name(str(entity))
    return str(entity)


def comment_of(store: TripleStore, entity: Term) -> Optional[str]:
    """First rdfs:comment of the entity, if any."""
    match = store.match(entity, RDFS.comment, None).first()
    return str(match.object) if match is not None else None


class LabelResolver:
    """Callable label lookup bound to a store, a predicate set and a mode.

    Holds a read-only reference to the store. Call `refresh()` after the store
    changes to recompute the label predicates.
    """

    def __init__(self, store: TripleStore, predicates: Optional[LabelPredicateSet] = None,
                 mode: LabelMode = LabelMode.NORMAL):
        self.store = store
        self.predicates = predicates if predicates is not None else compute_label_predicates(store)
        self.mode = mode

    def refresh(self) -> LabelPredicateSet:
        self.predicates = compute_label_predicates(self.store)
        return self.predicates

    def label(self, entity: Term) -> str:
        return label_of(self.store, self.predicates, entity, self.mode)

    def comment(self, entity: Term) -> Optional[str]:
        return comment_of(self.store, entity)

    def __call__(self, entity: Term) -> str:
        return self.label(entity)
