"""
Entity list and property rows for the browsing UI.
"""

from typing import List

from rdflib import URIRef, Literal

from .domain import PropertyRow, Term, term_kind
from .labels import LabelResolver
from .store import TripleStore


def list_entities(store: TripleStore) -> List[URIRef]:
    """IRI subjects in first-seen order. Blank nodes and object-only terms are excluded."""
    return [subject for subject in store.subjects() if isinstance(subject, URIRef)]


def is_described(store: TripleStore, term: Term) -> bool:
    """True if the term is the subject of at least one statement."""
    return store.match(term, None, None).first() is not None


def property_rows(store: TripleStore, resolver: LabelResolver, subject: Term) -> List[PropertyRow]:
    """One row per statement about the subject, in store order."""
    rows = []
    for statement in store.match(subject, None, None):
        predicate = statement.predicate
        obj = statement.object

        language = None
        datatype = None
        if isinstance(obj, Literal):
            object_label = str(obj)
            language = obj.language
            datatype = str(obj.datatype) if obj.datatype is not None else None
        else:
            object_label = resolver.label(obj)

        rows.append(PropertyRow(
            predicate_label=resolver.label(predicate),
            predicate_iri=str(predicate),
            object_label=object_label,
            object_value=str(obj),
            object_kind=term_kind(obj),
            object_language=language,
            object_datatype=datatype,
            is_entity=isinstance(obj, URIRef),
            is_predicate_navigable=is_described(store, predicate),
            predicate_comment=resolver.comment(predicate)
        ))
    return rows
