"""
In-memory triple store with pattern-match lookup.

Statements are kept in insertion order together with a dedup set and
per-position indexes. Pattern matching is the only query primitive; label
lookup, property listing, merging and projection are all built on repeated
`match` calls.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Optional, Set

from rdflib import Graph, Dataset, URIRef
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID

from .domain import Statement, Term

logger = logging.getLogger(__name__)


class MatchResult:
    """Restartable, lazily evaluated result of a pattern match.

    Every iteration re-runs the match against the store, yielding statements
    in insertion order.
    """

    def __init__(self, store: "TripleStore", subject: Optional[Term], predicate: Optional[URIRef],
                 object: Optional[Term], graph: Optional[Term]):
        self._store = store
        self._pattern = (subject, predicate, object, graph)

    def __iter__(self) -> Iterator[Statement]:
        return self._store._iter_matching(*self._pattern)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return self.first() is not None

    def first(self) -> Optional[Statement]:
        """Return the earliest matching statement, or None."""
        return next(iter(self), None)

    def objects(self) -> Iterator[Term]:
        return (statement.object for statement in self)

    def subjects(self) -> Iterator[Term]:
        return (statement.subject for statement in self)

    def __repr__(self) -> str:
        return f"MatchResult(pattern={self._pattern!r})"


class TripleStore:
    """Insertion-ordered set of statements answering wildcard pattern queries."""

    def __init__(self, statements: Optional[Iterable[Statement]] = None):
        self._statements: List[Statement] = []
        self._seen: Set[Statement] = set()

        # term -> ascending positions in self._statements
        self._by_subject: Dict[Term, List[int]] = defaultdict(list)
        self._by_predicate: Dict[Term, List[int]] = defaultdict(list)
        self._by_object: Dict[Term, List[int]] = defaultdict(list)
        self._by_graph: Dict[Optional[Term], List[int]] = defaultdict(list)

        if statements is not None:
            self.add_all(statements)

    @classmethod
    def from_triples(cls, triples: Iterable[tuple], graph: Optional[Term] = None) -> "TripleStore":
        """Build a store from (s, p, o) tuples, keeping their order.

        Tuples that do not form a valid statement (e.g. a literal subject from
        an N3 document) are skipped with a warning.
        """
        store = cls()
        for s, p, o in triples:
            store._add_parsed(s, p, o, graph)
        return store

    @classmethod
    def from_graph(cls, graph: Graph) -> "TripleStore":
        """Build a store from an rdflib graph, in the order rdflib iterates it.

        For a Dataset, each quad's context becomes the statement graph label and
        the default graph maps to None.
        """
        if not isinstance(graph, Dataset):
            return cls.from_triples(graph)

        store = cls()
        for s, p, o, ctx in graph.quads((None, None, None, None)):
            graph_id = getattr(ctx, "identifier", ctx)
            if graph_id == DATASET_DEFAULT_GRAPH_ID:
                graph_id = None
            store._add_parsed(s, p, o, graph_id)
        logger.debug(f"Built store with {len(store)} statements from {type(graph).__name__}")
        return store

    def add(self, statement: Statement) -> bool:
        """Insert a statement unless an equal one is already present.

        Returns:
            True if the statement was new
        """
        if statement in self._seen:
            return False

        position = len(self._statements)
        self._statements.append(statement)
        self._seen.add(statement)
        self._by_subject[statement.subject].append(position)
        self._by_predicate[statement.predicate].append(position)
        self._by_object[statement.object].append(position)
        self._by_graph[statement.graph].append(position)
        return True

    def add_all(self, statements: Iterable[Statement]) -> int:
        """Add many statements, returning how many were new."""
        return sum(1 for statement in statements if self.add(statement))

    def match(self, subject: Optional[Term] = None, predicate: Optional[URIRef] = None,
              object: Optional[Term] = None, graph: Optional[Term] = None) -> MatchResult:
        """Find statements matching a pattern; None fields are wildcards."""
        return MatchResult(self, subject, predicate, object, graph)

    def all_statements(self) -> MatchResult:
        return self.match()

    def subjects(self) -> List[Term]:
        """Distinct subjects in first-seen order."""
        return list(self._by_subject.keys())

    def to_graph(self) -> Graph:
        """Export the triples into a fresh rdflib Graph (graph labels are dropped)."""
        graph = Graph()
        for statement in self._statements:
            graph.add(statement.as_triple())
        return graph

    def copy(self) -> "TripleStore":
        return TripleStore(self._statements)

    def _add_parsed(self, s, p, o, graph) -> bool:
        try:
            statement = Statement(s, p, o, graph)
        except TypeError as e:
            logger.warning(f"Skipping triple that is not a valid statement: {e}")
            return False
        return self.add(statement)

    def _iter_matching(self, subject, predicate, object, graph) -> Iterator[Statement]:
        candidates = self._candidate_positions(subject, predicate, object, graph)
        if candidates is None:
            # full scan over the statements present when iteration starts
            candidates = range(len(self._statements))

        for position in candidates:
            statement = self._statements[position]
            if subject is not None and statement.subject != subject:
                continue
            if predicate is not None and statement.predicate != predicate:
                continue
            if object is not None and statement.object != object:
                continue
            if graph is not None and statement.graph != graph:
                continue
            yield statement

    def _candidate_positions(self, subject, predicate, object, graph) -> Optional[List[int]]:
        """Pick the shortest position list among the bound fields, or None if all are wildcards."""
        lists = []
        for term, index in ((subject, self._by_subject), (predicate, self._by_predicate),
                            (object, self._by_object), (graph, self._by_graph)):
            if term is not None:
                # .get avoids growing the defaultdict on lookups
                lists.append(index.get(term, []))
        if not lists:
            return None
        return min(lists, key=len)

    def __len__(self) -> int:
        return len(self._statements)

    def __iter__(self) -> Iterator[Statement]:
        return iter(list(self._statements))

    def __contains__(self, statement: object) -> bool:
        return statement in self._seen

    def __repr__(self) -> str:
        return f"TripleStore({len(self)} statements)"
