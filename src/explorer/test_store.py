"""
Unit test for the triple store.

HOW TO RUN:
The virtual environment .venv should be activated before running the tests.

From the src directory, run:
    python -m explorer.test_store

Or with pytest from the project root:
    pytest src/explorer/test_store.py
"""

from rdflib import BNode, Dataset, Graph, Literal, Namespace, RDFS, URIRef, XSD

from .domain import Statement
from .store import TripleStore

EX = Namespace("http://ex.org/")


def _sample_store() -> TripleStore:
    store = TripleStore()
    store.add(Statement(EX.a, EX.knows, EX.b))
    store.add(Statement(EX.a, RDFS.label, Literal("A")))
    store.add(Statement(EX.b, EX.knows, EX.c))
    store.add(Statement(EX.b, RDFS.label, Literal("B", lang="en")))
    store.add(Statement(EX.c, EX.age, Literal("42", datatype=XSD.integer)))
    return store


def test_add_is_idempotent():
    """Adding the same statement twice keeps one copy."""
    print("Testing idempotent add...")

    store = TripleStore()
    statement = Statement(EX.a, EX.knows, EX.b)

    assert store.add(statement) is True
    assert store.add(Statement(EX.a, EX.knows, EX.b)) is False
    assert len(store) == 1
    assert list(store.match()) == [statement]

    print("✓ Idempotent add working correctly")


def test_graph_label_is_part_of_identity():
    """The same triple in two graphs is two statements."""
    print("Testing graph label identity...")

    store = TripleStore()
    assert store.add(Statement(EX.a, EX.knows, EX.b))
    assert store.add(Statement(EX.a, EX.knows, EX.b, EX.g1))
    assert not store.add(Statement(EX.a, EX.knows, EX.b, EX.g1))
    assert len(store) == 2

    assert [s.graph for s in store.match(graph=EX.g1)] == [EX.g1]
    # None is a wildcard for the graph position too
    assert len(store.match(EX.a, EX.knows, EX.b)) == 2

    print("✓ Graph label identity working correctly")


def test_match_wildcards_and_order():
    """Wildcard patterns return statements in insertion order."""
    print("Testing pattern matching...")

    store = _sample_store()

    assert len(store.match()) == 5
    assert [s.object for s in store.match(EX.a)] == [EX.b, Literal("A")]
    assert [s.subject for s in store.match(None, EX.knows)] == [EX.a, EX.b]
    assert [s.subject for s in store.match(None, None, EX.c)] == [EX.b]
    assert list(store.match(EX.a, EX.knows, EX.c)) == []
    assert list(store.match(EX.nobody)) == []

    print("✓ Pattern matching working correctly")


def test_every_statement_matches_itself_once():
    """Fully bound patterns find each stored statement exactly once."""
    print("Testing fully bound matches...")

    store = _sample_store()
    for statement in store:
        found = list(store.match(statement.subject, statement.predicate, statement.object))
        assert found.count(statement) == 1

    print("✓ Fully bound matches working correctly")


def test_literal_matching_respects_language_and_datatype():
    """Literals match on value, language and datatype."""
    print("Testing literal matching...")

    store = _sample_store()

    assert len(store.match(EX.b, RDFS.label, Literal("B", lang="en"))) == 1
    assert len(store.match(EX.b, RDFS.label, Literal("B"))) == 0
    assert len(store.match(EX.c, EX.age, Literal("42", datatype=XSD.integer))) == 1
    assert len(store.match(EX.c, EX.age, Literal("42"))) == 0
    # an IRI and a literal with the same text are different terms
    assert len(store.match(None, None, Literal(str(EX.b)))) == 0

    print("✓ Literal matching working correctly")


def test_match_result_is_restartable_and_lazy():
    """A match result can be iterated more than once and sees later additions."""
    print("Testing restartable match results...")

    store = _sample_store()
    result = store.match(None, EX.knows)

    assert list(result) == list(result)
    assert result.first() == Statement(EX.a, EX.knows, EX.b)
    assert bool(result)
    assert not store.match(EX.c, EX.knows)

    store.add(Statement(EX.c, EX.knows, EX.a))
    assert len(result) == 3

    print("✓ Restartable match results working correctly")


def test_match_does_not_mutate():
    """Querying unknown terms leaves the store untouched."""
    print("Testing that queries do not mutate the store...")

    store = _sample_store()
    before = list(store)
    list(store.match(EX.unknown, EX.unknown, EX.unknown, EX.unknown))

    assert list(store) == before
    assert EX.unknown not in store.subjects()

    print("✓ Queries leave the store unchanged")


def test_blank_nodes():
    """Blank nodes are matched by identifier."""
    print("Testing blank nodes...")

    store = TripleStore()
    node = BNode("n1")
    store.add(Statement(node, RDFS.label, Literal("anonymous")))
    store.add(Statement(EX.a, EX.has, node))

    assert len(store.match(BNode("n1"))) == 1
    assert store.match(None, EX.has).first().object == node
    assert store.subjects() == [node, EX.a]

    print("✓ Blank nodes working correctly")


def test_from_graph_and_to_graph():
    """Stores can be built from and exported to rdflib graphs."""
    print("Testing rdflib graph conversion...")

    graph = Graph()
    graph.add((EX.a, EX.knows, EX.b))
    graph.add((EX.a, RDFS.label, Literal("A")))

    store = TripleStore.from_graph(graph)
    assert len(store) == 2
    assert Statement(EX.a, EX.knows, EX.b) in store

    exported = store.to_graph()
    assert len(exported) == 2
    assert (EX.a, RDFS.label, Literal("A")) in exported

    print("✓ rdflib graph conversion working correctly")


def test_from_dataset_keeps_graph_labels():
    """Named graphs of a Dataset become statement graph labels."""
    print("Testing Dataset conversion...")

    dataset = Dataset()
    dataset.add((EX.a, EX.knows, EX.b))
    dataset.graph(EX.g1).add((EX.b, EX.knows, EX.c))

    store = TripleStore.from_graph(dataset)
    assert Statement(EX.a, EX.knows, EX.b) in store
    assert Statement(EX.b, EX.knows, EX.c, EX.g1) in store
    assert len(store) == 2

    print("✓ Dataset conversion working correctly")


def test_copy_is_independent():
    """Copies do not share state."""
    print("Testing store copy...")

    store = _sample_store()
    clone = store.copy()
    clone.add(Statement(EX.d, EX.knows, EX.a))

    assert len(clone) == len(store) + 1
    assert Statement(EX.d, EX.knows, EX.a) not in store

    print("✓ Store copy working correctly")


def run_all_tests():
    """Run all test functions."""
    print("=" * 50)
    print("Running TripleStore Tests")
    print("=" * 50)

    test_functions = [
        test_add_is_idempotent,
        test_graph_label_is_part_of_identity,
        test_match_wildcards_and_order,
        test_every_statement_matches_itself_once,
        test_literal_matching_respects_language_and_datatype,
        test_match_result_is_restartable_and_lazy,
        test_match_does_not_mutate,
        test_blank_nodes,
        test_from_graph_and_to_graph,
        test_from_dataset_keeps_graph_labels,
        test_copy_is_independent,
    ]

    passed = 0
    failed = 0

    for test_func in test_functions:
        try:
            test_func()
            passed += 1
        except Exception as e:
            print(f"✗ {test_func.__name__} FAILED: {e}")
            failed += 1

    print("=" * 50)
    print(f"Test Results: {passed} passed, {failed} failed")
    print("=" * 50)

    return failed == 0


if __name__ == "__main__":
    exit(0 if run_all_tests() else 1)
