"""
Loading RDF text into a TripleStore.

Parsing is delegated to rdflib; the syntax is chosen from the file extension
with a fixed table, falling back to RDF/XML.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, Tuple, Union

from rdflib import Graph
from rdflib.plugins.stores.memory import Memory

from .store import TripleStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_IRI = "http://example.org/base"
DEFAULT_FORMAT = "xml"

FORMAT_BY_EXTENSION = {
    "ttl": "turtle",
    "nt": "nt",
    "json": "json-ld",
    "jsonld": "json-ld",
    "n3": "n3",
}

SUPPORTED_EXTENSIONS = (".rdf", ".ttl", ".nt", ".jsonld", ".n3", ".xml", ".json")


class RdfLoadError(RuntimeError):
    """Raised when RDF content cannot be read or parsed."""

    def __init__(self, filename: str, rdf_format: str, reason: str):
        super().__init__(f"Failed to parse {filename} as {rdf_format}: {reason}")
        self.filename = filename
        self.rdf_format = rdf_format


class _ParseOrderMemory(Memory):
    """Memory store that also records the order in which triples are added.

    Every parser ends up calling the store's add, including the ones that
    write through a wrapper graph (JSON-LD and N3 do), so the record is
    complete for asserted triples. Quoted (formula) triples are not recorded.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.parse_order = []

    def add(self, triple, context, quoted=False):
        if not quoted:
            self.parse_order.append(triple)
        return super().add(triple, context, quoted)


def _triples_in_parse_order(graph: Graph) -> Iterator[Tuple]:
    """Triples of a parsed graph in the order the parser produced them.

    Anything the store did not record is appended in rdflib's iteration order.
    """
    seen = set()
    for triple in getattr(graph.store, "parse_order", []):
        if triple not in seen and triple in graph:
            seen.add(triple)
            yield triple
    for triple in graph:
        if triple not in seen:
            yield triple


def format_for_filename(filename: str) -> str:
    """rdflib format name for a file name, based on the text after the last dot."""
    if "." not in filename:
        return DEFAULT_FORMAT
    extension = filename.rsplit(".", 1)[-1].lower()
    return FORMAT_BY_EXTENSION.get(extension, DEFAULT_FORMAT)


def parse_graph(content: str, filename: str, base_iri: str = DEFAULT_BASE_IRI) -> Graph:
    """Parse RDF text into an rdflib Graph.

    Raises:
        RdfLoadError: If rdflib rejects the content
    """
    rdf_format = format_for_filename(filename)
    graph = Graph(store=_ParseOrderMemory())
    try:
        graph.parse(data=content, format=rdf_format, publicID=base_iri)
    except Exception as e:
        raise RdfLoadError(filename, rdf_format, str(e)) from e

    logger.info(f"Parsed {len(graph)} triples from {filename} ({rdf_format})")
    return graph


def load_statements(content: str, filename: str, base_iri: str = DEFAULT_BASE_IRI) -> TripleStore:
    """Parse RDF text into a new TripleStore, keeping the document order of statements."""
    graph = parse_graph(content, filename, base_iri)
    return TripleStore.from_triples(_triples_in_parse_order(graph))


def load_file(path: Union[str, Path], base_iri: str = DEFAULT_BASE_IRI) -> TripleStore:
    """Read a file (UTF-8) and parse it into a new TripleStore.

    Raises:
        RdfLoadError: If the file is unreadable or not valid UTF-8 RDF
    """
    filename = os.path.basename(str(path))
    try:
        with open(path, "r", encoding="utf-8") as file:
            content = file.read()
    except (OSError, UnicodeDecodeError) as e:
        raise RdfLoadError(filename, format_for_filename(filename), str(e)) from e

    return load_statements(content, filename, base_iri)
