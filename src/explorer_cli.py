#!/usr/bin/env python3
"""
Interactive CLI for the RDF Explorer

This CLI lets you browse an RDF dataset from the terminal: list its entities,
inspect their properties, merge ontologies and print the graph projection.

Usage:
    cd src
    python explorer_cli.py [dataset] [--ontology FILE ...] [--mode normal|advanced]

Commands:
    load <file>                  - Load a dataset (replaces the current one)
    ontology <file> [name]       - Merge the relevant part of an ontology
    entities                     - List navigable entities
    show <iri|#n>                - Show properties of an entity (by IRI or list number)
    graph [json]                 - Print the graph projection of the dataset entities
    mode [normal|advanced]       - Show or switch label mode
    ontologies                   - List merged ontologies
    stats                        - Show session statistics
    config                       - Show current configuration
    help                         - Show this help message
    exit / quit                  - Exit the CLI

Supported files:
    .ttl (Turtle), .nt (N-Triples), .json/.jsonld (JSON-LD), .n3 (N3),
    anything else is read as RDF/XML

Short commands:
    ld, ont, ls, s, g, m, st, cfg, h, q
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

# Add the current directory to the path
sys.path.append(str(Path(__file__).parent))

try:
    from explorer import ExplorerService
    from explorer.config import ExplorerConfig, load_config
    from explorer.domain import LabelMode
    from explorer.loader import RdfLoadError
except ImportError as e:
    print(f"Error importing modules: {e}")
    print("Make sure you're running this from the src directory")
    sys.exit(1)


class ExplorerCLI:
    """Interactive CLI for the RDF Explorer."""

    def __init__(self, config: Optional[ExplorerConfig] = None):
        self.config = config if config is not None else load_config()
        self.service = ExplorerService(self.config)

        # Entity list as last printed, for "show #n"
        self.last_entities = []

        self.commands = {
            'load': self.cmd_load,
            'ld': self.cmd_load,
            'ontology': self.cmd_ontology,
            'ont': self.cmd_ontology,
            'entities': self.cmd_entities,
            'ls': self.cmd_entities,
            'show': self.cmd_show,
            's': self.cmd_show,
            'graph': self.cmd_graph,
            'g': self.cmd_graph,
            'mode': self.cmd_mode,
            'm': self.cmd_mode,
            'ontologies': self.cmd_ontologies,
            'stats': self.cmd_stats,
            'st': self.cmd_stats,
            'config': self.cmd_config,
            'cfg': self.cmd_config,
            'help': self.cmd_help,
            'h': self.cmd_help,
            '?': self.cmd_help,
            'exit': self.cmd_exit,
            'quit': self.cmd_exit,
            'q': self.cmd_exit,
        }

    def execute(self, command_line: str) -> bool:
        """Run one command line. Returns False if the command is unknown."""
        parts = command_line.strip().split()
        if not parts:
            return True

        command = parts[0].lower()
        args = parts[1:]
        if command not in self.commands:
            print(f"❌ Unknown command: {command}")
            print("Type 'help' for available commands")
            return False

        self.commands[command](args)
        return True

    def run(self):
        """Run the interactive CLI."""
        print("\n" + "=" * 60)
        print("🔎 RDF EXPLORER CLI")
        print("=" * 60)
        print("Type 'help' for commands or 'exit' to quit")
        print("")

        while True:
            try:
                command_line = input("rdf> ").strip()
                if not command_line:
                    continue
                self.execute(command_line)
            except KeyboardInterrupt:
                print("\n👋 Goodbye!")
                break
            except EOFError:
                print("\n👋 Goodbye!")
                break
            except Exception as e:
                print(f"❌ Error: {e}")

    def cmd_load(self, args: List[str]):
        """Load a dataset file."""
        if not args:
            print("Usage: load <file>")
            return

        try:
            store = self.service.load_dataset_file(args[0])
        except RdfLoadError as e:
            print(f"❌ {e}")
            return

        self.last_entities = []
        print(f"✅ Loaded {self.service.dataset_name}: {len(store)} statements, "
              f"{len(self.service.base_entities)} entities")

    def cmd_ontology(self, args: List[str]):
        """Merge an ontology file into the loaded dataset."""
        if not args:
            print("Usage: ontology <file> [name]")
            return
        if not self.service.is_loaded:
            print("❌ Load a dataset first")
            return

        name = " ".join(args[1:]) or None
        try:
            record = self.service.load_ontology_file(args[0], name=name)
        except RdfLoadError as e:
            print(f"❌ {e}")
            return

        print(f"✅ Merged {record.name}: {record.merged_statement_count} statements")

    def cmd_entities(self, args: List[str]):
        """List entities with their labels."""
        self.last_entities = self.service.entities()
        if not self.last_entities:
            print("No entities found")
            return

        print(f"📋 Entities ({len(self.last_entities)})")
        for number, entity in enumerate(self.last_entities[:self.config.max_rows], 1):
            print(f"  #{number:<4} {self.service.label(entity)}  <{entity}>")
        if len(self.last_entities) > self.config.max_rows:
            print(f"  ... {len(self.last_entities) - self.config.max_rows} more")

    def cmd_show(self, args: List[str]):
        """Show the properties of an entity."""
        if not args:
            print("Usage: show <iri|#n>")
            return

        entity = self._resolve_entity_arg(args[0])
        if entity is None:
            return

        print(f"\n📄 {self.service.label(entity)}")
        print(f"   <{entity}>")
        comment = self.service.comment(entity)
        if comment:
            print(f"   💬 {comment}")
        print("-" * 60)

        rows = self.service.properties(entity)
        if not rows:
            print("No properties found for this entity")
            return

        for row in rows[:self.config.max_rows]:
            marker = "→" if row.is_entity else " "
            print(f"  {row.predicate_label:<30} {marker} {row.object_label}")
        if len(rows) > self.config.max_rows:
            print(f"  ... {len(rows) - self.config.max_rows} more")

    def cmd_graph(self, args: List[str]):
        """Print the graph projection."""
        projection = self.service.graph()
        if args and args[0].lower() == 'json':
            print(json.dumps(projection.to_elements(), indent=2, ensure_ascii=False))
            return

        print(f"🕸️  Displaying {len(projection.nodes)} entities from base RDF (excluding ontology entities)")
        labels = {node.id: node.label for node in projection.nodes}
        for edge in projection.edges[:self.config.max_rows]:
            print(f"  {labels[edge.source]} --{edge.label}--> {labels[edge.target]}")
        if len(projection.edges) > self.config.max_rows:
            print(f"  ... {len(projection.edges) - self.config.max_rows} more edges")

    def cmd_mode(self, args: List[str]):
        """Show or change the label mode."""
        if not args:
            print(f"Label mode: {self.service.resolver.mode.value}")
            return
        try:
            mode = self.service.set_mode(args[0].lower())
        except ValueError:
            print(f"❌ Unknown mode: {args[0]} (use normal or advanced)")
            return
        print(f"✅ Label mode: {mode.value}")

    def cmd_ontologies(self, args: List[str]):
        """List merged ontologies."""
        records = self.service.ontologies()
        if not records:
            print("No ontologies merged")
            return
        for record in records:
            print(f"  {record.name}: {record.merged_statement_count} statements (base {record.base_iri})")

    def cmd_stats(self, args: List[str]):
        """Show session statistics."""
        stats = self.service.stats()
        print("📊 Session Statistics")
        print("=" * 40)
        for key, value in stats.items():
            print(f"   {key}: {value}")

    def cmd_config(self, args: List[str]):
        """Show current configuration."""
        print("\n⚙️  Current Configuration")
        print("=" * 40)
        for key, value in self.config.model_dump().items():
            print(f"{key}: {value}")

    def cmd_help(self, args: List[str]):
        """Show help information."""
        print(__doc__)

    def cmd_exit(self, args: List[str]):
        """Exit the CLI."""
        print("👋 Goodbye!")
        sys.exit(0)

    def _resolve_entity_arg(self, arg: str):
        if arg.startswith('#'):
            try:
                number = int(arg[1:])
            except ValueError:
                print(f"❌ Invalid entity number: {arg}")
                return None
            if not self.last_entities:
                self.last_entities = self.service.entities()
            if number < 1 or number > len(self.last_entities):
                print(f"❌ No entity #{number}")
                return None
            return self.last_entities[number - 1]

        return self.service.resolve_entity(arg.strip('<>'))


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Interactive RDF explorer")
    parser.add_argument("dataset", nargs="?", help="RDF file to load on start")
    parser.add_argument("--ontology", action="append", default=[], help="Ontology file to merge (repeatable)")
    parser.add_argument("--mode", choices=["normal", "advanced"], help="Label mode")
    parser.add_argument("--env-file", help="Path to a .env file with RDF_EXPLORER_* settings")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.env_file)
    except ValidationError as e:
        parser.error(f"invalid configuration: {e}")
    if args.mode:
        config = config.model_copy(update={"label_mode": LabelMode(args.mode)})
    logging.basicConfig(level=config.log_level,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    cli = ExplorerCLI(config)
    if args.dataset:
        cli.cmd_load([args.dataset])
    for ontology in args.ontology:
        cli.cmd_ontology([ontology])
    cli.run()


if __name__ == "__main__":
    main()
