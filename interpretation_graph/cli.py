"""
Interpretation Graph CLI
========================

Renders a semantics result (JSON, as emitted by the model server) to DOT.

COMMANDS:
- render:    Print DOT source for a semantics file
- relations: List relations with their effective visibility

USAGE:
    python -m interpretation_graph render model.json --visibility knows=all
    python -m interpretation_graph relations model.json
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from .config import RenderConfig
from .contracts.base import ContractViolation, Visibility
from .contracts.semantics import SemanticModel
from .contracts.wire import parse_semantics
from .state.policy import VisibilityPolicy, is_visibility_allowed
from .visualization.dot_source import render_graph


logger = logging.getLogger(__name__)


def load_model(path: str) -> SemanticModel:
    if path == "-":
        return parse_semantics(sys.stdin.read())
    with open(path, "rb") as handle:
        return parse_semantics(handle.read())


def build_policy(args: argparse.Namespace, model: SemanticModel) -> VisibilityPolicy:
    """Default visibilities, then NAME=LEVEL overrides in argument order."""
    policy = VisibilityPolicy.from_model(
        model,
        show_non_existent=args.show_non_existent,
        scopes=args.scopes,
        abbreviate=not args.no_abbreviate,
    )
    for override in args.visibility:
        name, _, level = override.partition("=")
        relation = model.relation(name)
        if relation is None:
            raise ValueError(f"Unknown relation {name!r} in --visibility {override!r}")
        policy = policy.with_visibility(relation, Visibility.parse(level))
    return policy


def cmd_render(args: argparse.Namespace) -> int:
    model = load_model(args.semantics)
    policy = build_policy(args, model)
    source = render_graph(model, policy, RenderConfig.from_env())
    print(source.text)
    if args.line_count:
        print(f"// {source.line_count} lines", file=sys.stderr)
    return 0


def cmd_relations(args: argparse.Namespace) -> int:
    model = load_model(args.semantics)
    policy = build_policy(args, model)
    for relation in model.relations:
        allowed = [
            level.value for level in Visibility
            if is_visibility_allowed(relation, level)
        ]
        print(
            f"{relation.name}\t{relation.arity}\t"
            f"{policy.get_visibility(relation.name).value}\t{'/'.join(allowed)}"
        )
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="interpretation_graph",
        description="Render partial interpretations as Graphviz DOT",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    def add_common(subparser: argparse.ArgumentParser):
        subparser.add_argument("semantics", help="Semantics JSON file, or - for stdin")
        subparser.add_argument(
            "--visibility", action="append", default=[], metavar="NAME=LEVEL",
            help="Override a relation's visibility (none, must, all)",
        )
        subparser.add_argument(
            "--show-non-existent", action="store_true",
            help="Also render nodes that do not exist",
        )
        subparser.add_argument("--scopes", action="store_true", help="Show node counts")
        subparser.add_argument(
            "--no-abbreviate", action="store_true",
            help="Show qualified names instead of simple names",
        )

    render_parser = subparsers.add_parser("render", help="Print DOT source")
    add_common(render_parser)
    render_parser.add_argument(
        "--line-count", action="store_true",
        help="Report the statement count on stderr",
    )

    relations_parser = subparsers.add_parser("relations", help="List relations")
    add_common(relations_parser)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "render": cmd_render,
        "relations": cmd_relations,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 2

    try:
        return command(args)
    except (ContractViolation, ValidationError, ValueError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
