"""Includes command: show the include tree of an xcconfig file.

The file is parsed with an IncludeGraph attached. Include cycles abort the
parse, but the edge closing the cycle is already recorded, so the cycle is
still reported from the graph.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Set

from rich.console import Console
from rich.tree import Tree

from xcconfparse.cli.common import load_command_config
from xcconfparse.fs import LocalFileSystem
from xcconfparse.graph import IncludeGraph
from xcconfparse.parser import IncludeCycleError, XcconfigError, XcconfigParser

logger = logging.getLogger("xcconfparse.cli.includes")


def includes_command(args) -> int:
    """Execute includes command.

    Returns:
        int: Exit code (1 on parse failure, or on cycles with --fail-on-cycle).
    """
    try:
        config, search_paths = load_command_config(args)
    except (OSError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    graph = IncludeGraph()
    parser = XcconfigParser(config)
    root = Path(args.file)
    failed = False
    try:
        parser.parse_file(
            LocalFileSystem(encoding=config.encoding),
            root,
            search_paths,
            include_graph=graph,
        )
    except IncludeCycleError as e:
        logger.warning("%s", e)
    except XcconfigError as e:
        logger.error("%s", e)
        failed = True

    console = Console()
    console.print(include_tree(graph, str(root)))

    cycles = graph.cycles()
    for idx, cycle in enumerate(cycles, start=1):
        pretty_cycle = cycle + [cycle[0]]
        logger.warning("Cycle %d: %s", idx, " -> ".join(pretty_cycle))

    if failed:
        return 1
    if cycles and getattr(args, "fail_on_cycle", False):
        logger.error("Include validation failed: %d cycle(s) detected", len(cycles))
        return 1
    return 0


def include_tree(graph: IncludeGraph, root: str) -> Tree:
    """Build a Rich tree of includes; repeated files are marked, not expanded."""
    tree = Tree(root)
    _add_children(graph, root, tree, {root})
    return tree


def _add_children(graph: IncludeGraph, node: str, branch: Tree, ancestors: Set[str]) -> None:
    for child in graph.includes_of(node):
        if child in ancestors:
            branch.add(f"{child} (cycle)")
            continue
        _add_children(graph, child, branch.add(child), ancestors | {child})
