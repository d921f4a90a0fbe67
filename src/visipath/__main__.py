import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from visipath.debug import GraphInspector
from visipath.parser import ParseError
from visipath.pathfinder import PathfindingError, path_length
from visipath.png_renderer import render_to_png
from visipath.scene import Scene

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Find a shortest path around rectangular walls"
    )
    parser.add_argument("path", help="Path to the scene description file")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--png",
        help="Write a PNG rendering of the scene, edges and path to this path",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print the full build and search trace",
    )
    parser.add_argument(
        "--max-expansions",
        type=int,
        help="Abort the search after this many node expansions",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        text = Path(args.path).read_text(encoding="utf-8")
        scene = Scene.from_text(
            text, max_expansions=args.max_expansions, debug=args.trace
        )
        path = scene.solve()
    except (OSError, ParseError, PathfindingError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    logger.info(
        "Scene has %d wall(s), %d node(s), %d edge(s)",
        len(scene.obstacles),
        len(scene.nodes),
        len(scene.edges),
    )

    if path:
        print(f"Path ({len(path)} nodes, length {path_length(path):.3f}):")
        for node in path:
            print(f"  {node}")
    else:
        print("No path found")
        inspector = GraphInspector(scene.adjacency, scene.nodes)
        print(f"  {inspector.explain_unreachable(scene.start, scene.goal)}")

    if args.trace:
        print(scene.get_trace().dump())

    if args.png:
        output_path = Path(args.png)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing PNG to %s", output_path)
        render_to_png(scene, str(output_path))
        print(f"PNG written to {output_path}")

    return 0 if path else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
