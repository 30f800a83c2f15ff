"""Main CLI entry point for the markup-tree command-line tool.

Commands:
    bench   Build, render and transform a synthetic tree and print metrics
    demo    Render a small sample document
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from markup_tree import __version__
from markup_tree.element.attributes import CHARSET, CLASS, DISABLED, HREF, NAME, TYPE
from markup_tree.element.conditional import if_h
from markup_tree.element.model import Branch, fragment
from markup_tree.element.tags import A, BODY, BUTTON, DIV, FORM, H1, HEAD, HTML, INPUT, LI, META, TITLE, UL
from markup_tree.render.serializer import HtmlSerializer
from markup_tree.shared import ConfigError, MarkupConfig, configure_logging
from markup_tree.tools.profiling import benchmark_tree


def build_demo_document(items: List[str], signed_in: bool = False) -> Branch:
    """Sample page exercising lists, attributes and conditionals."""
    return HTML.child(
        HEAD.child(
            META.attr(CHARSET << "utf-8"),
            TITLE.child("markup-tree demo"),
        ),
        BODY.child(
            DIV.attr(CLASS << "container").child(
                H1.child("Fish & Chips <daily>"),
                UL.child([LI.child(item) for item in items]),
                if_h(signed_in, lambda: A.attr(HREF << "/logout").child("Sign out"))
                .else_final(lambda: FORM.child(
                    INPUT.attr(TYPE << "text", NAME << "user"),
                    BUTTON.attr(DISABLED << (not items)).child("Sign in"),
                )),
                fragment(),
            ),
        ),
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="markup-tree",
        description="Build, render and transform immutable markup trees",
    )
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    bench_parser = subparsers.add_parser("bench", help="Benchmark render and transform")
    bench_parser.add_argument(
        "--depth", type=int, default=100, help="Nesting depth of the synthetic tree"
    )
    bench_parser.add_argument(
        "--width", type=int, default=10, help="Children per level"
    )
    bench_parser.add_argument(
        "--repeat", type=int, default=1, help="Number of runs"
    )
    bench_parser.add_argument(
        "--format", choices=["json", "text"], default="text", help="Output format"
    )

    demo_parser = subparsers.add_parser("demo", help="Render a sample document")
    demo_parser.add_argument(
        "--item", action="append", default=[], help="List item (repeatable)"
    )
    demo_parser.add_argument(
        "--signed-in", action="store_true", help="Render the signed-in variant"
    )

    parser.add_argument(
        "-c", "--config", type=Path,
        help="JSON configuration file (see MarkupConfig.to_json)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only log errors"
    )
    return parser


def format_benchmark(report: Dict[str, Any], format_type: str) -> str:
    """Format a benchmark report as JSON or a short text table."""
    if format_type == "json":
        return json.dumps(report, indent=2)

    lines = [f"Synthetic tree: depth={report['depth']} width={report['width']}"]
    lines.append("-" * 50)
    for run in report["runs"]:
        render = run["render"]
        lines.append(
            f"{run['session']}: rendered {render['nodes_rendered']} nodes "
            f"({render['output_length']} chars) in {render['processing_time_ms']:.2f} ms"
        )
        transform = run["transform"]
        lines.append(
            f"    transform visited {transform['visited']}, edited {transform['edited']} "
            f"in {transform['processing_time_ms']:.2f} ms"
        )
    return "\n".join(lines)


def load_config(config_path: Optional[Path]) -> MarkupConfig:
    """Read a MarkupConfig from JSON, or return the defaults."""
    if config_path is None:
        return MarkupConfig()
    return MarkupConfig.from_json(config_path.read_text())


def cmd_bench(args: argparse.Namespace, config: MarkupConfig) -> int:
    """Handle bench command."""
    if args.depth < 1 or args.width < 1 or args.repeat < 1:
        print("depth, width and repeat must be >= 1", file=sys.stderr)
        return 2
    report = benchmark_tree(args.depth, args.width, args.repeat, config=config)
    print(format_benchmark(report, args.format))
    return 0


def cmd_demo(args: argparse.Namespace, config: MarkupConfig) -> int:
    """Handle demo command."""
    items = args.item or ["one", "two", "three"]
    document = build_demo_document(items, signed_in=args.signed_in)
    print(HtmlSerializer(config).render(document))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except (OSError, ValueError, ConfigError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        logging.getLogger("markup_tree").setLevel(logging.ERROR)
    elif args.config is not None:
        configure_logging(config.global_.logging_level)

    try:
        if args.command == "bench":
            return cmd_bench(args, config)
        if args.command == "demo":
            return cmd_demo(args, config)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
