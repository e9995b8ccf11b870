import argparse
import logging
import sys

from .config import PropertiesSource
from .pruner import StackTracePruner, DEFAULT_KEYWORDS


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="stackprune", description="Prunes third-party frames from a rendered stack trace.")
    parser.add_argument("file", nargs="?", help="The trace to prune. Reads stdin when omitted.")
    parser.add_argument("-k", "--keyword", dest="keywords", action="append", help="A keyword of the frames to keep. Can be repeated. Replaces the default keywords.")
    parser.add_argument("--style", choices=["java", "python"], default="python", help="How the frames of the trace are indented.")
    parser.add_argument("--properties", help="A .properties file with the 'stacktrace.pruning.enabled' key.")
    parser.add_argument("--no-prune", action="store_true", help="Prints the trace unchanged.")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)

    if args.file:
        with open(args.file, "r", encoding="utf-8") as file:
            text = file.read()
    else:
        text = sys.stdin.read()

    if args.no_prune:
        lines = text.splitlines()
    else:
        pruner = StackTracePruner(
            keywords=args.keywords or DEFAULT_KEYWORDS,
            style=args.style,
            config=PropertiesSource(args.properties) if args.properties else None
        )
        lines = pruner.prune_text(text)

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
