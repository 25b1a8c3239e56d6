"""CLI entrypoints for sveltedoc commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .enhance import DocEnhancer
from .generator import DocGenerator
from .introspection import ComponentIntrospector
from .llm.runner import LLMRunner
from .logging import configure_logging
from .markdown import parse_markdown
from .scanner import ComponentScanner


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sveltedoc",
        description="Generate Markdown documentation for Svelte components.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write detailed logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Document every component below a directory (or a single file).",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory or component file (defaults to current directory).",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Directory for the generated Markdown files (defaults to output_dir in .sveltedoc.yml).",
    )

    parse_parser = subparsers.add_parser(
        "parse",
        help="Read a generated Markdown file back and print it as JSON.",
    )
    _add_verbose_option(parse_parser, suppress_default=True)
    parse_parser.add_argument("file", help="Markdown file produced by `sveltedoc generate`.")

    enhance_parser = subparsers.add_parser(
        "enhance",
        help="Rewrite generated documentation with a language model.",
    )
    _add_verbose_option(enhance_parser, suppress_default=True)
    enhance_parser.add_argument(
        "docs_path",
        nargs="?",
        default=None,
        help="Directory holding the Markdown files (defaults to output_dir in .sveltedoc.yml).",
    )
    enhance_parser.add_argument(
        "--prompt",
        default=None,
        help="System prompt for the model (overrides llm.prompt).",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sveltedoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "generate":
        target = Path(args.path).expanduser()
        try:
            config = load_config(target if target.is_dir() else target.parent)
            generator = DocGenerator(
                ComponentIntrospector(dispatcher_factory=config.dispatcher_factory),
                ComponentScanner(config.exclude_paths),
            )
            output = Path(args.output) if args.output else config.output_dir
            docs = generator.generate_docs(target, output)
        except (FileNotFoundError, ConfigError) as exc:
            parser.exit(1, f"{exc}\n")
        print(f"Documented {len(docs)} component(s) in {_relativize(output)}")
    elif args.command == "parse":
        try:
            content = Path(args.file).read_text(encoding="utf-8")
        except OSError as exc:
            parser.exit(1, f"Unable to read {args.file}: {exc}\n")
        print(json.dumps(parse_markdown(content).to_dict(), indent=2))
    elif args.command == "enhance":
        try:
            config = load_config(Path.cwd())
            docs_path = Path(args.docs_path) if args.docs_path else config.output_dir
            enhancer = DocEnhancer(
                LLMRunner.from_config(config.llm), args.prompt or config.llm.prompt
            )
            docs = enhancer.enhance_directory(docs_path)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except RuntimeError as exc:
            parser.exit(1, f"sveltedoc enhance failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Enhanced {len(docs)} document(s) in {_relativize(docs_path)}")
    elif args.command == "serve":
        from .service import run_service

        try:
            run_service(host=args.host, port=args.port)
        except RuntimeError as exc:
            parser.exit(1, f"{exc}\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
