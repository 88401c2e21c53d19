#!/usr/bin/env python3
"""Command-line entry point: run the web server or preview a deck's requests."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import Settings
from .request_builder import SlideRequestBuilder, batch_requests
from .segmenter import DEFAULT_DELIMITER

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="md2slides", description="Convert Markdown to a Google Slides presentation.")
    sub = p.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the web server")
    serve.add_argument("--host", help="Interface to bind (default: HOST or 127.0.0.1)")
    serve.add_argument("--port", type=int, help="Port to listen on (default: PORT or 3000)")
    serve.add_argument("--env-file", type=Path, help="Load settings from this .env file")
    serve.add_argument("--reload", action="store_true", help="Restart on code changes (development)")

    preview = sub.add_parser("preview", help="Print the batchUpdate requests for a markdown file")
    preview.add_argument("markdown", type=Path, help="Markdown file to convert")
    preview.add_argument("--delimiter", "-d", default=DEFAULT_DELIMITER, help="Slide separator (default: ---)")
    return p


def _serve(args) -> int:
    import uvicorn

    settings = Settings.from_env(str(args.env_file) if args.env_file else None)
    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("Server running at http://%s:%d", host, port)
    uvicorn.run(
        "md2slides.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=args.reload,
    )
    return 0


def _preview(args) -> int:
    md_path: Path = args.markdown
    if not md_path.exists():
        logger.error("Markdown file '%s' not found", md_path)
        return 1

    specs, ops = SlideRequestBuilder().assemble_specs(md_path.read_text(encoding="utf-8"), args.delimiter)
    for index, spec in enumerate(specs):
        logger.info("Slide %d: %s (%d body lines)", index + 1, spec.display_title(index), len(spec.body_lines))
    json.dump({"requests": batch_requests(ops)}, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    if args.command == "serve":
        return _serve(args)
    return _preview(args)


if __name__ == "__main__":
    sys.exit(main())
