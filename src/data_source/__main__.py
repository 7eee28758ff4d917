from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from aiohttp import web

from data_source.config import YamlConfigLoader, build_resolver
from data_source.config.models import AppConfig, ConfigLoadRequest
from data_source.errors import FetchError
from data_source.logging import init_logging
from data_source.server import create_app

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="data-source", description="Resolve files from a configured data source")
    parser.add_argument(
        "--config",
        default="data/config/config.yaml",
        help="Path to config.yaml (default: data/config/config.yaml)",
    )
    parser.add_argument("--log-level", default=None, help="Override the configured logging level.")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    # Command: get
    get_parser = subparsers.add_parser("get", help="Print the content of one file")
    get_parser.add_argument("name", help="Logical file name to resolve")
    get_parser.add_argument("--output", default=None, help="Write the content to this file instead of stdout.")

    # Command: serve
    serve_parser = subparsers.add_parser("serve", help="Serve files over HTTP")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8080)
    serve_parser.add_argument("--prefix", default="/files", help="URL prefix to mount the files under.")

    return parser


async def _load_config(args: argparse.Namespace) -> AppConfig:
    loader = YamlConfigLoader()
    request = ConfigLoadRequest(
        yaml_path=args.config,
    )
    return await loader.load(request)


async def _get(args: argparse.Namespace) -> int:
    config = await _load_config(args)
    init_logging(config.logging, level_override=args.log_level)
    resolver = build_resolver(config.data_source)

    try:
        content, provenance = await resolver.get_file_content_async(args.name)
    except FetchError as e:
        logger.error("Failed to resolve file. name=%s kind=%s error=%s", args.name, e.kind.value, e)
        return 1

    logger.info("Resolved file. name=%s size=%d provenance=%s", args.name, len(content), provenance)
    if args.output:
        Path(args.output).write_bytes(content)
    else:
        sys.stdout.buffer.write(content)
        sys.stdout.buffer.flush()
    return 0


async def _serve(args: argparse.Namespace) -> int:
    config = await _load_config(args)
    init_logging(config.logging, level_override=args.log_level)
    resolver = build_resolver(config.data_source)

    runner = web.AppRunner(create_app(resolver, prefix=args.prefix))
    await runner.setup()
    site = web.TCPSite(runner, host=args.host, port=args.port)
    await site.start()
    logger.info("Serving files. host=%s port=%s prefix=%s", args.host, args.port, args.prefix)
    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()
    return 0


async def _main_async() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    if args.command == "get":
        return await _get(args)
    if args.command == "serve":
        return await _serve(args)
    return 2


def main() -> None:
    try:
        sys.exit(asyncio.run(_main_async()))
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")


if __name__ == "__main__":
    main()
