"""hpl serve command - run the engine over stdin/stdout JSON lines."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable
from pathlib import Path
from typing import IO

import click
import structlog

from hintplane.config.loader import load_config
from hintplane.config.models import HintPlaneConfig
from hintplane.core.errors import ProtocolError
from hintplane.core.logging import configure_logging
from hintplane.docs.fetcher import DocsFetcher
from hintplane.engine.events import ErrorMessage, OutboundEvent
from hintplane.engine.protocol import decode_message, encode_event_json
from hintplane.engine.runtime import Engine

logger = structlog.get_logger()


def _writer(stream: IO[str]) -> Callable[[OutboundEvent], None]:
    def write(event: OutboundEvent) -> None:
        stream.write(encode_event_json(event) + "\n")
        stream.flush()

    return write


async def serve(config: HintPlaneConfig, stdin: IO[str], stdout: IO[str]) -> int:
    """Feed stdin lines to the engine until EOF; return the count of bad lines."""
    write = _writer(stdout)
    engine = Engine(DocsFetcher(config.docs), config=config, sink=write)
    engine.start()
    loop = asyncio.get_running_loop()
    bad_lines = 0
    try:
        while True:
            line = await loop.run_in_executor(None, stdin.readline)
            if not line:
                break
            if not line.strip():
                continue
            try:
                event = decode_message(line)
            except ProtocolError as e:
                bad_lines += 1
                logger.warning("invalid_message", error=str(e))
                write(ErrorMessage(e.to_dict()))
                continue
            engine.submit(event)
    finally:
        await engine.stop()
    return bad_lines


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON on stderr")
@click.pass_context
def serve_command(ctx: click.Context, path: Path, json_logs: bool) -> None:
    """Serve the engine over stdin/stdout.

    PATH is the project root holding .hintplane/config.yaml (default: current directory).
    Each stdin line is one JSON message; each stdout line is one outbound event.
    """
    config = load_config(path.resolve())
    if ctx.obj and ctx.obj.get("verbose"):
        config.logging.level = "DEBUG"
    if json_logs:
        for output in config.logging.outputs:
            output.format = "json"
    configure_logging(config=config.logging)

    bad_lines = asyncio.run(serve(config, sys.stdin, sys.stdout))
    if bad_lines:
        logger.info("serve_finished", invalid_messages=bad_lines)
