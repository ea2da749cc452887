"""MCP server entry point for MIDI-controlled guitar pedals.

Speaks line-delimited JSON-RPC on stdin/stdout. Logging goes to stderr so it
never mixes with protocol output.
"""

from __future__ import annotations

import logging
import sys

from .config import ServerConfig
from .dispatcher import ToolDispatcher
from .models.catalog import JsonDirectoryCatalog, seed
from .pedals import builtin_devices, default_registry
from .transport.executor import MidiPortExecutor
from .transport.midi_connection import MidiConnection

logger = logging.getLogger(__name__)


def build_executor(config: ServerConfig) -> MidiPortExecutor:
    """Open the configured output port, falling back to headless mode."""
    if config.headless:
        logger.info("Headless mode: MIDI messages will be logged only")
        return MidiPortExecutor(None, config.port)

    connection = MidiConnection()
    try:
        connection.open(config.port)
    except ConnectionError as e:
        logger.warning("%s; running headless until rescan_midi_devices", e)
    return MidiPortExecutor(connection, config.port)


def build_dispatcher(config: ServerConfig) -> ToolDispatcher:
    catalog = JsonDirectoryCatalog(config.data_dir)
    if config.seed_builtins:
        added = seed(catalog, builtin_devices())
        if added:
            logger.info("Seeded %d built-in pedal(s)", added)
    return ToolDispatcher(catalog, build_executor(config), default_registry())


def main():
    """Run the MCP server with stdio transport."""
    config = ServerConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    dispatcher = build_dispatcher(config)
    dispatcher.run(sys.stdin, sys.stdout)


if __name__ == "__main__":
    main()
