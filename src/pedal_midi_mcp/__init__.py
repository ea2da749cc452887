"""MCP server that turns tool calls into MIDI for guitar effect pedals."""

__version__ = "0.1.0"
