"""Core business logic: carbon and ESG scoring, input models, errors.

This module is framework-agnostic. It has no dependency on MCP, FastMCP,
or any loader. The batch CLI, the MCP server and any external data layer
all import from here.
"""
