"""Unity project generation helper exposed over MCP."""

__version__ = "0.1.0"
