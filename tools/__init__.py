"""Tool registry and execution."""

# Importing a tool module registers it
from tools import weather  # noqa: F401
from tools.base import execute_tool, get_tools

TOOLS = get_tools()

__all__ = ["TOOLS", "execute_tool", "get_tools"]
