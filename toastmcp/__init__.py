"""toastmcp - desktop toast notifications for agents over MCP stdio."""

from loguru import logger

__version__ = "0.3.0"
__logo__ = "🔔"

# Silent when used as a library; the CLI enables its own sinks.
logger.disable("toastmcp")
