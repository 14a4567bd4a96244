"""mdstyle MCP Server - exposes the linter as MCP tools."""
import logging
import sys

from mcp.server.fastmcp import FastMCP

from mdstyle.config import Config
from mdstyle.tools import lint

# Configure logging to stderr (CRITICAL: stdout is reserved for JSON-RPC)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)]
)

logger = logging.getLogger(__name__)


def main():
    """Main entry point for the MCP server."""
    try:
        mcp = FastMCP("mdstyle")
        config = Config.load()
        logging.getLogger().setLevel(config.log_level)

        logger.info(f"mdstyle v{config.version} starting...")
        logger.info(f"Workspace directory: {config.workspace_dir}")

        lint.register(mcp, config)
        logger.info("Tools registered: lint_markdown, fix_markdown, get_lint_rules")

        logger.info("Starting MCP server on stdio...")
        mcp.run(transport="stdio")

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
