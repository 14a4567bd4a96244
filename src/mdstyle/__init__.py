"""mdstyle - Markdown style linter with fixes, an LSP server and MCP tools."""
__version__ = "0.1.0"
