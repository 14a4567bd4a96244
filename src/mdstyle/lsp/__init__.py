"""Language Server Protocol support."""
from .types import (
    LspConfig,
    byte_range_to_lsp_range,
    warning_to_code_action,
    warning_to_diagnostic,
)

__all__ = [
    "LspConfig",
    "byte_range_to_lsp_range",
    "warning_to_code_action",
    "warning_to_diagnostic",
]
