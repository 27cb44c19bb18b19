"""Services module - Business logic layer"""

from .bin_resolver import BinPathCache
from .config_manager import ConfigManager
from .edit_generator import EditGenerator, InvalidEditError, InvalidInputError, split_lines
from .format_service import (
    DuplicateRequestError,
    FormatCancelledError,
    FormatService,
    FormatterError,
)
from .formatter_invoker import FormatterInvoker
from .output_channel import OutputChannel
from .placeholders import PlaceholderContext, substitute_placeholders

__all__ = [
    "BinPathCache",
    "ConfigManager",
    "EditGenerator",
    "InvalidEditError",
    "InvalidInputError",
    "split_lines",
    "DuplicateRequestError",
    "FormatCancelledError",
    "FormatService",
    "FormatterError",
    "FormatterInvoker",
    "OutputChannel",
    "PlaceholderContext",
    "substitute_placeholders",
]
