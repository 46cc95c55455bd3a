from tools_version.infrastructure.observability.context import CommandLogContext, create_command_logger_context
from tools_version.infrastructure.observability.formatters import NdjsonFormatter, TextFormatter
from tools_version.infrastructure.observability.logger import CommandLogger, NullLogger

__all__ = [
    "CommandLogContext",
    "CommandLogger",
    "NdjsonFormatter",
    "NullLogger",
    "TextFormatter",
    "create_command_logger_context",
]
