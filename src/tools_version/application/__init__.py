from tools_version.application.service import (
    Command,
    DisplayResult,
    Mode,
    ToolsVersionService,
    WriteResult,
    resolve_mode,
)

__all__ = [
    "Command",
    "DisplayResult",
    "Mode",
    "ToolsVersionService",
    "WriteResult",
    "resolve_mode",
]
