from tools_version.cli.app import app, main

__all__ = ["app", "main"]
