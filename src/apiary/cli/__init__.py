"""Command-line layer shared by every generated API tool.

Modules:
    app: Typer application factory and the console-script entry point.
    engine: Command tables and the validate-then-execute engine.
    kv: ``key=value`` parsing, typed values and field cursors.
    issues: The problems validation can report.
"""

from apiary.cli.app import ApiCli, build_app, run
from apiary.cli.engine import Arg, Command, Engine, Invocation, Param
from apiary.cli.kv import ComplexType, FieldCursor, JsonType, JsonTypeInfo

__all__ = [
    "ApiCli",
    "Arg",
    "Command",
    "ComplexType",
    "Engine",
    "FieldCursor",
    "Invocation",
    "JsonType",
    "JsonTypeInfo",
    "Param",
    "build_app",
    "run",
]
