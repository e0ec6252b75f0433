"""Typer application factory and console-script entry point.

Each generated API describes its command-line tool as an :class:`ApiCli`:
its binary name, version, the hub class and the static :class:`Command`
tables. :func:`build_app` turns that description into a
:class:`typer.Typer` application shaped like::

    <binary> [--scope URL]... [--config-dir DIR] [--debug]
        <group> <operation> [POSITIONAL]... [-r k=v]... [-p k=v]... [-o FILE]

and :func:`run` is what the console script calls.

Operation commands are generated functions: Typer reads the signature of
the function it decorates, so for each operation the source of a function
with the right positional arguments is compiled, with the
:func:`typer.Argument` / :func:`typer.Option` defaults injected through its
namespace.
"""

from __future__ import annotations

import signal
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence

import click
import httpx
import typer

from apiary.auth.base import GetToken, StaticToken
from apiary.auth.installed_flow import InstalledFlowAuthenticator
from apiary.auth.token_store import TokenStore
from apiary.cli.engine import Command, Engine, Invocation
from apiary.cli.issues import ConfigurationError
from apiary.common.hub import Hub
from apiary.config import (
    DEFAULT_CONFIG_DIR,
    access_token_from_env,
    application_secret_from_directory,
    assure_config_dir_exists,
    resolve_config_dir,
)
from apiary.exceptions import ApiaryError, Cancelled, ConfigError, InvalidOptionsError
from apiary.exit_codes import EXIT_GENERIC_FAILURE
from apiary.models import ApplicationSecret, ConsoleApplicationSecret
from apiary.output import OutputManager, debug, error, get_output, set_output

HTTP_TIMEOUT = 60.0

SCOPE_HELP = (
    "Specify the authentication a method should be executed in. Each scope "
    "requires the user to grant this application permission to use it. If "
    "unset, it defaults to the shortest scope url for a particular method."
)
CONFIG_DIR_HELP = (
    "A directory into which we will store our persistent data. Defaults to "
    "a user-writable directory that we will create during the first invocation."
)
KV_HELP = "Set various fields of the request structure, matching the key=value form"
PARAM_HELP = "Set various optional parameters, matching the key=value form"
OUT_HELP = "Specify the file into which to write the program's output"


@dataclass(frozen=True)
class ApiCli:
    """Everything needed to build the command-line tool of one API.

    Attributes:
        name: Binary name, e.g. ``"cloudtasks2-beta3"``. Also names the
            application secret file and the token directory.
        version: Shown by ``--version``.
        about: Top-level help text.
        hub: Hub class, called as ``hub(client, auth)``.
        commands: One table per operation.
        groups: Help text per resource group.
        config_dir: Default configuration directory.
    """

    name: str
    version: str
    about: str
    hub: Callable[[httpx.Client, GetToken], Hub]
    commands: Sequence[Command]
    groups: Mapping[str, str] = field(default_factory=dict)
    config_dir: str = DEFAULT_CONFIG_DIR

    @property
    def secret_file(self) -> str:
        return f"{self.name}-secret.json"


def build_app(
    cli: ApiCli,
    client_factory: Callable[[], httpx.Client] = lambda: httpx.Client(timeout=HTTP_TIMEOUT),
) -> typer.Typer:
    """Build the Typer application for *cli*.

    Args:
        cli: The tool description.
        client_factory: Creates the HTTP client of the hub, once per
            invocation.

    Returns:
        The root :class:`typer.Typer`, one sub-app per resource group.
    """
    app = typer.Typer(
        name=cli.name,
        help=cli.about,
        no_args_is_help=True,
        add_completion=False,
        rich_markup_mode="rich",
        pretty_exceptions_enable=False,
    )

    def _version_callback(value: bool) -> None:
        if value:
            typer.echo(f"{cli.name} {cli.version}")
            raise typer.Exit()

    @app.callback()
    def main_callback(
        ctx: typer.Context,
        version: bool = typer.Option(
            False, "--version", callback=_version_callback, is_eager=True,
            help="Show version and exit.",
        ),
        scope: Optional[List[str]] = typer.Option(None, "--scope", help=SCOPE_HELP),
        config_dir: Optional[str] = typer.Option(
            None, "--config-dir", help=f"{CONFIG_DIR_HELP} [default: {cli.config_dir}]"
        ),
        debug_flag: bool = typer.Option(False, "--debug", help="Debug print all errors."),
    ) -> None:
        """Root callback: installs the output manager and stores the global options."""
        output = OutputManager(verbose=debug_flag)
        set_output(output)
        if debug_flag:
            output.configure_logging()

        ctx.ensure_object(dict)
        ctx.obj["scopes"] = tuple(scope or ())
        ctx.obj["config_dir"] = config_dir

    def dispatch(ctx: click.Context, command: Command, args: tuple[str, ...],
                 kv: Optional[List[str]], params: Optional[List[str]],
                 out: Optional[str]) -> None:
        obj = ctx.obj or {}
        invocation = Invocation(
            group=command.group,
            method=command.name,
            args=args,
            kv=tuple(kv or ()),
            params=tuple(params or ()),
            out=out,
            scopes=obj.get("scopes", ()),
        )
        try:
            with _make_hub(cli, obj.get("config_dir"), client_factory) as hub:
                Engine(hub, cli.commands, invocation).doit()
        except ApiaryError as exc:
            _report(exc)
            raise typer.Exit(code=exc.exit_code)

    sub_apps: dict[str, typer.Typer] = {}
    for command in cli.commands:
        sub_app = sub_apps.get(command.group)
        if sub_app is None:
            sub_app = typer.Typer(help=cli.groups.get(command.group), no_args_is_help=True)
            app.add_typer(sub_app, name=command.group)
            sub_apps[command.group] = sub_app
        sub_app.command(name=command.name, help=command.about)(
            _build_command_function(command, dispatch)
        )

    return app


def _make_hub(
    cli: ApiCli, config_dir: Optional[str], client_factory: Callable[[], httpx.Client]
) -> Hub:
    """Create the hub, authenticating with ``$APIARY_ACCESS_TOKEN`` or the installed flow.

    Raises:
        InvalidOptionsError: Exit code 3 when the configuration directory is
            unusable, 4 when the application secret is.
    """
    auth: GetToken
    token = access_token_from_env()
    if token is not None:
        auth = StaticToken(token)
    else:
        try:
            directory = assure_config_dir_exists(resolve_config_dir(config_dir, cli.config_dir))
            secret = application_secret_from_directory(
                directory, cli.secret_file, ConsoleApplicationSecret(installed=ApplicationSecret())
            )
        except ConfigError as exc:
            raise InvalidOptionsError.single(ConfigurationError(str(exc)), exc.exit_code) from exc
        auth = InstalledFlowAuthenticator(secret, TokenStore.for_api(directory, cli.name))
    return cli.hub(client_factory(), auth)


def _report(exc: ApiaryError) -> None:
    if get_output().is_verbose:
        error(repr(exc))
        if exc.__cause__ is not None:
            debug(f"caused by: {exc.__cause__!r}")
    else:
        error(str(exc))


# ---------------------------------------------------------------------------
# Generated command functions
# ---------------------------------------------------------------------------


def _build_command_function(
    command: Command, dispatch: Callable[..., None]
) -> Callable[..., None]:
    """Generate the Typer function for *command*.

    The function takes the Typer context, one positional argument per
    ``command.args``, then ``-r`` (only when the operation has a request
    body), ``-p`` and ``-o``.
    """
    func_name = "_cmd_" + f"{command.group}_{command.name}".replace("-", "_")
    namespace: dict[str, Any] = {
        "_Context": typer.Context,
        "_dispatch": dispatch,
        "_command": command,
        "_str": str,
        "_list": Optional[List[str]],
        "_opt_str": Optional[str],
    }

    sig_parts = ["ctx: _Context"]
    arg_names: list[str] = []
    for idx, arg in enumerate(command.args):
        name = f"arg_{idx}_{arg.name.replace('-', '_')}"
        sentinel = f"_default_arg_{idx}"
        namespace[sentinel] = typer.Argument(..., metavar=arg.name.upper(), help=arg.help)
        sig_parts.append(f"{name}: _str = {sentinel}")
        arg_names.append(name)

    kv_name = "None"
    if command.request is not None:
        namespace["_default_kv"] = typer.Option(None, "-r", "--kv", help=KV_HELP)
        sig_parts.append("kv: _list = _default_kv")
        kv_name = "kv"
    namespace["_default_params"] = typer.Option(None, "-p", help=PARAM_HELP)
    namespace["_default_out"] = typer.Option(None, "-o", "--out", help=OUT_HELP)
    sig_parts.append("params: _list = _default_params")
    sig_parts.append("out: _opt_str = _default_out")

    args_tuple = "(" + "".join(f"{name}, " for name in arg_names) + ")"
    source = (
        f"def {func_name}({', '.join(sig_parts)}):\n"
        f"    _dispatch(ctx, _command, {args_tuple}, {kv_name}, params, out)\n"
    )
    code = compile(source, f"<apiary:{command.group} {command.name}>", "exec")
    exec(code, namespace)  # noqa: S102 -- controlled code generation
    fn = namespace[func_name]
    fn.__doc__ = command.about
    return fn


# ---------------------------------------------------------------------------
# Console-script entry point
# ---------------------------------------------------------------------------


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler that turns Ctrl-C into :class:`Cancelled`."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        raise Cancelled()

    signal.signal(signal.SIGINT, _handler)


def run(cli: ApiCli) -> None:
    """Entry point of a generated console script.

    :class:`~apiary.exceptions.ApiaryError` instances exit with their
    ``exit_code``; anything else is reported as an unexpected error.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        build_app(cli)()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        cancelled = Cancelled()
        _report(cancelled)
        sys.exit(cancelled.exit_code)
    except Exception as exc:
        if isinstance(exc, ApiaryError):
            _report(exc)
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc!r}")
        sys.exit(EXIT_GENERIC_FAILURE)
