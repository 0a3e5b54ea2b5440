"""Config commands -- view and initialise the server configuration.

Provides the ``api-consumer config`` sub-command group. The configuration
file (:class:`~api_consumer.models.ServerConfig`) lives in the api-consumer
config directory and supplies the defaults the MCP server starts with:
request timeout, concurrency limit, mock-server tool, and test frameworks.
"""

from __future__ import annotations

import typer

from api_consumer.output import error, format_data, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration.

    Resolves the config file, environment overrides, and defaults exactly as
    ``api-consumer serve`` would, then prints the result.

    Example::

        api-consumer config show
        api-consumer --json config show
    """
    from api_consumer.config import config_path, resolve_config

    config = resolve_config()
    info(f"Config file: {config_path()}")
    format_data(config.model_dump(mode="json"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing config file."
    ),
) -> None:
    """Write a config file populated with the default settings.

    Raises:
        typer.Exit: With code 2 if the file already exists and ``--force``
            was not given.

    Example::

        api-consumer config init
        api-consumer config init --force
    """
    from api_consumer.config import config_path, save_server_config
    from api_consumer.models import ServerConfig

    path = config_path()
    if path.exists() and not force:
        error(f"Config file already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=2)

    written = save_server_config(ServerConfig())
    success(f"Wrote default config to {written}")
