"""Built-in CLI sub-commands for api-consumer.

This package groups the Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~api_consumer.commands.serve` -- run the MCP server over stdio.
* :mod:`~api_consumer.commands.import_spec` -- import an OpenAPI document
  and print the normalized result.
* :mod:`~api_consumer.commands.tools` -- list the tools the server
  advertises.
* :mod:`~api_consumer.commands.config` -- view and initialise the server
  configuration.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``config``) or a plain callback function
registered directly on the root app (for single commands like ``serve``).
"""
