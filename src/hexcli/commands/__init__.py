"""Built-in CLI sub-commands for hexcli.

* :mod:`~hexcli.commands.organization` -- authorize, deauthorize, list,
  and generate keys for private package organizations.

Each module exports a plain callback function registered directly on the
root app in :func:`hexcli.app.main`.
"""
