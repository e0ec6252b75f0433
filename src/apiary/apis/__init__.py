"""Generated API bindings, one sub-package per API and version.

Each sub-package has an ``api`` module (schemas, hub, method and call
builders) and a ``cli`` module (command tables and the console script).
"""
