"""apiary -- thin Google Cloud REST clients and their command-line wrappers.

Every API under :mod:`apiary.apis` is a mechanical instantiation of the same
pattern: schema types mirroring the service's JSON resources, a *hub*
holding the HTTP transport and the token provider, method builders per
resource group, and single-use call builders that execute exactly one
request through the shared routine in :mod:`apiary.common.call`.

Typical library usage::

    import httpx
    from apiary.apis.cloudtasks2_beta3 import CloudTasks, Queue
    from apiary.auth import StaticToken

    hub = CloudTasks(httpx.Client(), StaticToken("ya29..."))
    response, queue = (
        hub.projects()
        .locations_queues_create(Queue(), "projects/p/locations/l")
        .doit()
    )

Modules:
    common: Schema base type, field masks, hub, delegate and call execution.
    auth: Token providers, including the OAuth2 installed-application flow.
    cli: The table-driven CLI engine shared by every generated command.
    apis: Generated bindings, one sub-package per API version.
    config: Config directory, application secrets and atomic writes.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr output with Rich support.
"""

__version__ = "6.0.0"
