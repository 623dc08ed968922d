"""Preview server.

Starts a pounce ASGI server with a live nestbox application object.
Requires the ``serve`` extra (``pip install nestbox[serve]``).
"""

from nestbox._internal.asgi import ASGIApp
from nestbox.errors import ConfigurationError


def run_dev_server(app: ASGIApp, host: str, port: int) -> None:
    """Start a single-worker pounce server for *app*.

    Pounce's ``run()`` takes an import string, but the CLI holds a live
    application built from a freshly collected table, so ``pounce.Server``
    is used directly with the ASGI callable.  There is no reload: the
    table is immutable once collected.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "nestbox serve requires pounce. Install it with: pip install nestbox[serve]"
        raise ConfigurationError(msg) from exc

    config = ServerConfig(host=host, port=port, workers=1, reload=False)
    server = Server(config, app)
    server.run()
