"""Nestbox: embed static web assets at build time, serve them over ASGI.

Build step (collects a directory into an importable module)::

    from nestbox import generate_resources

    generate_resources("./web/dist", "myapp/assets.py")

Runtime (immutable table, ETag caching, optional SPA fallback)::

    from nestbox import ResourceFiles
    from myapp.assets import generate

    app = ResourceFiles("/", generate()).fallback_not_found_to_root().asgi()
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "BadRequest",
    "CollectionError",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "NestboxError",
    "NotFound",
    "Request",
    "Resource",
    "ResourceFiles",
    "ResourceTable",
    "Response",
    "ServeConfig",
    "UriSegmentError",
    "collect",
    "freeze_table",
    "generate_resources",
    "resource_dir",
    "sanitize_path",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import nestbox`` fast inside generated modules and build scripts.
    """
    if name == "ResourceFiles":
        from nestbox.service import ResourceFiles

        return ResourceFiles

    if name in ("Resource", "ResourceTable", "freeze_table"):
        from nestbox import resources

        return getattr(resources, name)

    if name == "ServeConfig":
        from nestbox.config import ServeConfig

        return ServeConfig

    if name == "Request":
        from nestbox.http.request import Request

        return Request

    if name == "Response":
        from nestbox.http.response import Response

        return Response

    if name == "collect":
        from nestbox.collector import collect

        return collect

    if name == "generate_resources":
        from nestbox.codegen import generate_resources

        return generate_resources

    if name == "resource_dir":
        from nestbox.build import resource_dir

        return resource_dir

    if name == "sanitize_path":
        from nestbox.paths import sanitize_path

        return sanitize_path

    if name in (
        "BadRequest",
        "CollectionError",
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NestboxError",
        "NotFound",
        "UriSegmentError",
    ):
        from nestbox import errors

        return getattr(errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
