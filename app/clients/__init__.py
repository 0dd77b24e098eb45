import logging

logger = logging.getLogger(__name__)

_registry = {}


def register_client(cls):
    """Decorator to register a judge API client."""
    _registry[cls.PLATFORM_NAME] = cls
    logger.debug(f"Registered client: {cls.PLATFORM_NAME}")
    return cls


def get_client_class(platform_name: str):
    return _registry.get(platform_name)


def get_client_instance(platform_name: str, **kwargs):
    cls = _registry.get(platform_name)
    if cls is None:
        raise ValueError(f"Unknown platform: {platform_name}")
    return cls(**kwargs)


from . import codeforces  # noqa: E402,F401
