from .base import UrlGenerator, buildpack_cache_key
from .external import ExternalUrlGenerator
from .internal import InternalUrlGenerator

__all__ = [
    "ExternalUrlGenerator",
    "InternalUrlGenerator",
    "UrlGenerator",
    "buildpack_cache_key",
]
