"""Source implementations and registry."""

from .base import Source
from .file_source import FileSource
from .http_source import HttpJsonSource
from .registry import create_source, register_source, registered_source_types

__all__ = [
    "FileSource",
    "HttpJsonSource",
    "Source",
    "create_source",
    "register_source",
    "registered_source_types",
]
