"""Typed manifest model, structural decoder and file loader.

Public names are re-exported here::

    from forgescope.manifest import Manifest, decode_manifest, load_manifest
"""

from forgescope.manifest.loader import MANIFEST_FILENAMES, find_manifest, load_manifest
from forgescope.manifest.models import (
    AppInfo,
    Consumer,
    Content,
    EventTrigger,
    ExtensionModule,
    FunctionModule,
    Interval,
    Manifest,
    Modules,
    Permissions,
    Resolver,
    ScheduledTrigger,
    WebTrigger,
    decode_manifest,
)

__all__ = [
    "AppInfo",
    "Consumer",
    "Content",
    "EventTrigger",
    "ExtensionModule",
    "FunctionModule",
    "Interval",
    "MANIFEST_FILENAMES",
    "Manifest",
    "Modules",
    "Permissions",
    "Resolver",
    "ScheduledTrigger",
    "WebTrigger",
    "decode_manifest",
    "find_manifest",
    "load_manifest",
]
