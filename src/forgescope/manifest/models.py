"""Typed model of an extension app manifest and its structural decoder.

A manifest has three top-level sections:

- ``app`` -- identity of the app (``id`` is required).
- ``modules`` -- capability declarations keyed by category. Functions,
  web triggers, event triggers, scheduled triggers and queue consumers are
  modelled individually because they decide entrypoint reachability.
  Every other category (macros, issue panels, custom fields, validators,
  data providers...) is kept as a list of generic ``ExtensionModule``
  entries, since the platform keeps adding categories and any of them can
  expose a function to the user.
- ``permissions`` -- granted OAuth scopes and content asset lists.

Decoding is best effort: only ``app.id`` and each function's ``key`` and
``handler`` are structurally required. A trigger, consumer or extension
entry that lacks its reference fields is skipped, not rejected.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from forgescope.exceptions import MalformedManifest

logger = logging.getLogger(__name__)

# Module category names with dedicated handling.
FUNCTION_CATEGORY = "function"
WEBTRIGGER_CATEGORY = "webtrigger"
EVENT_TRIGGER_CATEGORY = "trigger"
SCHEDULED_TRIGGER_CATEGORY = "scheduledTrigger"
CONSUMER_CATEGORY = "consumer"

CORE_CATEGORIES = frozenset({
    FUNCTION_CATEGORY,
    WEBTRIGGER_CATEGORY,
    EVENT_TRIGGER_CATEGORY,
    SCHEDULED_TRIGGER_CATEGORY,
    CONSUMER_CATEGORY,
})


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AppInfo:
    """Identity of the app declaring the manifest."""

    id: str
    name: str | None = None


@dataclass(frozen=True)
class FunctionModule:
    """A declared backend function.

    Attributes:
        key: Unique identifier of the function within the manifest. Other
            modules reference functions by this key.
        handler: ``"<module-path>.<export-name>"``, e.g. ``"index.run"``.
        auth_providers: Named external auth providers the function uses.
    """

    key: str
    handler: str
    auth_providers: tuple[str, ...] = ()


@dataclass(frozen=True)
class WebTrigger:
    """Exposes a function to unauthenticated external HTTP invocation."""

    key: str
    function: str


@dataclass(frozen=True)
class EventTrigger:
    """Fires a function on named platform events."""

    key: str
    function: str
    events: tuple[str, ...] = ()


class Interval(str, Enum):
    """Schedule interval of a ``ScheduledTrigger``."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"


@dataclass(frozen=True)
class ScheduledTrigger:
    """Fires a function on a fixed interval."""

    key: str
    function: str
    interval: Interval | None = None


@dataclass(frozen=True)
class Resolver:
    """Reference from a module to the function backing it."""

    function: str
    method: str | None = None


@dataclass(frozen=True)
class Consumer:
    """Binds a queue to a resolver function, invoked by the messaging backend."""

    key: str
    queue: str
    resolver: Resolver


@dataclass(frozen=True)
class ExtensionModule:
    """Generic entry of any module category not modelled individually.

    Attributes:
        category: The manifest category name, e.g. ``"jira:issuePanel"``.
        key: Module key, empty when the entry declares none.
        function: Direct function reference, if any.
        resolver: Resolver function reference, if any.
        raw: The undecoded entry, preserved for downstream consumers.
    """

    category: str
    key: str = ""
    function: str | None = None
    resolver: Resolver | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def function_refs(self) -> tuple[str, ...]:
        """Return every function this module can invoke."""
        refs: list[str] = []
        if self.function:
            refs.append(self.function)
        if self.resolver is not None:
            refs.append(self.resolver.function)
        return tuple(refs)


@dataclass(frozen=True)
class Modules:
    """The ``modules`` section of a manifest."""

    functions: tuple[FunctionModule, ...] = ()
    webtriggers: tuple[WebTrigger, ...] = ()
    event_triggers: tuple[EventTrigger, ...] = ()
    scheduled_triggers: tuple[ScheduledTrigger, ...] = ()
    consumers: tuple[Consumer, ...] = ()
    extensions: Mapping[str, tuple[ExtensionModule, ...]] = field(
        default_factory=lambda: MappingProxyType({}),
    )

    def extension_modules(self) -> list[ExtensionModule]:
        """Flatten all extension categories into one list."""
        return [module for entries in self.extensions.values() for module in entries]

    def function(self, key: str) -> FunctionModule | None:
        """Look up a declared function by key."""
        for func in self.functions:
            if func.key == key:
                return func
        return None


@dataclass(frozen=True)
class Content:
    """Content security asset lists. Inert for entrypoint and scope analysis."""

    scripts: tuple[str, ...] = ()
    styles: tuple[str, ...] = ()


@dataclass(frozen=True)
class Permissions:
    """The ``permissions`` section: granted scopes and content assets."""

    scopes: frozenset[str] = frozenset()
    content: Content = Content()


@dataclass(frozen=True)
class Manifest:
    """A decoded app manifest."""

    app: AppInfo
    modules: Modules = Modules()
    permissions: Permissions = Permissions()


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_manifest(data: Any) -> Manifest:
    """Decode a parsed manifest document into the typed model.

    Args:
        data: The document as produced by a YAML or JSON decoder.

    Returns:
        The decoded ``Manifest``.

    Raises:
        MalformedManifest: If the root is not a mapping, ``app.id`` is
            missing, or a function lacks ``key`` or ``handler``.
    """
    if not isinstance(data, Mapping):
        raise MalformedManifest("manifest root must be a mapping")
    return Manifest(
        app=_decode_app(data.get("app")),
        modules=_decode_modules(data.get("modules")),
        permissions=_decode_permissions(data.get("permissions")),
    )


def _decode_app(raw: Any) -> AppInfo:
    if not isinstance(raw, Mapping) or not _is_text(raw.get("id")):
        raise MalformedManifest("app.id is required")
    name = raw.get("name")
    return AppInfo(id=raw["id"], name=str(name) if name is not None else None)


def _decode_modules(raw: Any) -> Modules:
    if raw is None:
        return Modules()
    if not isinstance(raw, Mapping):
        raise MalformedManifest("modules must be a mapping of category to entries")

    extensions: dict[str, tuple[ExtensionModule, ...]] = {}
    for category, entries in raw.items():
        if category in CORE_CATEGORIES:
            continue
        extensions[str(category)] = tuple(
            module
            for module in (_decode_extension(str(category), e) for e in _entries(raw, category))
            if module is not None
        )

    return Modules(
        functions=tuple(_decode_function(e) for e in _entries(raw, FUNCTION_CATEGORY)),
        webtriggers=tuple(_collect(raw, WEBTRIGGER_CATEGORY, _decode_webtrigger)),
        event_triggers=tuple(_collect(raw, EVENT_TRIGGER_CATEGORY, _decode_event_trigger)),
        scheduled_triggers=tuple(
            _collect(raw, SCHEDULED_TRIGGER_CATEGORY, _decode_scheduled_trigger)
        ),
        consumers=tuple(_collect(raw, CONSUMER_CATEGORY, _decode_consumer)),
        extensions=MappingProxyType(extensions),
    )


def _entries(raw: Mapping[str, Any], category: str) -> list[Any]:
    entries = raw.get(category)
    if entries is None:
        return []
    if not isinstance(entries, list):
        logger.debug("Module category %r is not a list; skipping", category)
        return []
    return entries


def _collect(raw: Mapping[str, Any], category: str, decoder: Any) -> list[Any]:
    """Decode every entry of a category, dropping the ones that fail."""
    decoded = []
    for entry in _entries(raw, category):
        item = decoder(entry) if isinstance(entry, Mapping) else None
        if item is None:
            logger.debug("Skipping incomplete %s entry: %r", category, entry)
            continue
        decoded.append(item)
    return decoded


def _decode_function(entry: Any) -> FunctionModule:
    if not isinstance(entry, Mapping):
        raise MalformedManifest(f"function entry must be a mapping, got {entry!r}")
    key = entry.get("key")
    handler = entry.get("handler")
    if not _is_text(key):
        raise MalformedManifest("function entry is missing 'key'")
    if not _is_text(handler):
        raise MalformedManifest(f"function {key!r} is missing 'handler'")
    return FunctionModule(key=key, handler=handler, auth_providers=_auth_providers(entry))


def _auth_providers(entry: Mapping[str, Any]) -> tuple[str, ...]:
    providers = entry.get("providers")
    if isinstance(providers, Mapping):
        return _str_tuple(providers.get("auth"))
    return _str_tuple(entry.get("authProviders"))


def _decode_webtrigger(entry: Mapping[str, Any]) -> WebTrigger | None:
    key, function = entry.get("key"), entry.get("function")
    if not _is_text(function):
        return None
    return WebTrigger(key=str(key or ""), function=function)


def _decode_event_trigger(entry: Mapping[str, Any]) -> EventTrigger | None:
    key, function = entry.get("key"), entry.get("function")
    if not _is_text(function):
        return None
    return EventTrigger(key=str(key or ""), function=function, events=_str_tuple(entry.get("events")))


def _decode_scheduled_trigger(entry: Mapping[str, Any]) -> ScheduledTrigger | None:
    key, function = entry.get("key"), entry.get("function")
    if not _is_text(function):
        return None
    interval = entry.get("interval")
    parsed: Interval | None = None
    if interval is None:
        logger.debug("Scheduled trigger %r has no interval", key)
    else:
        try:
            parsed = Interval(str(interval).lower())
        except ValueError:
            logger.debug("Scheduled trigger %r has unknown interval %r", key, interval)
    return ScheduledTrigger(key=str(key or ""), function=function, interval=parsed)


def _decode_consumer(entry: Mapping[str, Any]) -> Consumer | None:
    resolver = _decode_resolver(entry.get("resolver"))
    if resolver is None:
        return None
    return Consumer(
        key=str(entry.get("key") or ""),
        queue=str(entry.get("queue") or ""),
        resolver=resolver,
    )


def _decode_resolver(raw: Any) -> Resolver | None:
    # A bare string is shorthand for {"function": <string>}.
    if _is_text(raw):
        return Resolver(function=raw)
    if isinstance(raw, Mapping) and _is_text(raw.get("function")):
        method = raw.get("method")
        return Resolver(function=raw["function"], method=str(method) if method else None)
    return None


def _decode_extension(category: str, entry: Any) -> ExtensionModule | None:
    if not isinstance(entry, Mapping):
        logger.debug("Skipping non-mapping %s entry: %r", category, entry)
        return None
    function = entry.get("function")
    return ExtensionModule(
        category=category,
        key=str(entry.get("key") or ""),
        function=function if _is_text(function) else None,
        resolver=_decode_resolver(entry.get("resolver")),
        raw=MappingProxyType(dict(entry)),
    )


def _decode_permissions(raw: Any) -> Permissions:
    if not isinstance(raw, Mapping):
        return Permissions()
    content = raw.get("content")
    if not isinstance(content, Mapping):
        content = {}
    return Permissions(
        scopes=frozenset(_str_tuple(raw.get("scopes"))),
        content=Content(
            scripts=_str_tuple(content.get("scripts")),
            styles=_str_tuple(content.get("styles")),
        ),
    )


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _str_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in value if item is not None)
