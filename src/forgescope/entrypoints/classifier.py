"""Partition declared functions into user-facing entrypoints.

A function is only worth scanning as an entrypoint when something outside
the app can make it run. The classifier works out which functions are
reachable only through internal triggers and drops them:

1. Functions fired by a scheduled trigger or a platform event trigger are
   ignored.
2. Functions referenced by any extension module (directly or through a
   resolver) are proven user-invocable.
3. Queue consumers are invoked by the messaging backend, so a consumer
   function is ignored unless step 2 also exposes it.
4. The remaining functions are ``WEB_TRIGGER`` when a web trigger targets
   them, ``INVOKABLE`` otherwise.

Ignoring wins over every other reference, and a function referenced
nowhere is reported as ``INVOKABLE``: unknown reachability is treated as
reachable so a security scan does not miss it.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from enum import Enum

from forgescope.manifest.models import FunctionModule, Modules


class Category(str, Enum):
    """How a classified function is exposed."""

    INVOKABLE = "invokable"
    WEB_TRIGGER = "webtrigger"


@dataclass(frozen=True)
class ClassifiedFunction:
    """A function that needs an entrypoint scan, tagged with its exposure."""

    function: FunctionModule
    category: Category


def ignored_functions(modules: Modules) -> set[str]:
    """Return the keys of functions reachable only through internal triggers.

    Args:
        modules: The manifest's ``modules`` section.

    Returns:
        Function keys fired only by schedules, events, or queue consumers
        that no extension module exposes.
    """
    ignored = {trigger.function for trigger in modules.scheduled_triggers}
    ignored.update(trigger.function for trigger in modules.event_triggers)

    alternate_invokable: set[str] = set()
    for module in modules.extension_modules():
        alternate_invokable.update(module.function_refs())

    for consumer in modules.consumers:
        if consumer.resolver.function not in alternate_invokable:
            ignored.add(consumer.resolver.function)
    return ignored


def classify(modules: Modules) -> list[ClassifiedFunction]:
    """Classify every declared function that is reachable from outside.

    Functions found to be internal-only are omitted from the result. Output
    keeps the manifest's declaration order, one entry per function.

    Args:
        modules: The manifest's ``modules`` section.

    Returns:
        List of ``ClassifiedFunction`` entries.
    """
    ignored = ignored_functions(modules)
    # Web triggers are few; a sorted list searched by bisection is enough.
    webtrigger_targets = sorted(trigger.function for trigger in modules.webtriggers)

    classified: list[ClassifiedFunction] = []
    for func in modules.functions:
        if func.key in ignored:
            continue
        if _contains(webtrigger_targets, func.key):
            category = Category.WEB_TRIGGER
        else:
            category = Category.INVOKABLE
        classified.append(ClassifiedFunction(function=func, category=category))
    return classified


def _contains(sorted_keys: list[str], key: str) -> bool:
    index = bisect_left(sorted_keys, key)
    return index < len(sorted_keys) and sorted_keys[index] == key
