"""Property-based tests for function classification.

Verifies, over generated manifests, that:
    - functions fired only by schedules or events are never classified,
    - classification keeps declaration order and yields each key once,
    - a function is a web trigger exactly when a web trigger targets it.
"""
from __future__ import annotations

from typing import Any

from hypothesis import given
from hypothesis import strategies as st

from forgescope.entrypoints import Category, classify
from forgescope.manifest import decode_manifest


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

function_keys = st.lists(
    st.text(alphabet="abcdefghij-", min_size=1, max_size=6),
    min_size=1,
    max_size=8,
    unique=True,
)


@st.composite
def manifests(draw: st.DrawFn) -> dict[str, Any]:
    keys = draw(function_keys)
    pick = st.sampled_from(keys)
    web = draw(st.lists(pick, max_size=3))
    scheduled = draw(st.lists(pick, max_size=3))
    events = draw(st.lists(pick, max_size=3))
    panels = draw(st.lists(pick, max_size=3))
    return {
        "app": {"id": "generated"},
        "modules": {
            "function": [{"key": k, "handler": f"{k}.run"} for k in keys],
            "webtrigger": [{"key": f"w{i}", "function": f} for i, f in enumerate(web)],
            "scheduledTrigger": [
                {"key": f"s{i}", "function": f, "interval": "hour"} for i, f in enumerate(scheduled)
            ],
            "trigger": [
                {"key": f"e{i}", "function": f, "events": ["avi:jira:created:issue"]}
                for i, f in enumerate(events)
            ],
            "jira:issuePanel": [{"key": f"p{i}", "function": f} for i, f in enumerate(panels)],
        },
    }


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestClassificationProperties:
    """Invariants of ``classify`` over arbitrary manifests."""

    @given(data=manifests())
    def test_internal_triggers_excluded(self, data: dict[str, Any]) -> None:
        """No scheduled or event target is ever classified."""
        modules = decode_manifest(data).modules
        internal = {t["function"] for t in data["modules"]["scheduledTrigger"]}
        internal |= {t["function"] for t in data["modules"]["trigger"]}
        classified = {c.function.key for c in classify(modules)}
        assert not classified & internal

    @given(data=manifests())
    def test_declaration_order_and_uniqueness(self, data: dict[str, Any]) -> None:
        """Output is a subsequence of the declared function order."""
        modules = decode_manifest(data).modules
        declared = [f.key for f in modules.functions]
        keys = [c.function.key for c in classify(modules)]
        assert len(keys) == len(set(keys))
        positions = [declared.index(k) for k in keys]
        assert positions == sorted(positions)

    @given(data=manifests())
    def test_webtrigger_category(self, data: dict[str, Any]) -> None:
        """WEB_TRIGGER exactly for web trigger targets."""
        modules = decode_manifest(data).modules
        targets = {t["function"] for t in data["modules"]["webtrigger"]}
        for entry in classify(modules):
            expected = Category.WEB_TRIGGER if entry.function.key in targets else Category.INVOKABLE
            assert entry.category is expected
