import pytest

from offergrab.config import FrozenConfig
from offergrab.constants import INTERACTION_KEY
from offergrab.session import InteractionTracker, MemorySessionStore


@pytest.mark.unit
def test_fresh_session_allows_redirects(memory_store):
    tracker = InteractionTracker(memory_store)

    assert not tracker.has_interacted()
    assert tracker.should_redirect()


@pytest.mark.unit
def test_interaction_cancels_redirects(memory_store):
    tracker = InteractionTracker(memory_store)

    tracker.mark_interaction()

    assert tracker.has_interacted()
    assert not tracker.should_redirect()
    assert memory_store.get(INTERACTION_KEY) == "true"


@pytest.mark.unit
def test_mark_interaction_is_idempotent(memory_store):
    tracker = InteractionTracker(memory_store)

    tracker.mark_interaction()
    tracker.mark_interaction()

    assert tracker.has_interacted()


@pytest.mark.unit
def test_state_is_shared_through_the_store(memory_store):
    InteractionTracker(memory_store).mark_interaction()

    assert InteractionTracker(memory_store).has_interacted()
    assert not InteractionTracker(MemorySessionStore()).has_interacted()


@pytest.mark.unit
@pytest.mark.parametrize("stored", ["false", "1", "True", ""])
def test_only_the_exact_flag_counts(stored):
    store = MemorySessionStore({INTERACTION_KEY: stored})

    assert not InteractionTracker(store).has_interacted()


@pytest.mark.unit
def test_clear_interaction_resets_the_flag(memory_store):
    tracker = InteractionTracker(memory_store)
    tracker.mark_interaction()

    tracker.clear_interaction()

    assert tracker.should_redirect()
    assert memory_store.get(INTERACTION_KEY) is None


@pytest.mark.unit
def test_session_end_resets_the_flag(memory_store):
    tracker = InteractionTracker(memory_store)
    tracker.mark_interaction()

    memory_store.end()

    assert not tracker.has_interacted()


@pytest.mark.unit
def test_from_config_uses_configured_key(memory_store):
    tracker = InteractionTracker.from_config(
        memory_store, FrozenConfig(interaction_key="lp_clicked")
    )

    tracker.mark_interaction()

    assert memory_store.get("lp_clicked") == "true"
    assert memory_store.get(INTERACTION_KEY) is None
