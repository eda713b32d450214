import pytest
from pydantic import ValidationError

from pdfnotes.app.events import MemoryVaultEventQueue, VaultEvent, VaultEventType

pytestmark = pytest.mark.anyio


async def test_queue_yields_events_in_order_until_closed():
    queue = MemoryVaultEventQueue()

    await queue.publish(VaultEvent(path="a-notes.md"))
    await queue.publish(VaultEvent(path="b-notes.md"))
    await queue.close()
    await queue.publish(VaultEvent(path="dropped.md"))

    paths = [event.path async for event in queue.stream()]

    assert paths == ["a-notes.md", "b-notes.md"]


def test_event_defaults_and_immutability():
    event = VaultEvent(path="a-notes.md")

    assert event.event_type is VaultEventType.FILE_MODIFIED
    assert event.timestamp.tzinfo is not None

    with pytest.raises(ValidationError):
        event.path = "other.md"


def test_event_requires_path():
    with pytest.raises(ValidationError):
        VaultEvent(path="")
