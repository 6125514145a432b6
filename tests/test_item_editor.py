"""
Phrase list editor tests
"""

import anyio
import pytest

from azkar.core.item_editor import ItemListEditor
from azkar.core.sync_client import SyncClient

pytestmark = pytest.mark.anyio


async def start_editor(bridge):
    client = SyncClient(bridge)
    editor = ItemListEditor(client)
    await client.start()
    return client, editor


class TestAdd:
    async def test_whitespace_is_not_sent_and_not_cleared(self, bridge):
        _, editor = await start_editor(bridge)
        editor.set_new_item_text(" ")

        assert await editor.add() is False

        assert bridge.commands("add_zekr") == []
        assert editor.new_item_text == " "

    async def test_sends_untrimmed_text_and_clears_input(self, bridge):
        _, editor = await start_editor(bridge)
        editor.set_new_item_text("  سبحان الله وبحمده ")

        assert await editor.add() is True

        assert bridge.calls[-1] == ("add_zekr", {"text": "  سبحان الله وبحمده "})
        assert editor.new_item_text == ""
        assert [p.text for p in editor.items][-1] == "  سبحان الله وبحمده "

    async def test_failure_keeps_input(self, bridge):
        _, editor = await start_editor(bridge)
        bridge.failing.add("add_zekr")
        editor.set_new_item_text("الله أكبر")

        assert await editor.add() is False

        assert editor.new_item_text == "الله أكبر"
        assert len(editor.items) == 2

    async def test_list_comes_from_confirmed_snapshot_only(self, bridge):
        _, editor = await start_editor(bridge)
        gate = bridge.hold("add_zekr")
        editor.set_new_item_text("الله أكبر")

        async with anyio.create_task_group() as tg:
            tg.start_soon(editor.add)
            await anyio.wait_all_tasks_blocked()
            assert len(editor.items) == 2
            gate.set()

        assert len(editor.items) == 3
        assert editor.items[-1].id == "101"


class TestEditSession:
    async def test_begin_edit_starts_with_current_text(self, bridge):
        _, editor = await start_editor(bridge)

        assert editor.begin_edit("1") is True

        assert editor.session.target_id == "1"
        assert editor.session.draft_text == "سبحان الله"
        assert editor.is_editing("1")
        assert not editor.is_editing("2")

    async def test_begin_edit_unknown_id_is_ignored(self, bridge):
        _, editor = await start_editor(bridge)

        assert editor.begin_edit("missing") is False
        assert editor.session is None

    async def test_switching_target_discards_draft(self, bridge):
        _, editor = await start_editor(bridge)
        editor.begin_edit("1")
        editor.update_draft("unsaved")

        editor.begin_edit("2")

        assert editor.session.target_id == "2"
        assert editor.session.draft_text == "الحمد لله"

    async def test_save_sends_draft_and_closes_session(self, bridge):
        _, editor = await start_editor(bridge)
        editor.begin_edit("2")
        editor.update_draft("الحمد لله رب العالمين")

        assert await editor.save() is True

        assert bridge.calls[-1] == (
            "update_zekr",
            {"id": "2", "text": "الحمد لله رب العالمين"},
        )
        assert editor.session is None
        assert editor.items[1].text == "الحمد لله رب العالمين"

    async def test_empty_draft_keeps_session_open(self, bridge):
        _, editor = await start_editor(bridge)
        editor.begin_edit("1")
        editor.update_draft("   ")

        assert await editor.save() is False

        assert bridge.commands("update_zekr") == []
        assert editor.session.target_id == "1"
        assert editor.session.draft_text == "   "

    async def test_failed_save_keeps_draft(self, bridge):
        _, editor = await start_editor(bridge)
        bridge.failing.add("update_zekr")
        editor.begin_edit("1")
        editor.update_draft("draft")

        assert await editor.save() is False

        assert editor.session.draft_text == "draft"
        assert editor.items[0].text == "سبحان الله"

    async def test_save_without_session_is_noop(self, bridge):
        _, editor = await start_editor(bridge)

        assert await editor.save() is False
        assert bridge.commands("update_zekr") == []

    async def test_cancel_discards_without_command(self, bridge):
        _, editor = await start_editor(bridge)
        editor.begin_edit("1")
        editor.update_draft("draft")

        editor.cancel()

        assert editor.session is None
        assert bridge.commands("update_zekr") == []

    async def test_session_opened_during_save_survives(self, bridge):
        _, editor = await start_editor(bridge)
        gate = bridge.hold("update_zekr")
        editor.begin_edit("1")
        editor.update_draft("first")

        async with anyio.create_task_group() as tg:
            tg.start_soon(editor.save)
            await anyio.wait_all_tasks_blocked()
            editor.begin_edit("2")
            gate.set()

        assert editor.session is not None
        assert editor.session.target_id == "2"
        assert editor.items[0].text == "first"


class TestRemove:
    async def test_remove_is_sent_immediately(self, bridge):
        _, editor = await start_editor(bridge)

        assert await editor.remove("1") is True

        assert bridge.calls[-1] == ("remove_zekr", {"id": "1"})
        assert [p.id for p in editor.items] == ["2"]

    async def test_removing_edit_target_clears_session(self, bridge):
        _, editor = await start_editor(bridge)
        editor.begin_edit("1")

        assert await editor.remove("1") is True

        assert editor.session is None

    async def test_removing_other_phrase_keeps_session(self, bridge):
        _, editor = await start_editor(bridge)
        editor.begin_edit("1")
        editor.update_draft("draft")

        await editor.remove("2")

        assert editor.session.target_id == "1"
        assert editor.session.draft_text == "draft"

    async def test_external_removal_clears_session(self, bridge):
        _, editor = await start_editor(bridge)
        editor.begin_edit("2")

        bridge.state["azkar"] = [item for item in bridge.state["azkar"] if item["id"] != "2"]
        await bridge.notify()

        assert editor.session is None
        assert [p.id for p in editor.items] == ["1"]

    async def test_failed_remove_keeps_list(self, bridge):
        _, editor = await start_editor(bridge)
        bridge.failing.add("remove_zekr")

        assert await editor.remove("1") is False

        assert [p.id for p in editor.items] == ["1", "2"]
