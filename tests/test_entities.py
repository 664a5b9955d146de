"""Tests for entities.py — one remote call per accessor, envelope unwrapping."""

import pytest
from conftest import FakeTransport

from weeek_cli import entities
from weeek_cli.exceptions import CliError, TransportError


class TestReads:
    @pytest.mark.asyncio
    async def test_list_projects(self):
        t = FakeTransport({("GET", "tm/projects"): {"success": True, "projects": [{"id": 1}]}})
        assert await entities.list_projects(t) == [{"id": 1}]

    @pytest.mark.asyncio
    async def test_list_projects_missing_field(self):
        t = FakeTransport({("GET", "tm/projects"): {"success": True}})
        assert await entities.list_projects(t) == []

    @pytest.mark.asyncio
    async def test_list_boards_passes_project_id(self):
        t = FakeTransport({("GET", "tm/boards"): {"boards": [{"id": 3}]}})
        assert await entities.list_boards(t, 5) == [{"id": 3}]
        assert t.calls[0]["params"] == {"projectId": 5}

    @pytest.mark.asyncio
    async def test_list_columns(self):
        t = FakeTransport({("GET", "tm/board-columns"): {"boardColumns": [{"id": 10}]}})
        assert await entities.list_columns(t, 3) == [{"id": 10}]
        assert t.calls[0]["params"] == {"boardId": 3}

    @pytest.mark.asyncio
    async def test_list_tasks_filters(self):
        t = FakeTransport({("GET", "tm/tasks"): {"tasks": []}})
        assert await entities.list_tasks(t, boardId=3) == []
        assert t.calls[0]["params"] == {"boardId": 3}

    @pytest.mark.asyncio
    async def test_list_tasks_without_filters(self):
        t = FakeTransport({("GET", "tm/tasks"): {"tasks": [{"id": 1}]}})
        await entities.list_tasks(t)
        assert t.calls[0]["params"] is None

    @pytest.mark.asyncio
    async def test_get_task_unwraps(self):
        t = FakeTransport({("GET", "tm/tasks/7"): {"success": True, "task": {"id": 7}}})
        assert await entities.get_task(t, 7) == {"id": 7}

    @pytest.mark.asyncio
    async def test_get_task_without_envelope(self):
        t = FakeTransport({("GET", "tm/tasks/7"): {"id": 7}})
        assert await entities.get_task(t, 7) == {"id": 7}

    @pytest.mark.asyncio
    async def test_list_users_normalizes_members(self):
        t = FakeTransport(
            {
                ("GET", "ws/members"): {
                    "members": [
                        {"id": "u1", "firstName": "Ann", "lastName": "Lee", "email": "a@x.io"},
                        {"id": "u2", "email": "b@x.io"},
                    ]
                }
            }
        )
        users = await entities.list_users(t)
        assert [u["name"] for u in users] == ["Ann Lee", "b@x.io"]
        assert users[0]["raw"]["firstName"] == "Ann"

    @pytest.mark.asyncio
    async def test_errors_propagate(self):
        t = FakeTransport({("GET", "tm/projects"): TransportError(401, "Unauthorized", "")})
        with pytest.raises(TransportError):
            await entities.list_projects(t)


class TestTaskPayload:
    def test_defaults_type_and_drops_none(self):
        assert entities.build_task_payload({"title": "A", "boardId": None}) == {
            "type": "action",
            "title": "A",
        }

    def test_board_adds_location(self):
        payload = entities.build_task_payload(
            {"title": "A", "projectId": 1, "boardId": 2, "boardColumnId": 3}
        )
        assert payload["locations"] == [{"projectId": 1, "boardId": 2, "boardColumnId": 3}]


class TestMutations:
    @pytest.mark.asyncio
    async def test_create_task(self):
        t = FakeTransport({("POST", "tm/tasks"): {"task": {"id": 50, "title": "A"}}})
        assert await entities.create_task(t, {"title": "A"}) == {"id": 50, "title": "A"}
        assert t.calls[0]["body"] == {"type": "action", "title": "A"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "func,path,body",
        [
            (entities.complete_task, "tm/tasks/4/complete", None),
            (entities.uncomplete_task, "tm/tasks/4/un-complete", None),
            (entities.start_timer, "tm/tasks/4/start-timer", None),
            (entities.stop_timer, "tm/tasks/4/stop-timer", None),
        ],
    )
    async def test_task_actions(self, func, path, body):
        t = FakeTransport({("POST", path): {"success": True}})
        assert await func(t, 4) == {"success": True}
        assert t.calls[0]["body"] == body

    @pytest.mark.asyncio
    async def test_move_task(self):
        t = FakeTransport({("POST", "tm/tasks/4/board-column"): {"success": True}})
        await entities.move_task(t, 4, 12)
        assert t.calls[0]["body"] == {"boardColumnId": 12}

    @pytest.mark.asyncio
    async def test_add_assignee(self):
        t = FakeTransport({("POST", "tm/tasks/4/assignees"): {"success": True}})
        await entities.add_assignee(t, 4, "u1")
        assert t.calls[0]["body"] == {"userId": "u1"}

    @pytest.mark.asyncio
    async def test_move_column(self):
        t = FakeTransport({("POST", "tm/board-columns/9/move"): {"success": True}})
        await entities.move_column(t, 9, 2)
        assert t.calls[0]["body"] == {"position": 2}

    @pytest.mark.asyncio
    async def test_archive_project(self):
        t = FakeTransport({("POST", "tm/projects/1/un-archive"): {"success": True}})
        await entities.unarchive_project(t, 1)
        assert t.calls[0]["path"] == "tm/projects/1/un-archive"

    @pytest.mark.asyncio
    async def test_upload_attachment(self, tmp_path):
        f = tmp_path / "notes.txt"
        f.write_bytes(b"hello")
        t = FakeTransport({("POST", "tm/tasks/4/attachments"): {"attachments": [{"id": "a"}]}})
        assert await entities.upload_attachment(t, 4, str(f)) == [{"id": "a"}]
        assert t.calls[0]["files"] == {"files": ("notes.txt", b"hello", "text/plain")}

    @pytest.mark.asyncio
    async def test_upload_missing_file(self, tmp_path):
        t = FakeTransport()
        with pytest.raises(CliError, match="File not found"):
            await entities.upload_attachment(t, 4, str(tmp_path / "missing.bin"))
        assert t.calls == []
