import uuid
from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from crm.database.base import utcnow
from crm.exceptions.base import DuplicateError, InvalidFieldError, RepositoryError
from crm.mappings import activity as activity_map
from crm.mappings import role as role_map
from crm.models import Activity, Role
from crm.repositories import ActivityRepository, RoleRepository
from crm.schemas.activity import UpdateActivityCommand
from crm.schemas.role import CreateRoleCommand


class FakeOdbcError(Exception):
    """Stands in for a pyodbc error: native error number plus the server message."""

    def __init__(self, number: int, message: str):
        super().__init__(message)
        self.number = number


@pytest.fixture
def activity_repo(db_session) -> ActivityRepository:
    return ActivityRepository(db_session)


@pytest.fixture
def role_repo(db_session) -> RoleRepository:
    return RoleRepository(db_session)


def new_role(user_id, name: str) -> Role:
    return role_map.from_create(CreateRoleCommand(name=name, created_by=user_id))


@pytest.mark.asyncio
class TestBaseRepositoryAdd:

    async def test_add_assigns_id_and_audit_fields(self, make_activity, user_id):
        """
        Behavior:
            - A created entity has an id, is active, and carries created_by == modified_by
              and created_date == modified_date.
        """
        activity = await make_activity()

        assert isinstance(activity.activity_id, uuid.UUID)
        assert activity.active is True
        assert activity.created_by == user_id
        assert activity.modified_by == user_id
        assert activity.created_date == activity.modified_date

    async def test_add_keeps_client_supplied_id(self, make_activity):
        wanted = uuid.uuid4()
        activity = await make_activity(activity_id=wanted)
        assert activity.activity_id == wanted

    async def test_add_loads_lookup_relationships(self, make_activity, activity_type):
        activity = await make_activity()
        assert activity.activity_type is not None
        assert activity.activity_type.label == activity_type.type

    async def test_add_missing_required_fields_reports_all(self, activity_repo, user_id):
        """
        Behavior:
            - Missing NOT NULL columns are reported together, before any SQL runs.
        """
        now = utcnow()
        entity = Activity(
            created_by=user_id, created_date=now, modified_by=user_id, modified_date=now, active=True
        )

        with pytest.raises(RepositoryError) as exc_info:
            await activity_repo.add(entity)

        assert "Missing required field" in str(exc_info.value)
        assert set(exc_info.value.fields) == {"activity_type_id", "activity_status_id", "subject"}


@pytest.mark.asyncio
class TestBaseRepositoryAddDuplicates:

    async def test_unique_precheck_raises_duplicate_error(self, role_repo, user_id):
        await role_repo.add(new_role(user_id, "Sales"))

        with pytest.raises(DuplicateError) as exc_info:
            await role_repo.add(new_role(user_id, "Sales"))

        assert exc_info.value.fields == ["name"]
        assert exc_info.value.http_status() == 409

    async def test_integrity_error_on_flush_is_mapped(self, monkeypatch, role_repo, user_id):
        """
        Behavior:
            - Simulate SQL Server error 2627 raised by flush (a race the pre-check cannot see).
            - The repository raises DuplicateError and the session remains usable.

        Fixtures:
            - monkeypatch: replaces db.flush for the first call only
        """
        orig_flush = role_repo.db.flush
        calls = {"n": 0}

        async def fake_flush(*args, **kwargs):
            calls["n"] += 1
            if calls["n"] == 1:
                raise IntegrityError(
                    "INSERT INTO roles ...",
                    params={},
                    orig=FakeOdbcError(
                        2627,
                        "Violation of UNIQUE KEY constraint 'uq_roles_name'. "
                        "Cannot insert duplicate key in object 'dbo.roles'. (2627)",
                    ),
                )
            return await orig_flush(*args, **kwargs)

        monkeypatch.setattr(role_repo.db, "flush", fake_flush)

        with pytest.raises(DuplicateError) as exc_info:
            await role_repo.add(new_role(user_id, "Support"))

        assert exc_info.value.constraint == "uq_roles_name"
        assert "already exists" in str(exc_info.value)

        role = await role_repo.add(new_role(user_id, "Support"))
        assert role.role_id is not None

    async def test_not_null_error_on_flush_is_repository_error(self, monkeypatch, role_repo, user_id):
        async def fake_flush(*args, **kwargs):
            raise IntegrityError(
                "INSERT INTO roles ...",
                params={},
                orig=FakeOdbcError(
                    515,
                    "Cannot insert the value NULL into column 'name', table 'VibeCRM.dbo.roles'; "
                    "column does not allow nulls. INSERT fails. (515)",
                ),
            )

        monkeypatch.setattr(role_repo.db, "flush", fake_flush)

        with pytest.raises(RepositoryError) as exc_info:
            await role_repo.add(new_role(user_id, "Finance"))

        assert not isinstance(exc_info.value, DuplicateError)
        assert exc_info.value.fields == ["name"]


@pytest.mark.asyncio
class TestBaseRepositoryRead:

    async def test_get_by_id_returns_entity(self, activity_repo, make_activity):
        created = await make_activity()
        fetched = await activity_repo.get_by_id(created.activity_id)
        assert fetched is not None
        assert fetched.activity_id == created.activity_id

    async def test_get_by_id_missing_returns_none(self, activity_repo):
        assert await activity_repo.get_by_id(uuid.uuid4()) is None

    async def test_exists(self, activity_repo, make_activity):
        created = await make_activity()
        assert await activity_repo.exists(created.activity_id) is True
        assert await activity_repo.exists(uuid.uuid4()) is False

    async def test_find_by_field_and_invalid_field(self, activity_repo, make_activity):
        await make_activity(subject="Quarterly review")

        found = await activity_repo.find_by_field("subject", "Quarterly review")
        assert found is not None

        with pytest.raises(InvalidFieldError) as exc_info:
            await activity_repo.find_by_field("no_such_field", "x")
        assert exc_info.value.fields == ["no_such_field"]
        assert exc_info.value.http_status() == 422

    async def test_get_all_order_by_field(self, activity_repo, make_activity):
        for subject in ("Charlie", "Alpha", "Bravo"):
            await make_activity(subject=subject)

        activities = await activity_repo.get_all(order_by="subject")
        assert [a.subject for a in activities] == ["Alpha", "Bravo", "Charlie"]

    async def test_get_all_ignores_unknown_order_by(self, activity_repo, make_activity, caplog):
        await make_activity()
        await make_activity()

        with caplog.at_level("WARNING"):
            activities = await activity_repo.get_all(order_by="not_a_column")

        assert len(activities) == 2
        assert any(r.getMessage() == "repo.order_by.ignored" for r in caplog.records)

    async def test_get_page_and_count(self, activity_repo, make_activity):
        for i in range(5):
            await make_activity(subject=f"Task {i}")

        first = await activity_repo.get_page(offset=0, limit=2, order_by="subject")
        last = await activity_repo.get_page(offset=4, limit=2, order_by="subject")

        assert [a.subject for a in first] == ["Task 0", "Task 1"]
        assert [a.subject for a in last] == ["Task 4"]
        assert await activity_repo.count() == 5


@pytest.mark.asyncio
class TestBaseRepositoryUpdate:

    async def test_update_changes_fields_and_advances_modified_date(
        self, activity_repo, make_activity, activity_command, user_id
    ):
        created = await make_activity(subject="Before")
        created_date = created.created_date
        previous_modified = created.modified_date
        editor = uuid.uuid4()

        command = UpdateActivityCommand(
            **activity_command(subject="After").model_dump(exclude={"activity_id", "created_by"}),
            activity_id=created.activity_id,
            modified_by=editor,
        )
        activity_map.apply_update(created, command)
        updated = await activity_repo.update(created)

        assert updated is not None
        assert updated.subject == "After"
        assert updated.modified_by == editor
        assert updated.modified_date > previous_modified
        # creation audit is immutable
        assert updated.created_by == user_id
        assert updated.created_date == created_date

    async def test_update_inactive_entity_returns_none(self, activity_repo, make_activity, caplog):
        created = await make_activity()
        assert await activity_repo.delete(created.activity_id) is True

        created.subject = "Changed after delete"
        with caplog.at_level("WARNING"):
            result = await activity_repo.update(created)

        assert result is None
        assert any(r.getMessage() == "repo.update.not_found" for r in caplog.records)


@pytest.mark.asyncio
class TestBaseRepositorySoftDelete:

    async def test_deleted_entity_is_hidden_from_reads(self, activity_repo, make_activity):
        kept = await make_activity(subject="Kept")
        removed = await make_activity(subject="Removed")

        assert await activity_repo.delete(removed.activity_id) is True

        assert await activity_repo.get_by_id(removed.activity_id) is None
        assert await activity_repo.exists(removed.activity_id) is False
        assert [a.activity_id for a in await activity_repo.get_all()] == [kept.activity_id]
        assert await activity_repo.count() == 1

    async def test_delete_keeps_the_row_and_stamps_modified_by(self, activity_repo, make_activity, db_session):
        created = await make_activity()
        deleter = uuid.uuid4()

        await activity_repo.delete(created.activity_id, modified_by=deleter)

        row = await db_session.get(Activity, created.activity_id)
        assert row is not None
        assert row.active is False
        assert row.modified_by == deleter

    async def test_delete_twice_returns_false(self, activity_repo, make_activity):
        created = await make_activity()
        assert await activity_repo.delete(created.activity_id) is True
        assert await activity_repo.delete(created.activity_id) is False

    async def test_delete_missing_returns_false(self, activity_repo):
        assert await activity_repo.delete(uuid.uuid4()) is False


@pytest.mark.asyncio
class TestActivityQueries:

    async def test_completed_and_incomplete(self, activity_repo, make_activity, user_id):
        done = await make_activity(subject="Done", completed_date=utcnow(), completed_by=user_id, is_completed=True)
        open_ = await make_activity(subject="Open")

        assert [a.activity_id for a in await activity_repo.get_completed()] == [done.activity_id]
        assert [a.activity_id for a in await activity_repo.get_incomplete()] == [open_.activity_id]

    async def test_due_date_range_and_assignment(self, activity_repo, make_activity):
        assignee = uuid.uuid4()
        soon = await make_activity(due_date=utcnow() + timedelta(days=1), assigned_user_id=assignee)
        await make_activity(due_date=utcnow() + timedelta(days=20))

        in_range = await activity_repo.get_by_due_date_range(utcnow(), utcnow() + timedelta(days=5))
        assert [a.activity_id for a in in_range] == [soon.activity_id]

        assigned = await activity_repo.get_by_assigned_user(assignee)
        assert [a.activity_id for a in assigned] == [soon.activity_id]

    async def test_queries_skip_soft_deleted(self, activity_repo, make_activity, activity_type):
        created = await make_activity()
        await activity_repo.delete(created.activity_id)

        assert await activity_repo.get_by_activity_type(activity_type.activity_type_id) == []
