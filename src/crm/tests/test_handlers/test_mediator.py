"""
Mediator and generic handler tests, run against the real catalog and the test
database session.
"""
import uuid
from decimal import Decimal

import pytest

from crm import models
from crm.exceptions.base import BadRequestException, ValidationException
from crm.handlers import (
    FEATURES,
    CreateCommand,
    DeleteCommand,
    FindOneQuery,
    GetAllQuery,
    GetByIdQuery,
    GetPagedQuery,
    LinkCommand,
    ListByQuery,
    ListLinksQuery,
    Mediator,
    ScalarQuery,
    UnlinkCommand,
    UpdateCommand,
)
from crm.schemas.activity import UpdateActivityCommand
from crm.schemas.envelope import PagedResult
from crm.schemas.lookups import CreateLookupCommand
from crm.validators.rules import NIL_UUID


@pytest.fixture
def mediator(db_session) -> Mediator:
    return Mediator(db_session, FEATURES)


class TestMediatorValidation:

    async def test_unknown_feature_is_bad_request(self, mediator):
        with pytest.raises(BadRequestException):
            await mediator.send(GetAllQuery("no-such-feature"))

    async def test_create_collects_every_error(self, mediator):
        with pytest.raises(ValidationException) as exc_info:
            await mediator.send(CreateCommand("activities", FEATURES["activities"].create_schema()))

        assert exc_info.value.errors == [
            "Activity type is required.",
            "Activity status is required.",
            "Subject is required.",
            "Created by is required.",
        ]

    async def test_nil_id_rejected_before_any_handler_runs(self, mediator):
        with pytest.raises(ValidationException) as exc_info:
            await mediator.send(GetByIdQuery("invoices", NIL_UUID))
        assert exc_info.value.errors == ["Invoice ID is required."]

    async def test_update_reports_missing_id_once(self, mediator, user_id):
        """
        Behavior:
          - Both the payload validator and the URL id validator flag the missing id;
            the message appears once.
        """
        payload = UpdateActivityCommand(subject="x", modified_by=user_id)
        with pytest.raises(ValidationException) as exc_info:
            await mediator.send(UpdateCommand("activities", NIL_UUID, payload))

        assert exc_info.value.errors.count("Activity ID is required.") == 1

    async def test_paging_bounds(self, mediator):
        with pytest.raises(ValidationException) as exc_info:
            await mediator.send(GetPagedQuery("activities", 0, 0))
        assert exc_info.value.errors == [
            "Page number must be greater than zero.",
            "Page size must be greater than zero.",
        ]

    async def test_registered_validator_runs_after_defaults(self, mediator):
        mediator.register_validator(GetAllQuery, "roles", lambda request: ["Roles are read-only today."])

        with pytest.raises(ValidationException) as exc_info:
            await mediator.send(GetAllQuery("roles"))
        assert exc_info.value.errors == ["Roles are read-only today."]

    async def test_link_requires_both_ids(self, mediator):
        with pytest.raises(ValidationException) as exc_info:
            await mediator.send(LinkCommand("team-users", NIL_UUID, NIL_UUID))
        assert exc_info.value.errors == ["Team ID is required.", "User ID is required."]


class TestCrudHandlers:

    async def test_create_get_update_delete_roundtrip(self, mediator, activity_command, user_id):
        created = await mediator.send(CreateCommand("activities", activity_command(subject="First")))
        activity_id = created.activity.activity_id
        assert created.activity_type_name == "Call"
        assert created.audit.created_by == user_id

        fetched = await mediator.send(GetByIdQuery("activities", activity_id))
        assert fetched.activity.subject == "First"

        editor = uuid.uuid4()
        payload = UpdateActivityCommand(
            **activity_command(subject="Second").model_dump(exclude={"activity_id", "created_by"}),
            activity_id=activity_id,
            modified_by=editor,
        )
        updated = await mediator.send(UpdateCommand("activities", activity_id, payload))
        assert updated.activity.subject == "Second"
        assert updated.audit.modified_by == editor
        assert updated.audit.created_by == user_id

        assert await mediator.send(DeleteCommand("activities", activity_id, editor)) is True
        assert await mediator.send(GetByIdQuery("activities", activity_id)) is None
        assert await mediator.send(GetAllQuery("activities")) == []

    async def test_update_missing_returns_none_and_warns(self, mediator, activity_command, caplog):
        missing = uuid.uuid4()
        payload = UpdateActivityCommand(
            **activity_command().model_dump(exclude={"activity_id", "created_by"}),
            activity_id=missing,
            modified_by=uuid.uuid4(),
        )
        with caplog.at_level("WARNING"):
            assert await mediator.send(UpdateCommand("activities", missing, payload)) is None

        assert f"Activity with ID {missing} not found or is already inactive" in caplog.text

    async def test_delete_missing_lookup_warns(self, mediator, caplog):
        missing = uuid.uuid4()
        with caplog.at_level("WARNING"):
            assert await mediator.send(DeleteCommand("invoice-statuses", missing)) is False

        assert f"InvoiceStatus with ID {missing} not found or is already inactive" in caplog.text

    async def test_paged_result(self, mediator, make_activity):
        for i in range(5):
            await make_activity(subject=f"Task {i}")

        page = await mediator.send(GetPagedQuery("activities", 2, 2))

        assert isinstance(page, PagedResult)
        assert len(page.items) == 2
        assert page.total_count == 5
        assert page.total_pages == 3
        assert page.has_previous_page is True
        assert page.has_next_page is True

    async def test_page_size_is_capped(self, mediator, make_activity):
        await make_activity()
        page = await mediator.send(GetPagedQuery("activities", 1, 10_000))
        assert page.page_size == 100


class TestQueryHandlers:

    async def test_lookup_default_and_label(self, mediator, make_lookup, user_id):
        await mediator.send(
            CreateCommand("quote-statuses", CreateLookupCommand(label="Sent", ordinal_position=2, created_by=user_id))
        )
        await make_lookup(models.QuoteStatus, "Draft", ordinal_position=1)

        default = await mediator.send(FindOneQuery("quote-statuses", "get_default"))
        assert default.lookup.label == "Draft"

        found = await mediator.send(ListByQuery("quote-statuses", "get_by_label", ("Sent",)))
        assert [dto.label for dto in found] == ["Sent"]

    async def test_find_one_missing_is_none(self, mediator):
        assert await mediator.send(FindOneQuery("invoices", "get_by_number", ("INV-404",))) is None

    async def test_scalar_total(self, mediator, make_invoice):
        invoice = await make_invoice()
        total = await mediator.send(
            ScalarQuery("payment-line-items", "get_total_paid_for_invoice", (invoice.invoice_id,))
        )
        assert total == Decimal("0.00")


class TestJunctionHandlers:

    async def test_link_list_unlink(self, mediator, make_team, make_user, caplog):
        team = await make_team()
        user = await make_user()

        assert await mediator.send(LinkCommand("team-users", team.team_id, user.user_id)) is True
        # linking twice is not an error
        assert await mediator.send(LinkCommand("team-users", team.team_id, user.user_id)) is True

        assert await mediator.send(ListLinksQuery("team-users", first_id=team.team_id)) == [user.user_id]
        assert await mediator.send(ListLinksQuery("team-users", second_id=user.user_id)) == [team.team_id]

        assert await mediator.send(UnlinkCommand("team-users", team.team_id, user.user_id)) is True
        with caplog.at_level("WARNING"):
            assert await mediator.send(UnlinkCommand("team-users", team.team_id, user.user_id)) is False
        assert "not found or is already inactive" in caplog.text
