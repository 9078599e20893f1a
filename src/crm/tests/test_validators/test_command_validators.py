import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from crm.database.base import utcnow
from crm.schemas.activity import CreateActivityCommand, UpdateActivityCommand
from crm.schemas.company import UpdateCompanyCommand
from crm.schemas.lookups import CreateLookupCommand, UpdateLookupCommand
from crm.schemas.quote import CreateQuoteLineItemCommand
from crm.schemas.sales_order import CreateSalesOrderCommand
from crm.schemas.user import CreateUserCommand
from crm.validators.activity import validate_create_activity, validate_update_activity
from crm.validators.lookups import lookup_validators
from crm.validators.rules import NIL_UUID, collect, is_missing_id, not_after, optional_id, required_id
from crm.validators.sales import (
    validate_create_quote_line_item,
    validate_create_sales_order,
    validate_update_company,
)
from crm.validators.security import validate_create_user


def valid_activity(**overrides) -> dict:
    data = {
        "activity_type_id": uuid.uuid4(),
        "activity_status_id": uuid.uuid4(),
        "subject": "Call back",
        "due_date": utcnow() + timedelta(days=1),
        "created_by": uuid.uuid4(),
    }
    data.update(overrides)
    return data


class TestRules:

    def test_nil_uuid_counts_as_missing(self):
        assert is_missing_id(None) is True
        assert is_missing_id(NIL_UUID) is True
        assert is_missing_id(uuid.uuid4()) is False

    def test_required_and_optional_id(self):
        assert required_id(None, "x") == "x"
        assert required_id(NIL_UUID, "x") == "x"
        assert optional_id(None, "x") is None
        assert optional_id(NIL_UUID, "x") == "x"

    def test_not_after_needs_both_dates(self):
        now = utcnow()
        assert not_after(now, None, "x") is None
        assert not_after(now + timedelta(days=1), now, "x") == "x"
        assert not_after(now, now, "x") is None

    def test_collect_keeps_order_and_drops_none(self):
        assert collect("a", None, "b", None) == ["a", "b"]


class TestActivityValidators:

    def test_valid_create_has_no_errors(self):
        assert validate_create_activity(CreateActivityCommand(**valid_activity())) == []

    def test_empty_create_reports_every_missing_field(self):
        """
        Behavior:
          - Every failed rule is reported, in declaration order, not just the first one.
        """
        errors = validate_create_activity(CreateActivityCommand())
        assert errors == [
            "Activity type is required.",
            "Activity status is required.",
            "Subject is required.",
            "Created by is required.",
        ]

    def test_explicit_nil_id_is_rejected_on_create(self):
        errors = validate_create_activity(CreateActivityCommand(**valid_activity(activity_id=NIL_UUID)))
        assert errors == ["Activity ID is required."]

    def test_update_requires_id(self):
        command = UpdateActivityCommand(**{**valid_activity(created_by=None), "modified_by": uuid.uuid4()})
        assert validate_update_activity(command) == ["Activity ID is required."]

    def test_past_due_date_only_for_incomplete(self):
        yesterday = utcnow() - timedelta(days=2)
        incomplete = CreateActivityCommand(**valid_activity(due_date=yesterday))
        assert "Due date cannot be in the past for incomplete activities." in validate_create_activity(incomplete)

        completed = CreateActivityCommand(
            **valid_activity(due_date=yesterday, is_completed=True, completed_date=utcnow(), completed_by=uuid.uuid4())
        )
        assert validate_create_activity(completed) == []

    def test_completed_needs_date_and_user(self):
        errors = validate_create_activity(CreateActivityCommand(**valid_activity(is_completed=True)))
        assert errors == [
            "Completed date is required when activity is marked as completed.",
            "Completed by is required when activity is marked as completed.",
        ]

    def test_start_after_due_and_long_subject(self):
        due = utcnow() + timedelta(days=1)
        errors = validate_create_activity(
            CreateActivityCommand(**valid_activity(subject="s" * 201, due_date=due, start_date=due + timedelta(hours=1)))
        )
        assert errors == [
            "Subject cannot exceed 200 characters.",
            "Start date must be before or equal to due date.",
        ]

    def test_offset_aware_dates_are_normalized_to_utc(self):
        command = CreateActivityCommand(
            **valid_activity(due_date=datetime(2099, 1, 1, 5, 0, tzinfo=timezone(timedelta(hours=5))))
        )

        assert command.due_date == datetime(2099, 1, 1, 0, 0)
        assert command.due_date.tzinfo is None
        assert validate_create_activity(command) == []

    def test_aware_past_due_date_is_still_reported(self):
        yesterday = datetime.now(timezone.utc) - timedelta(days=2)
        errors = validate_create_activity(CreateActivityCommand(**valid_activity(due_date=yesterday)))
        assert errors == ["Due date cannot be in the past for incomplete activities."]

    def test_mixed_offsets_compare_as_instants(self):
        """
        Behavior:
          - 09:00+02:00 is 07:00 UTC, so it is not after a naive 08:00 due date.
          - 11:00+02:00 is 09:00 UTC, so it is.
        """
        due = "2099-01-02T08:00:00"
        ok = CreateActivityCommand(**valid_activity(start_date="2099-01-02T09:00:00+02:00", due_date=due))
        late = CreateActivityCommand(**valid_activity(start_date="2099-01-02T11:00:00+02:00", due_date=due))

        assert validate_create_activity(ok) == []
        assert validate_create_activity(late) == ["Start date must be before or equal to due date."]


class TestLookupValidators:

    @pytest.mark.parametrize(
        "label_field, caption",
        [("type", "Type name"), ("status", "Status name"), ("name", "Name")],
    )
    def test_label_caption_follows_the_column(self, label_field, caption):
        validate_create, _ = lookup_validators("Invoice status", label_field)
        errors = validate_create(CreateLookupCommand(created_by=uuid.uuid4()))
        assert errors == [f"{caption} is required."]

    def test_update_names_the_lookup(self):
        _, validate_update = lookup_validators("Sales order status", "status")
        errors = validate_update(UpdateLookupCommand(label="Open", ordinal_position=-1))
        assert errors == [
            "Sales order status ID is required.",
            "Ordinal position must be a non-negative number.",
            "Modified by is required.",
        ]


class TestSalesValidators:

    def test_company_cannot_be_its_own_parent(self):
        company_id = uuid.uuid4()
        command = UpdateCompanyCommand(
            company_id=company_id,
            parent_company_id=company_id,
            name="Acme",
            account_type_id=uuid.uuid4(),
            account_status_id=uuid.uuid4(),
            modified_by=uuid.uuid4(),
        )
        assert validate_update_company(command) == ["A company cannot be its own parent."]

    def test_quote_line_ranges(self):
        command = CreateQuoteLineItemCommand(
            quote_id=uuid.uuid4(),
            description="Widget",
            quantity=Decimal("0"),
            unit_price=Decimal("-1"),
            discount_percentage=Decimal("150"),
            tax_percentage=Decimal("-5"),
            line_number=1,
            created_by=uuid.uuid4(),
        )
        assert validate_create_quote_line_item(command) == [
            "Quantity must be greater than zero.",
            "Unit price must be a non-negative number.",
            "Discount percentage must be between 0 and 100.",
            "Tax percentage must be between 0 and 100.",
        ]

    def test_sales_order_dates(self):
        now = utcnow()
        command = CreateSalesOrderCommand(
            sales_order_status_id=uuid.uuid4(),
            number="SO-1",
            order_date=now,
            due_date=now - timedelta(days=1),
            created_by=uuid.uuid4(),
        )
        assert validate_create_sales_order(command) == ["Order date must be before or equal to due date."]

    def test_sales_order_dates_with_offsets(self):
        command = CreateSalesOrderCommand(
            sales_order_status_id=uuid.uuid4(),
            number="SO-2",
            order_date="2099-03-01T23:30:00-05:00",
            due_date="2099-03-02T04:00:00",
            created_by=uuid.uuid4(),
        )

        assert command.order_date == datetime(2099, 3, 2, 4, 30)
        assert validate_create_sales_order(command) == ["Order date must be before or equal to due date."]


class TestUserValidators:

    def test_password_rules(self):
        errors = validate_create_user(CreateUserCommand(login_name="amy", login_password="short", created_by=uuid.uuid4()))
        assert errors == ["Password must be at least 8 characters."]

        errors = validate_create_user(CreateUserCommand(login_name=" ", created_by=uuid.uuid4()))
        assert errors == ["Login name is required.", "Password is required."]
