"""
Entity factories for repository, handler and API tests.

Factories build entities through the same mapping functions the handlers
use (`from_create`), so audit columns are stamped exactly as in production,
then persist them with the entity's repository.

All fixtures depend on `db_session` from conftest.py.
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from crm import models
from crm.database.base import utcnow
from crm.mappings import activity as activity_map
from crm.mappings import invoice as invoice_map
from crm.mappings import payment as payment_map
from crm.mappings import quote as quote_map
from crm.mappings import role as role_map
from crm.mappings import team as team_map
from crm.mappings import user as user_map
from crm.mappings.lookups import LookupMapping
from crm.repositories import (
    ActivityRepository,
    InvoiceRepository,
    LookupRepository,
    PaymentRepository,
    QuoteRepository,
    RoleRepository,
    TeamRepository,
    UserRepository,
)
from crm.schemas.activity import CreateActivityCommand
from crm.schemas.invoice import CreateInvoiceCommand
from crm.schemas.lookups import CreateLookupCommand
from crm.schemas.payment import CreatePaymentCommand
from crm.schemas.quote import CreateQuoteCommand
from crm.schemas.role import CreateRoleCommand
from crm.schemas.team import CreateTeamCommand
from crm.schemas.user import CreateUserCommand


@pytest.fixture
def user_id() -> uuid.UUID:
    """The acting user stamped into created_by / modified_by."""
    return uuid.uuid4()


@pytest.fixture
def make_lookup(db_session: AsyncSession, user_id):
    """
    Factory for lookup rows.

    Usage:
        status = await make_lookup(models.InvoiceStatus, "Draft", ordinal_position=1)
    """
    async def _create(model, label: str, ordinal_position: int = 0, description: str | None = None):
        command = CreateLookupCommand(
            label=label,
            description=description,
            ordinal_position=ordinal_position,
            created_by=user_id,
        )
        entity = LookupMapping(model).from_create(command)
        return await LookupRepository(model, db_session).add(entity)

    return _create


@pytest.fixture
async def activity_type(make_lookup) -> models.ActivityType:
    return await make_lookup(models.ActivityType, "Call", ordinal_position=1)


@pytest.fixture
async def activity_status(make_lookup) -> models.ActivityStatus:
    return await make_lookup(models.ActivityStatus, "Open", ordinal_position=1)


@pytest.fixture
async def invoice_status(make_lookup) -> models.InvoiceStatus:
    return await make_lookup(models.InvoiceStatus, "Draft", ordinal_position=1)


@pytest.fixture
async def payment_method(make_lookup) -> models.PaymentMethod:
    return await make_lookup(models.PaymentMethod, "Bank transfer", ordinal_position=1)


@pytest.fixture
async def quote_status(make_lookup) -> models.QuoteStatus:
    return await make_lookup(models.QuoteStatus, "Pending", ordinal_position=1)


@pytest.fixture
def activity_command(activity_type, activity_status, user_id):
    """Builds a valid CreateActivityCommand; keyword overrides replace fields."""
    def _build(**overrides) -> CreateActivityCommand:
        data = {
            "activity_type_id": activity_type.activity_type_id,
            "activity_status_id": activity_status.activity_status_id,
            "subject": "Follow up with customer",
            "description": "Discuss renewal",
            "due_date": utcnow() + timedelta(days=3),
            "created_by": user_id,
        }
        data.update(overrides)
        return CreateActivityCommand(**data)

    return _build


@pytest.fixture
def make_activity(db_session: AsyncSession, activity_command):
    async def _create(**overrides) -> models.Activity:
        entity = activity_map.from_create(activity_command(**overrides))
        return await ActivityRepository(db_session).add(entity)

    return _create


@pytest.fixture
def make_invoice(db_session: AsyncSession, invoice_status, user_id):
    async def _create(**overrides) -> models.Invoice:
        data = {
            "invoice_status_id": invoice_status.invoice_status_id,
            "number": f"INV-{uuid.uuid4().hex[:8]}",
            "invoice_date": utcnow(),
            "due_date": utcnow() + timedelta(days=30),
            "created_by": user_id,
        }
        data.update(overrides)
        entity = invoice_map.from_create(CreateInvoiceCommand(**data))
        return await InvoiceRepository(db_session).add(entity)

    return _create


@pytest.fixture
def make_payment(db_session: AsyncSession, payment_method, user_id):
    async def _create(invoice_id: uuid.UUID, amount: Decimal = Decimal("100.00"), **overrides) -> models.Payment:
        data = {
            "invoice_id": invoice_id,
            "payment_method_id": payment_method.payment_method_id,
            "payment_date": utcnow(),
            "amount": amount,
            "created_by": user_id,
        }
        data.update(overrides)
        entity = payment_map.from_create(CreatePaymentCommand(**data))
        return await PaymentRepository(db_session).add(entity)

    return _create


@pytest.fixture
def make_quote(db_session: AsyncSession, quote_status, user_id):
    async def _create(**overrides) -> models.Quote:
        data = {
            "quote_status_id": quote_status.quote_status_id,
            "number": f"Q-{uuid.uuid4().hex[:8]}",
            "created_by": user_id,
        }
        data.update(overrides)
        entity = quote_map.from_create(CreateQuoteCommand(**data))
        return await QuoteRepository(db_session).add(entity)

    return _create


@pytest.fixture
def make_user(db_session: AsyncSession, user_id):
    async def _create(login_name: str | None = None, password: str = "correct-horse-battery") -> models.User:
        command = CreateUserCommand(
            login_name=login_name or f"user_{uuid.uuid4().hex[:8]}",
            login_password=password,
            created_by=user_id,
        )
        return await UserRepository(db_session).add(user_map.from_create(command))

    return _create


@pytest.fixture
def make_team(db_session: AsyncSession, user_id):
    async def _create(name: str | None = None) -> models.Team:
        command = CreateTeamCommand(name=name or f"team_{uuid.uuid4().hex[:8]}", created_by=user_id)
        return await TeamRepository(db_session).add(team_map.from_create(command))

    return _create


@pytest.fixture
def make_role(db_session: AsyncSession, user_id):
    async def _create(name: str | None = None) -> models.Role:
        command = CreateRoleCommand(name=name or f"role_{uuid.uuid4().hex[:8]}", created_by=user_id)
        return await RoleRepository(db_session).add(role_map.from_create(command))

    return _create
