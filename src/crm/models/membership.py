"""
Junction tables linking users to teams and roles.

Rows are keyed by the (first, second) id pair and are never physically
removed: unlinking clears `active`, relinking sets it again.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from crm.database.base import Base


class TeamUser(Base):
    __tablename__ = "team_users"

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.team_id"), primary_key=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.user_id"), primary_key=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    modified_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class UserRole(Base):
    __tablename__ = "user_roles"

    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.user_id"), primary_key=True)
    role_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("roles.role_id"), primary_key=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    modified_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
