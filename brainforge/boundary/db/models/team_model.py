"""
Team ORM models.

Teams are the tenancy boundary: every board, note and session belongs to
one team, and access is decided by TeamMember rows.

Dependencies: sqlalchemy, brainforge.boundary.db.base
System role: Multi-tenant membership persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brainforge.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin, utcnow
from brainforge.boundary.db.models.user_model import UserModel


class TeamRole(str, enum.Enum):
    """Membership roles, highest privilege first."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class InvitationStatus(str, enum.Enum):
    """Invitation lifecycle states."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    EXPIRED = "EXPIRED"
    REVOKED = "REVOKED"


class TeamModel(Base, UUIDMixin, TimestampMixin):
    """
    Team workspace.

    Attributes:
        name: Team name
        description: Optional description
        owner_id: User who owns the team (cannot be removed)
        members: Membership rows, user eagerly loaded
    """

    __tablename__ = "teams"

    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(String(500), default=None)
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    members: Mapped[list["TeamMemberModel"]] = relationship(
        back_populates="team",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TeamMemberModel.joined_at",
        lazy="selectin",
    )


class TeamMemberModel(Base, UUIDMixin):
    """Membership of one user in one team."""

    __tablename__ = "team_members"
    __table_args__ = (UniqueConstraint("team_id", "user_id", name="uq_team_member"),)

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    role: Mapped[TeamRole] = mapped_column(
        Enum(TeamRole, native_enum=False, length=20),
        default=TeamRole.MEMBER,
        nullable=False,
    )
    joined_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    team: Mapped[TeamModel] = relationship(back_populates="members")
    user: Mapped[UserModel] = relationship(lazy="selectin")


class TeamInvitationModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Invitation to join a team.

    Email invitations are single use. Open invite links use a synthetic
    ``invite-link-*@open`` address and stay PENDING so they can be reused
    until they expire.
    """

    __tablename__ = "team_invitations"

    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    email: Mapped[str] = mapped_column(String(255))
    role: Mapped[TeamRole] = mapped_column(
        Enum(TeamRole, native_enum=False, length=20),
        default=TeamRole.MEMBER,
        nullable=False,
    )
    status: Mapped[InvitationStatus] = mapped_column(
        Enum(InvitationStatus, native_enum=False, length=20),
        default=InvitationStatus.PENDING,
        nullable=False,
    )
    token: Mapped[str] = mapped_column(String(128), unique=True, index=True)
    expires_at: Mapped[datetime] = mapped_column(nullable=False)
    invited_by: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), default=None
    )

    team: Mapped[TeamModel] = relationship(lazy="selectin")

    @property
    def is_open_link(self) -> bool:
        return self.email.endswith("@open")
