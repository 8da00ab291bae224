"""
Team, member and invitation request schemas.

Dependencies: pydantic
System role: Team API contracts
"""

from pydantic import BaseModel, EmailStr, Field

from brainforge.boundary.db.models import TeamRole
from brainforge.models.common import PartialUpdate


class CreateTeamRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)


class UpdateTeamRequest(PartialUpdate):
    nullable_fields = frozenset({"description"})

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)


class InviteMemberRequest(BaseModel):
    email: EmailStr
    role: TeamRole = TeamRole.MEMBER


class InviteLinkRequest(BaseModel):
    role: TeamRole = TeamRole.MEMBER


class UpdateMemberRoleRequest(BaseModel):
    role: TeamRole


class CreateProjectRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=2000)
    color: str | None = Field(None, max_length=20)
    icon: str | None = Field(None, max_length=50)


class UpdateProjectRequest(PartialUpdate):
    nullable_fields = frozenset({"description"})

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=2000)
    color: str | None = Field(None, max_length=20)
    icon: str | None = Field(None, max_length=50)
