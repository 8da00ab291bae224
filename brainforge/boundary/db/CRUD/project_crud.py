"""
Project CRUD operations.

Dependencies: sqlalchemy, brainforge.boundary.db.models
System role: Project persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.boundary.db.CRUD.base_crud import BaseCRUD
from brainforge.boundary.db.models import (
    AIChatModel,
    BrainstormSessionModel,
    DiagramModel,
    GoalModel,
    NoteModel,
    ProjectModel,
    SprintPlanModel,
    TaskModel,
)

# Content kinds that can be grouped under a project, keyed by count name.
PROJECT_CONTENT = {
    "tasks": TaskModel,
    "notes": NoteModel,
    "diagrams": DiagramModel,
    "goals": GoalModel,
    "brainstorm_sessions": BrainstormSessionModel,
    "sprint_plans": SprintPlanModel,
}


class ProjectCRUD(BaseCRUD[ProjectModel]):
    """CRUD operations for ProjectModel."""

    def __init__(self) -> None:
        super().__init__(ProjectModel)

    async def list_for_team(self, session: AsyncSession, team_id: UUID) -> Sequence[ProjectModel]:
        return await self.list_where(
            session, ProjectModel.team_id == team_id, order_by=[ProjectModel.created_at.desc()]
        )

    async def content_counts(
        self, session: AsyncSession, project_ids: list[UUID]
    ) -> dict[UUID, dict[str, int]]:
        """
        Count grouped content per project.

        Returns:
            {project_id: {"tasks": n, "notes": n, ...}} with zero for missing kinds
        """
        counts = {pid: {name: 0 for name in PROJECT_CONTENT} for pid in project_ids}
        if not project_ids:
            return counts
        for name, model in PROJECT_CONTENT.items():
            stmt = (
                select(model.project_id, func.count())
                .where(model.project_id.in_(project_ids))
                .group_by(model.project_id)
            )
            for project_id, n in (await session.execute(stmt)).all():
                counts[project_id][name] = n
        return counts

    async def detach_content(self, session: AsyncSession, project_id: UUID) -> None:
        """Null out project_id on everything grouped under the project."""
        for model in (*PROJECT_CONTENT.values(), AIChatModel):
            await session.execute(
                update(model)
                .where(model.project_id == project_id)
                .values(project_id=None)
                .execution_options(synchronize_session=False)
            )


project_crud = ProjectCRUD()
