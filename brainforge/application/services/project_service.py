"""
Project service orchestrator.

Projects group team content. Deleting a project keeps its content and only
detaches it.

Dependencies: brainforge.boundary.db.CRUD
System role: Project use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import project_dict
from brainforge.boundary.db.CRUD import project_crud
from brainforge.boundary.db.models import ProjectModel
from brainforge.boundary.db.models.project_model import DEFAULT_PROJECT_COLOR, DEFAULT_PROJECT_ICON
from brainforge.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


async def ensure_project_in_team(db: AsyncSession, team_id: UUID, project_id: UUID | None) -> None:
    """Reject a project id from another team; None passes."""
    if project_id is not None and await project_crud.get_in_team(db, project_id, team_id) is None:
        raise NotFoundError("Project not found")


class ProjectService:
    """Project service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get(self, team_id: UUID, project_id: UUID) -> ProjectModel:
        project = await project_crud.get_in_team(self.db, project_id, team_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def _with_counts(self, project: ProjectModel) -> dict:
        counts = await project_crud.content_counts(self.db, [project.id])
        return project_dict(project, counts[project.id])

    async def list_projects(self, team_id: UUID) -> list[dict]:
        projects = await project_crud.list_for_team(self.db, team_id)
        counts = await project_crud.content_counts(self.db, [p.id for p in projects])
        return [project_dict(p, counts[p.id]) for p in projects]

    async def get_project(self, team_id: UUID, project_id: UUID) -> dict:
        return await self._with_counts(await self._get(team_id, project_id))

    async def create_project(
        self,
        team_id: UUID,
        user_id: UUID,
        name: str,
        description: str | None = None,
        color: str | None = None,
        icon: str | None = None,
    ) -> dict:
        """
        Create a project.

        Args:
            team_id: Owning team
            user_id: Creator
            name: Project name
            description: Optional description
            color: Hex color, defaults to the brand purple
            icon: Icon name, defaults to "folder"

        Returns:
            dict: Project with zeroed content counts
        """
        try:
            project = await project_crud.create(
                self.db,
                team_id=team_id,
                created_by=user_id,
                name=name,
                description=description,
                color=color or DEFAULT_PROJECT_COLOR,
                icon=icon or DEFAULT_PROJECT_ICON,
            )
            logger.info("Project created", extra={"project_id": str(project.id), "team_id": str(team_id)})
            return await self._with_counts(project)
        except Exception as e:
            logger.error("Failed to create project", extra={"error": str(e), "team_id": str(team_id)})
            raise

    async def update_project(self, team_id: UUID, project_id: UUID, changes: dict) -> dict:
        project = await self._get(team_id, project_id)
        if changes:
            project = await project_crud.update_instance(self.db, project, **changes)
        return await self._with_counts(project)

    async def delete_project(self, team_id: UUID, project_id: UUID) -> None:
        await self._get(team_id, project_id)
        await project_crud.detach_content(self.db, project_id)
        await project_crud.delete_by_id(self.db, project_id)
        logger.info("Project deleted", extra={"project_id": str(project_id)})
