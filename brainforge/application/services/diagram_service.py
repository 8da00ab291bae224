"""
Diagram service orchestrator.

Node/edge diagrams, drawn by hand or generated from a description.

Dependencies: brainforge.boundary.db.CRUD, brainforge.core.ai
System role: Diagram use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import diagram_dict
from brainforge.application.services.project_service import ensure_project_in_team
from brainforge.boundary.db.CRUD import diagram_crud
from brainforge.boundary.db.models import DiagramModel, DiagramType
from brainforge.boundary.db.models.diagram_model import empty_graph
from brainforge.core.ai import AIService, ChatOptions
from brainforge.core.ai.parsing import extract_json_object
from brainforge.core.ai.prompts import diagram_messages
from brainforge.core.exceptions import AIParseError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_AI_TITLE = "AI Generated Diagram"


class DiagramService:
    """Diagram service orchestrator."""

    def __init__(self, db: AsyncSession, ai: AIService | None = None) -> None:
        self.db = db
        self.ai = ai or AIService(db)

    async def _get(self, team_id: UUID, diagram_id: UUID) -> DiagramModel:
        diagram = await diagram_crud.get_in_team(self.db, diagram_id, team_id)
        if diagram is None:
            raise NotFoundError("Diagram not found")
        return diagram

    async def list_diagrams(self, team_id: UUID, project_id: UUID | None = None) -> list[dict]:
        return [diagram_dict(d) for d in await diagram_crud.list_for_team(self.db, team_id, project_id)]

    async def get_diagram(self, team_id: UUID, diagram_id: UUID) -> dict:
        return diagram_dict(await self._get(team_id, diagram_id))

    async def create_diagram(self, team_id: UUID, user_id: UUID, data: dict) -> dict:
        await ensure_project_in_team(self.db, team_id, data.get("project_id"))
        graph = data.pop("data", None) or empty_graph()
        diagram = await diagram_crud.create(
            self.db, team_id=team_id, created_by=user_id, data=graph, **data
        )
        logger.info("Diagram created", extra={"diagram_id": str(diagram.id), "team_id": str(team_id)})
        return diagram_dict(diagram)

    async def update_diagram(self, team_id: UUID, diagram_id: UUID, changes: dict) -> dict:
        diagram = await self._get(team_id, diagram_id)
        if changes:
            diagram = await diagram_crud.update_instance(self.db, diagram, **changes)
        return diagram_dict(diagram)

    async def delete_diagram(self, team_id: UUID, diagram_id: UUID) -> None:
        await self._get(team_id, diagram_id)
        await diagram_crud.delete_by_id(self.db, diagram_id)

    async def generate(
        self,
        team_id: UUID,
        user_id: UUID,
        provider: str,
        model: str,
        prompt: str,
        diagram_type: DiagramType = DiagramType.FLOWCHART,
        title: str | None = None,
        description: str | None = None,
        project_id: UUID | None = None,
    ) -> dict:
        """
        Generate a diagram from a description and save it.

        Raises:
            AIParseError: The reply holds no usable JSON graph; nothing is saved
        """
        await ensure_project_in_team(self.db, team_id, project_id)
        result = await self.ai.chat(
            user_id,
            provider,
            model,
            diagram_messages(diagram_type.value, prompt),
            ChatOptions(temperature=0.3),
            feature="diagram",
        )
        try:
            graph = extract_json_object(result.content)
        except ValueError:
            logger.warning("Diagram generation returned unparseable output", extra={"model": model})
            raise AIParseError("Failed to parse AI response", raw=result.content)

        diagram = await diagram_crud.create(
            self.db,
            team_id=team_id,
            created_by=user_id,
            project_id=project_id,
            title=title or DEFAULT_AI_TITLE,
            description=description or prompt,
            type=diagram_type,
            data={"nodes": graph.get("nodes") or [], "edges": graph.get("edges") or []},
        )
        logger.info("Diagram generated", extra={"diagram_id": str(diagram.id), "model": model})
        return diagram_dict(diagram)
