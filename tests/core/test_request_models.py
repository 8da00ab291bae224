"""
Tests for PATCH body validation.
"""

import pytest
from pydantic import ValidationError

from brainforge.models.ai import UpdateAIKeyRequest
from brainforge.models.auth import UpdateProfileRequest
from brainforge.models.brainstorm import UpdateCanvasRequest, UpdateSessionRequest
from brainforge.models.calendar import UpdateEventRequest
from brainforge.models.diagram import UpdateDiagramRequest
from brainforge.models.discussion import UpdateDiscussionRequest
from brainforge.models.goal import UpdateGoalRequest
from brainforge.models.note import UpdateNoteRequest
from brainforge.models.sprint import UpdateSprintRequest
from brainforge.models.task import UpdateTaskRequest
from brainforge.models.team import UpdateProjectRequest, UpdateTeamRequest


class TestPartialUpdate:
    """Test suite for explicit nulls in update bodies."""

    @pytest.mark.parametrize(
        "model, field",
        [
            (UpdateEventRequest, "title"),
            (UpdateEventRequest, "start_date"),
            (UpdateProjectRequest, "name"),
            (UpdateProjectRequest, "color"),
            (UpdateDiagramRequest, "data"),
            (UpdateSprintRequest, "deadline"),
            (UpdateDiscussionRequest, "is_pinned"),
            (UpdateGoalRequest, "progress"),
            (UpdateNoteRequest, "content"),
            (UpdateSessionRequest, "mode"),
            (UpdateTeamRequest, "name"),
            (UpdateProfileRequest, "name"),
            (UpdateAIKeyRequest, "label"),
            (UpdateTaskRequest, "title"),
            (UpdateTaskRequest, "order_index"),
        ],
    )
    def test_null_rejected_for_required_columns(self, model, field):
        with pytest.raises(ValidationError) as exc_info:
            model.model_validate({field: None})

        (error,) = exc_info.value.errors()
        assert error["loc"] == (field,)
        assert "cannot be null" in error["msg"]

    @pytest.mark.parametrize(
        "model, field",
        [
            (UpdateEventRequest, "description"),
            (UpdateEventRequest, "end_date"),
            (UpdateProjectRequest, "description"),
            (UpdateGoalRequest, "due_date"),
            (UpdateSessionRequest, "context"),
            (UpdateCanvasRequest, "flow_data"),
            (UpdateProfileRequest, "avatar_url"),
            (UpdateTaskRequest, "due_date"),
            (UpdateTaskRequest, "project_id"),
        ],
    )
    def test_null_clears_nullable_columns(self, model, field):
        assert model.model_validate({field: None}).model_dump(exclude_unset=True) == {field: None}

    def test_omitted_fields_stay_unset(self):
        body = UpdateEventRequest.model_validate({"title": "Retro"})

        assert body.model_dump(exclude_unset=True) == {"title": "Retro"}
