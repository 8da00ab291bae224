"""
AI key service orchestrator.

Manages the caller's own vendor keys (stored encrypted, never returned) and
reports their metered usage.

Dependencies: brainforge.boundary.db.CRUD, brainforge.core.ai, brainforge.core.security
System role: Bring-your-own-key management
"""

import logging
from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from brainforge.application.serializers import ai_key_dict, usage_log_dict
from brainforge.boundary.db.base import utcnow
from brainforge.boundary.db.CRUD import ai_usage_log_crud, user_ai_key_crud
from brainforge.boundary.db.models import AIProvider, UserAIKeyModel
from brainforge.core.ai import AIService
from brainforge.core.ai.providers import PROVIDERS
from brainforge.core.exceptions import ConflictError, NotFoundError, ValidationError
from brainforge.core.security import decrypt, encrypt
from brainforge.observability.log_utils import mask_secret, safe_log_value

logger = logging.getLogger(__name__)

RECENT_LOGS = 50


class AIKeyService:
    """AI key service orchestrator."""

    def __init__(self, db: AsyncSession, ai: AIService | None = None) -> None:
        self.db = db
        self.ai = ai or AIService(db)

    async def _get(self, user_id: UUID, key_id: UUID) -> UserAIKeyModel:
        key = await user_ai_key_crud.get_for_user(self.db, key_id, user_id)
        if key is None:
            raise NotFoundError("API key not found")
        return key

    async def _check_key(self, provider: AIProvider, api_key: str) -> None:
        # Vendors without an adapter are stored unchecked.
        if provider.value not in PROVIDERS:
            return
        if not await self.ai.validate_key(provider.value, api_key):
            raise ValidationError(
                f"The {provider.value} API key was rejected by the provider",
                field="api_key",
                status_code=400,
            )

    async def list_keys(self, user_id: UUID) -> list[dict]:
        return [ai_key_dict(k) for k in await user_ai_key_crud.list_for_user(self.db, user_id)]

    async def add_key(self, user_id: UUID, provider: AIProvider, api_key: str, label: str | None = None) -> dict:
        """
        Store a new key for a provider.

        Raises:
            ConflictError: The user already has a key for this provider
            ValidationError: The provider rejected the key
        """
        if await user_ai_key_crud.get_for_provider(self.db, user_id, provider) is not None:
            raise ConflictError(
                f"API key for {provider.value} already exists. Update instead.", code="KEY_EXISTS"
            )
        await self._check_key(provider, api_key)
        try:
            key = await user_ai_key_crud.create(
                self.db,
                user_id=user_id,
                provider=provider,
                encrypted_key=encrypt(api_key),
                label=label or provider.value,
                is_active=True,
            )
            logger.info(
                "AI key added",
                extra={"user_id": str(user_id), "provider": provider.value, "key": mask_secret(api_key)},
            )
            return ai_key_dict(key)
        except Exception as e:
            logger.error("Failed to add AI key", extra={"error": safe_log_value(e), "provider": provider.value})
            raise

    async def update_key(self, user_id: UUID, key_id: UUID, changes: dict) -> dict:
        """Change label or active flag; a new ``api_key`` is re-encrypted and reactivates the key."""
        key = await self._get(user_id, key_id)
        api_key = changes.pop("api_key", None)
        if api_key:
            await self._check_key(key.provider, api_key)
            changes["encrypted_key"] = encrypt(api_key)
            changes["is_active"] = True
        if changes:
            key = await user_ai_key_crud.update_instance(self.db, key, **changes)
        return ai_key_dict(key)

    async def delete_key(self, user_id: UUID, key_id: UUID) -> None:
        key = await self._get(user_id, key_id)
        await user_ai_key_crud.delete_by_id(self.db, key.id)
        logger.info("AI key deleted", extra={"user_id": str(user_id), "provider": key.provider.value})

    async def validate(self, user_id: UUID, key_id: UUID) -> dict:
        """Re-check a stored key against the vendor and record the outcome."""
        key = await self._get(user_id, key_id)
        valid = await self.ai.validate_key(key.provider.value, decrypt(key.encrypted_key))
        await user_ai_key_crud.update_instance(self.db, key, is_active=valid)
        return {"valid": valid, "provider": key.provider}

    async def balance(self, user_id: UUID, key_id: UUID) -> dict:
        key = await self._get(user_id, key_id)
        info = await self.ai.get_balance(key.provider.value, decrypt(key.encrypted_key))
        return {"provider": key.provider, **info.model_dump()}

    async def usage(self, user_id: UUID, days: int = 30) -> dict:
        """
        Aggregate the caller's usage over the last ``days`` days.

        Returns:
            dict: Totals, per-provider breakdown and the newest log rows
        """
        logs = await ai_usage_log_crud.list_since(self.db, utcnow() - timedelta(days=days), user_id=user_id)
        by_provider: dict[str, dict] = {}
        total_tokens = 0
        total_cost = 0.0
        for log in logs:
            tokens = log.input_tokens + log.output_tokens
            bucket = by_provider.setdefault(log.provider.value, {"requests": 0, "tokens": 0, "cost": 0.0})
            bucket["requests"] += 1
            bucket["tokens"] += tokens
            bucket["cost"] += log.cost
            total_tokens += tokens
            total_cost += log.cost
        return {
            "total_requests": len(logs),
            "total_tokens": total_tokens,
            "total_cost": total_cost,
            "by_provider": by_provider,
            "recent_logs": [usage_log_dict(log) for log in logs[:RECENT_LOGS]],
        }
