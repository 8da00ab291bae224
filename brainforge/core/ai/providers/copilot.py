"""
GitHub Copilot (GitHub Models) adapter.

Dependencies: langchain_openai
System role: GitHub Models inference endpoint for the AI gateway
"""

from brainforge.core.ai.providers.openai import OpenAIProvider
from brainforge.core.ai.types import BalanceInfo, ModelDef

COPILOT_BASE_URL = "https://models.github.ai/inference"


class CopilotProvider(OpenAIProvider):
    """GitHub Models via ChatOpenAI. Usage is covered by the subscription."""

    name = "COPILOT"
    base_url = COPILOT_BASE_URL
    models = [
        ModelDef(id="gpt-4o", name="GPT-4o", context_window=128000, cost_per_1k_input=0, cost_per_1k_output=0, description="OpenAI GPT-4o via GitHub"),
        ModelDef(id="gpt-4o-mini", name="GPT-4o Mini", context_window=128000, cost_per_1k_input=0, cost_per_1k_output=0, description="Fast & efficient via GitHub"),
        ModelDef(id="o4-mini", name="O4 Mini", context_window=200000, cost_per_1k_input=0, cost_per_1k_output=0, description="Reasoning model via GitHub"),
        ModelDef(id="o3-mini", name="O3 Mini", context_window=200000, cost_per_1k_input=0, cost_per_1k_output=0, description="Fast reasoning via GitHub"),
        ModelDef(id="claude-sonnet-4-20250514", name="Claude Sonnet 4", context_window=200000, cost_per_1k_input=0, cost_per_1k_output=0, description="Anthropic Claude via GitHub"),
        ModelDef(id="claude-3.5-sonnet", name="Claude 3.5 Sonnet", context_window=200000, cost_per_1k_input=0, cost_per_1k_output=0, description="Anthropic Claude 3.5 via GitHub"),
    ]

    async def get_balance(self, api_key: str) -> BalanceInfo:
        return BalanceInfo(has_balance=True, message="GitHub Copilot - included with subscription")
