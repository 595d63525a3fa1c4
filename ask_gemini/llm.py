from typing import Optional, Protocol

from pydantic_ai import Agent

# Pro-tier Gemini model; fixed, not selectable from the page.
GEMINI_MODEL = "gemini-2.5-pro"


class CompletionError(Exception):
    """Raised when the completion service cannot produce text for a prompt"""


class CompletionService(Protocol):
    async def generate(self, prompt: str) -> str:
        ...


class GeminiCompletionService:
    """Handles text completion using Gemini"""

    def __init__(self, api_key: Optional[str], model_name: str = GEMINI_MODEL):
        self.api_key = api_key
        self.model_name = model_name
        self.agent: Optional[Agent] = None

    def _build_agent(self) -> Agent:
        if not self.api_key:
            raise CompletionError("GEMINI_API_KEY is not configured")

        from pydantic_ai.models.google import GoogleModel
        from pydantic_ai.providers.google import GoogleProvider

        model = GoogleModel(self.model_name, provider=GoogleProvider(api_key=self.api_key))
        print(f"🤖 Using Gemini model {self.model_name}")
        return Agent(model)

    async def generate(self, prompt: str) -> str:
        """Return the completion text for ``prompt``"""

        if self.agent is None:
            self.agent = self._build_agent()

        try:
            result = await self.agent.run(prompt)
        except Exception as e:
            raise CompletionError(f"Gemini request failed: {e}") from e

        response_text = (result.output or "").strip()

        print(f"📄 LLM Response length: {len(response_text)} chars")
        return response_text
