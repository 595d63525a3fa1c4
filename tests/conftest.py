import asyncio

import pytest


class FakeCompletionService:
    """Completion service double that records prompts and can be held open"""

    def __init__(self, text="AI is a field of...", error=None):
        self.text = text
        self.error = error
        self.prompts = []
        self.release = asyncio.Event()
        self.release.set()

    def hold(self):
        self.release = asyncio.Event()

    async def generate(self, prompt):
        self.prompts.append(prompt)
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def service():
    return FakeCompletionService()
