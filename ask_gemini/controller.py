import asyncio
from typing import Literal

from pydantic import BaseModel

from ask_gemini.llm import CompletionService
from ask_gemini.prompts import DEFAULT_PROMPT, ERROR_MESSAGE

COOLDOWN_SECONDS = 3.0

Phase = Literal["idle", "submitting", "cooldown"]


class RequestState(BaseModel):
    input_text: str = ""
    is_focused: bool = False
    is_submitted: bool = False
    is_loading: bool = False
    response_text: str = ""
    error_text: str = ""

    @property
    def can_submit(self) -> bool:
        return not (self.is_loading or self.is_submitted)

    @property
    def phase(self) -> Phase:
        if self.is_loading:
            return "submitting"
        if self.is_submitted:
            return "cooldown"
        return "idle"

    @property
    def button_label(self) -> str:
        if self.is_loading:
            return "Processing..."
        if self.is_submitted:
            return "✓ Submitted"
        return "Submit"


class PromptController:
    """Owns the form state of one session and drives the request lifecycle.

    ``submit`` is the only operation that talks to the completion service.
    Its state changes happen in a fixed order: dispatch flags are set before
    the service call is awaited, the outcome is written once the call
    resolves, and a cooldown timer later clears ``is_submitted``.

    Overlapping calls are not serialized here; the page keeps the submit
    control disabled while ``can_submit`` is false.
    """

    def __init__(self, service: CompletionService, cooldown: float = COOLDOWN_SECONDS):
        self.service = service
        self.cooldown = cooldown
        self.state = RequestState()
        self._tasks: set[asyncio.Task] = set()
        self._timers: list[asyncio.TimerHandle] = []

    def set_input(self, text: str) -> None:
        self.state.input_text = text

    def focus(self) -> None:
        self.state.is_focused = True

    def blur(self) -> None:
        self.state.is_focused = False

    async def submit(self) -> None:
        """Send the current input (or the default prompt) and record the outcome"""

        prompt = self._begin()
        await self._complete(prompt)

    def dispatch(self) -> asyncio.Task:
        """Start a submission on the running loop and return without waiting.

        The dispatch flags are already set when this returns.
        """

        prompt = self._begin()
        task = asyncio.get_running_loop().create_task(self._complete(prompt))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _begin(self) -> str:
        self.state.is_submitted = True
        self.state.is_loading = True
        self.state.error_text = ""
        return self.state.input_text or DEFAULT_PROMPT

    async def _complete(self, prompt: str) -> None:
        try:
            text = await self.service.generate(prompt)
        except asyncio.CancelledError:
            # no cooldown for a request dropped by close()
            self.state.is_loading = False
            raise
        except Exception as e:
            self.state.error_text = ERROR_MESSAGE
            print(f"❌ Error generating content: {e!r}")
        else:
            self.state.response_text = text

        self.state.is_loading = False
        self._start_cooldown()

    def _start_cooldown(self) -> None:
        loop = asyncio.get_running_loop()
        # drop timers that already fired
        self._timers = [t for t in self._timers if t.when() > loop.time()]
        self._timers.append(loop.call_later(self.cooldown, self._end_cooldown))

    def _end_cooldown(self) -> None:
        self.state.is_submitted = False

    def close(self) -> None:
        """Cancel the in-flight request and pending timers"""

        for task in list(self._tasks):
            task.cancel()
        for timer in self._timers:
            timer.cancel()
        self._timers = []
