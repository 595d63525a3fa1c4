import argparse
import uuid
from collections import OrderedDict
from typing import Callable, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from ask_gemini.controller import COOLDOWN_SECONDS, Phase, PromptController, RequestState
from ask_gemini.llm import GEMINI_MODEL, CompletionService, GeminiCompletionService
from ask_gemini.utils import check_api_key, read_api_key
from ask_gemini.views import render_page, render_status

load_dotenv()

SESSION_COOKIE = "session_id"

# Least recently used sessions are dropped past this many
MAX_SESSIONS = 1000


# Request Models
class InputUpdate(BaseModel):
    text: str


class FocusUpdate(BaseModel):
    focused: bool


class SubmitRequest(BaseModel):
    text: Optional[str] = None


class StateSnapshot(BaseModel):
    state: RequestState
    phase: Phase
    can_submit: bool
    html: str


class SessionRegistry:
    """In-memory controllers, one per browser session"""

    def __init__(
        self,
        service: CompletionService,
        cooldown: float = COOLDOWN_SECONDS,
        max_sessions: int = MAX_SESSIONS,
    ):
        self.service = service
        self.cooldown = cooldown
        self.max_sessions = max_sessions
        self.controllers: OrderedDict[str, PromptController] = OrderedDict()

    def get(self, session_id: Optional[str]) -> tuple[str, PromptController]:
        if session_id and session_id in self.controllers:
            self.controllers.move_to_end(session_id)
            return session_id, self.controllers[session_id]

        session_id = uuid.uuid4().hex
        controller = PromptController(self.service, cooldown=self.cooldown)
        self.controllers[session_id] = controller

        while len(self.controllers) > self.max_sessions:
            _, evicted = self.controllers.popitem(last=False)
            evicted.close()

        return session_id, controller

    def close_all(self) -> None:
        for controller in self.controllers.values():
            controller.close()
        self.controllers.clear()


def snapshot(controller: PromptController) -> StateSnapshot:
    state = controller.state
    return StateSnapshot(
        state=state,
        phase=state.phase,
        can_submit=state.can_submit,
        html=render_status(state),
    )


def create_app(
    service_factory: Optional[Callable[[], CompletionService]] = None,
    cooldown: float = COOLDOWN_SECONDS,
    max_sessions: int = MAX_SESSIONS,
) -> FastAPI:
    """Build the web app; ``service_factory`` overrides the Gemini client"""

    api_key = read_api_key()
    app = FastAPI(title="Ask Gemini AI")

    if service_factory is None:
        service = GeminiCompletionService(api_key)
    else:
        service = service_factory()
    app.state.sessions = SessionRegistry(service, cooldown=cooldown, max_sessions=max_sessions)

    def session(request: Request, response: Response) -> PromptController:
        current = request.cookies.get(SESSION_COOKIE)
        session_id, controller = app.state.sessions.get(current)
        if session_id != current:
            response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
        return controller

    @app.on_event("startup")
    async def startup_event():
        """Validate environment on startup"""
        print("Starting Ask Gemini server...")
        print(f"📊 Model: {GEMINI_MODEL}")

        try:
            check_api_key(api_key)
            print("✓ GEMINI_API_KEY configured")
        except RuntimeError as e:
            print(f"⚠ WARNING: {e}")
            print("⚠ Server will start but every submission will fail!")

        print("✅ Server ready!")

    @app.on_event("shutdown")
    async def shutdown_event():
        app.state.sessions.close_all()

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        current = request.cookies.get(SESSION_COOKIE)
        session_id, controller = app.state.sessions.get(current)
        response = HTMLResponse(render_page(controller.state))
        if session_id != current:
            response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
        return response

    @app.get("/api/state", response_model=StateSnapshot)
    async def get_state(request: Request, response: Response):
        return snapshot(session(request, response))

    @app.post("/api/input", response_model=StateSnapshot)
    async def update_input(update: InputUpdate, request: Request, response: Response):
        controller = session(request, response)
        controller.set_input(update.text)
        return snapshot(controller)

    @app.post("/api/focus", response_model=StateSnapshot)
    async def update_focus(update: FocusUpdate, request: Request, response: Response):
        controller = session(request, response)
        if update.focused:
            controller.focus()
        else:
            controller.blur()
        return snapshot(controller)

    @app.post("/api/submit", response_model=StateSnapshot)
    async def submit_prompt(
        request: Request, response: Response, body: Optional[SubmitRequest] = None
    ):
        """Start a submission for the caller's session"""

        controller = session(request, response)

        # Same rule as the disabled submit button
        if not controller.state.can_submit:
            raise HTTPException(status_code=409, detail="Submission in progress")

        if body is not None and body.text is not None:
            controller.set_input(body.text)

        controller.dispatch()
        return snapshot(controller)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app


app = create_app()


def main() -> None:
    parser = argparse.ArgumentParser(description="Ask Gemini AI prompt form server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    args = parser.parse_args()

    import uvicorn

    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
