import asyncio
import os
import uuid
from collections import OrderedDict
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field

from app.config import configure_logging, get_settings
from app.prompts import LANGUAGES
from app.responder import Turn, evaluate
from app.safety import redact_pii_basic
from app.shell import ConversationShell


settings = get_settings()
logger = configure_logging(settings)

BASE_DIR = os.path.dirname(__file__).rsplit(os.sep, 1)[0]

# NOTE: This is a lightweight demo; for production you'd put rate-limiting, auth, and audit logging in front.
app = FastAPI(title=settings.app_name)

app.mount("/static", StaticFiles(directory=os.path.join(BASE_DIR, "static")), name="static")
templates = Jinja2Templates(directory=os.path.join(BASE_DIR, "templates"))

# ---------
# Models
# ---------
class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str

class SessionRequest(BaseModel):
    language: str = Field("en", description="UI language code. Display only.")
    password: Optional[str] = Field(None, description="Optional password if DEMO_PASSWORD is set.")

class LanguageRequest(BaseModel):
    language: str
    password: Optional[str] = None

class SessionResponse(BaseModel):
    session_id: str
    language: str
    messages: List[ChatMessage]

class ChatRequest(BaseModel):
    session_id: str
    message: str
    password: Optional[str] = Field(None, description="Optional password if DEMO_PASSWORD is set.")

class ChatResponse(BaseModel):
    ok: bool
    reply: str
    kind: str
    emergency: bool
    symptoms: List[str]
    messages: List[ChatMessage]

class RespondRequest(BaseModel):
    message: str
    history: List[ChatMessage] = Field(default_factory=list, description="Client-held chat history.")
    password: Optional[str] = None

class RespondResponse(BaseModel):
    reply: str
    kind: str


# ---------
# Session store
# ---------
class SessionStore:
    """In-memory shells keyed by session id. Lost when the process exits."""

    def __init__(self, max_sessions: int) -> None:
        self.max_sessions = max(1, max_sessions)
        self._shells: "OrderedDict[str, ConversationShell]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._shells)

    def create(self, language: str) -> str:
        shell = ConversationShell(language=language, speech_enabled=False)
        shell.start()
        session_id = uuid.uuid4().hex
        self._shells[session_id] = shell
        while len(self._shells) > self.max_sessions:
            evicted, _ = self._shells.popitem(last=False)
            logger.info("Session evicted: %s", evicted)
        return session_id

    def get(self, session_id: str) -> Optional[ConversationShell]:
        return self._shells.get(session_id)

    def clear(self) -> None:
        self._shells.clear()


sessions = SessionStore(settings.max_sessions)


# ---------
# Helpers
# ---------
def _check_password(provided: Optional[str]) -> None:
    current = get_settings()
    if not current.require_password:
        return
    if not provided or provided != current.demo_password:
        raise HTTPException(status_code=401, detail="Unauthorized")

def _get_shell(session_id: str) -> ConversationShell:
    shell = sessions.get(session_id)
    if shell is None:
        raise HTTPException(status_code=404, detail="Unknown session")
    return shell

def _check_language(code: str) -> None:
    if code not in LANGUAGES:
        raise HTTPException(status_code=422, detail=f"Unsupported language: {code}")

def _dump(messages: List[Turn]) -> List[ChatMessage]:
    return [ChatMessage(role=t.role, content=t.content) for t in messages]

def _snapshot(session_id: str, shell: ConversationShell) -> SessionResponse:
    return SessionResponse(session_id=session_id, language=shell.language, messages=_dump(shell.messages))

async def _thinking_delay() -> None:
    delay = get_settings().response_delay_ms
    if delay > 0:
        await asyncio.sleep(delay / 1000)

def _log_text(label: str, text: str) -> None:
    if get_settings().allow_logging:
        # NOTE: message text may hold PHI; keep off by default
        logger.info("%s: %s", label, redact_pii_basic(text))


# ---------
# Routes
# ---------
@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    current = get_settings()
    return templates.TemplateResponse(request, "index.html", {
        "app_name": current.app_name,
        "require_password": current.require_password,
        "languages": LANGUAGES,
    })

@app.post("/sessions", response_model=SessionResponse)
async def create_session(req: SessionRequest):
    _check_password(req.password)
    _check_language(req.language)
    session_id = sessions.create(req.language)
    logger.info("Session created: %s language=%s active=%s", session_id, req.language, len(sessions))
    return _snapshot(session_id, _get_shell(session_id))

@app.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, password: Optional[str] = None):
    _check_password(password)
    return _snapshot(session_id, _get_shell(session_id))

@app.post("/sessions/{session_id}/language", response_model=SessionResponse)
async def set_language(session_id: str, req: LanguageRequest):
    _check_password(req.password)
    shell = _get_shell(session_id)
    _check_language(req.language)
    shell.set_language(req.language)
    logger.info("Session %s language set to %s", session_id, req.language)
    return _snapshot(session_id, shell)

@app.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest):
    _check_password(req.password)
    shell = _get_shell(req.session_id)
    if not req.message.strip():
        raise HTTPException(status_code=400, detail="Empty message")

    _log_text("CHAT_REQUEST", req.message)
    await _thinking_delay()
    reply_text = shell.send(req.message.strip())
    reply = shell.last_reply

    return ChatResponse(
        ok=True,
        reply=reply_text or "",
        kind=reply.kind,
        emergency=reply.kind == "emergency",
        symptoms=list(reply.symptoms),
        messages=_dump(shell.messages),
    )

@app.post("/respond", response_model=RespondResponse)
async def respond_stateless(req: RespondRequest):
    _check_password(req.password)
    _log_text("RESPOND_REQUEST", req.message)
    reply = evaluate(req.message, req.history)
    logger.info("Stateless reply: kind=%s history_turns=%s", reply.kind, len(req.history))
    return RespondResponse(reply=reply.text, kind=reply.kind)

@app.get("/healthz")
async def healthz() -> Dict[str, bool]:
    return {"ok": True}
