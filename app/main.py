"""
J.A.R.V.I.S MAIN API
====================

This module defines the FastAPI application and all HTTP endpoints. It is
designed for single-user use: one person runs one server (python run.py),
opens http://localhost:8000 in a browser and chats with Jarvis. There is one
conversation per server process and it is lost on restart.

ENDPOINTS:
  GET  /                - The chat page (polls /chat/messages to render replies).
  GET  /health          - Returns whether each service is initialized.
  GET  /chat/messages   - The conversation so far plus the current draft.
  POST /chat            - Submit a message. Returns immediately with the user
                          message appended; the reply is appended later.
  POST /webhook/notify  - Post a message to the n8n webhook and return its result.

STARTUP:
  The lifespan function reads Settings from the environment and creates the
  Conversation, CompletionClient, ChatDispatcher and WebhookNotifier. On
  shutdown it waits for replies still in flight and closes the HTTP clients.
"""


from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from contextlib import asynccontextmanager
from pathlib import Path
import uvicorn
import logging

from app.models import ChatRequest, ConversationView, NotifyRequest
from app.services.completion_client import CompletionClient
from app.services.conversation import Conversation
from app.services.dispatcher import ChatDispatcher
from app.services.webhook_notifier import (
    WebhookConfigurationError,
    WebhookNotifier,
    WebhookValidationError,
)
from config import load_settings


# -----------------------------------------------------------------------------
# LOGGING
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger("J.A.R.V.I.S")

CHAT_PAGE = Path(__file__).parent / "static" / "index.html"


# -----------------------------------------------------------------------------
# GLOBAL SERVICE REFERENCES
# -----------------------------------------------------------------------------
# Set during startup (lifespan) and used by all route handlers.
dispatcher: ChatDispatcher = None
notifier: WebhookNotifier = None

def print_title():
    """Print the J.A.R.V.I.S ASCII art banner to the console when the server starts."""
    CYAN    = "\033[96m"
    BLUE    = "\033[94m"
    MAGENTA = "\033[95m"
    WHITE   = "\033[97m"
    DIM     = "\033[2m"
    BOLD    = "\033[1m"
    RESET   = "\033[0m"

    banner = f"""
{BOLD}{CYAN}      ██╗ █████╗ ██████╗ ██╗   ██╗██╗███████╗
{BLUE}      ██║██╔══██╗██╔══██╗██║   ██║██║██╔════╝
{BLUE}      ██║███████║██████╔╝██║   ██║██║███████╗
{MAGENTA} ██   ██║██╔══██║██╔══██╗╚██╗ ██╔╝██║╚════██║
{MAGENTA} ╚█████╔╝██║  ██║██║  ██║ ╚████╔╝ ██║███████║
{DIM}{CYAN}  ╚════╝ ╚═╝  ╚═╝╚═╝  ╚═╝  ╚═══╝  ╚═╝╚══════╝{RESET}
      {WHITE}{BOLD}Just A Rather Very Intelligent System{RESET}
"""
    print(banner)

# -------------------------------------------------------------------------
# LIFESPAN (STARTUP / SHUTDOWN)
# -------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build the services on startup; drain pending replies and close clients on shutdown.

    Missing OPENAI_API_KEY or N8N_WEBHOOK_URL is logged but does not stop the
    server: the dispatcher and the notifier handle those cases per request.
    """
    global dispatcher, notifier

    print_title()
    logger.info("=" * 60)
    logger.info("J.A.R.V.I.S - Starting Up...")
    logger.info("=" * 60)

    settings = load_settings()

    logger.info("Initializing chat dispatcher (model: %s)...", settings.openai_model)
    completion_client = CompletionClient(settings)
    dispatcher = ChatDispatcher(Conversation(settings.greeting), completion_client, settings)

    logger.info("Initializing webhook notifier...")
    notifier = WebhookNotifier(settings.n8n_webhook_url)

    logger.info("=" * 60)
    logger.info("Service Status:")
    logger.info("    - Completion API key: %s", "Set" if settings.openai_api_key else "MISSING")
    logger.info("    - n8n webhook: %s", "Configured" if settings.n8n_webhook_url else "Not configured")
    logger.info("=" * 60)
    logger.info("J.A.R.V.I.S is online and ready!")
    logger.info("Chat: http://localhost:8000")
    logger.info("=" * 60)

    try:
        yield
    finally:
        logger.info("Shutting down J.A.R.V.I.S...")
        try:
            await dispatcher.drain()
        finally:
            await completion_client.aclose()
            await notifier.aclose()
        logger.info("Goodbye!")


# -------------------------------------------------------------------------
# FASTAPI APP AND CORS
# -------------------------------------------------------------------------
app = FastAPI(
    title="J.A.R.V.I.S API",
    description="Just A Rather Very Intelligent System",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _conversation_view() -> ConversationView:
    return ConversationView(messages=list(dispatcher.conversation.messages), draft=dispatcher.draft)


# =========================================================================
# API ENDPOINTS
# =========================================================================

@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve the chat page."""
    return HTMLResponse(CHAT_PAGE.read_text(encoding="utf-8"))


@app.get("/health")
async def health():
    """Return 'healthy' and whether each service is initialized."""
    return {
        "status": "healthy",
        "dispatcher": dispatcher is not None,
        "notifier": notifier is not None,
    }


@app.get("/chat/messages", response_model=ConversationView)
async def get_messages():
    """
    Return the conversation in order, greeting first.

    The chat page polls this after each submit; replies show up here once the
    completion call (or its fallback) has been appended.
    """
    if not dispatcher:
        raise HTTPException(status_code=503, detail="Chat dispatcher not initialized")
    return _conversation_view()


@app.post("/chat", response_model=ConversationView)
async def chat(request: ChatRequest):
    """
    Submit a message to J.A.R.V.I.S.

    HOW IT WORKS:
    1. The message becomes the draft (what is in the input field).
    2. The dispatcher appends it as a user message and clears the draft, unless
       it is blank, in which case nothing happens.
    3. The completion request runs in the background; this endpoint does not wait.

    REQUEST BODY:
    {"message": "What is Python?"}

    RESPONSE:
    {"messages": [{"id": 1, "text": "Hello, I am Jarvis...", "isUser": false}, ...], "draft": ""}
    """
    if not dispatcher:
        raise HTTPException(status_code=503, detail="Chat dispatcher not initialized")

    dispatcher.update_draft(request.message)
    dispatcher.submit()
    return _conversation_view()


@app.post("/webhook/notify")
async def notify(request: NotifyRequest):
    """
    Send {"message": ...} to the n8n webhook.

    Returns the webhook's JSON response unchanged, or {"error": "..."} when the
    webhook answered with an error status or could not be reached.
    """
    if not notifier:
        raise HTTPException(status_code=503, detail="Webhook notifier not initialized")

    try:
        return await notifier.notify(request.message)
    except WebhookConfigurationError as e:
        logger.warning("Webhook not configured: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    except WebhookValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


# -------------------------------------------------------------------------
# STANDALONE RUN (python -m app.main)
# -------------------------------------------------------------------------
def run():
    """Start the uvicorn server (same as run.py); used if someone does python -m app.main"""
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )

if __name__ == "__main__":
    run()
