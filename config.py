"""
CONFIGURATION MODULE
====================

PURPOSE:
  Central place for all J.A.R.V.I.S settings: the completion API key and model,
  the n8n webhook URL, and the fixed texts Jarvis shows in the conversation.

WHAT THIS FILE DOES:
  - Loads environment variables from .env (so API keys stay out of code).
  - Exposes the completion API constants (URL, model, token budget) and the
    system instruction sent in front of every request.
  - Holds the greeting, the fallback apology and the "still processing" text.
  - Builds a Settings object (load_settings) that services receive at
    construction time, instead of reading os.environ on every call.

USAGE:
  from config import load_settings
  settings = load_settings()
  dispatcher = ChatDispatcher(Conversation(), CompletionClient(settings), settings)
"""

import os
import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


# -----------------------------------------------------------------------------
# LOGGING
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# ENVIRONMENT
# -----------------------------------------------------------------------------
# Load environment variables from .env file (if it exists).
load_dotenv()


# ============================================================================
# COMPLETION API CONFIGURATION
# ============================================================================
# Every submission is sent as one chat-completion request. The model and the
# token budget are fixed per process; the key is read from OPENAI_API_KEY.

OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"
OPENAI_MODEL = "gpt-3.5-turbo"
OPENAI_MAX_TOKENS = 150

# ============================================================================
# WEBHOOK CONFIGURATION
# ============================================================================
# n8n automation endpoint. Leaving N8N_WEBHOOK_URL unset is allowed: the
# notifier then refuses every call with a configuration error.

N8N_WEBHOOK_URL_ENV = "N8N_WEBHOOK_URL"

# ============================================================================
# JARVIS TEXTS
# ============================================================================

ASSISTANT_NAME = (os.getenv("ASSISTANT_NAME", "").strip() or "Jarvis")

JARVIS_SYSTEM_PROMPT = f"You are {ASSISTANT_NAME}, a helpful AI assistant."
GREETING_MESSAGE = f"Hello, I am {ASSISTANT_NAME}. How can I assist you today?"
FALLBACK_MESSAGE = "Sorry, I encountered an error processing your request."
PROCESSING_MESSAGE = "I'm processing your request. How else can I help you?"

# Delay before the "still processing" message when no API key is configured.
PROCESSING_DELAY_SECONDS = 1.0


class Settings(BaseModel):
    """
    Process-wide configuration, read once and handed to each service.

    openai_api_key and n8n_webhook_url may be empty: both are recoverable
    conditions handled by the dispatcher and the notifier respectively.
    """
    openai_api_key: str = ""
    openai_api_url: str = OPENAI_API_URL
    openai_model: str = OPENAI_MODEL
    openai_max_tokens: int = OPENAI_MAX_TOKENS
    n8n_webhook_url: Optional[str] = None
    system_prompt: str = JARVIS_SYSTEM_PROMPT
    greeting: str = GREETING_MESSAGE
    processing_delay_seconds: float = PROCESSING_DELAY_SECONDS


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment; fall back to default on a bad value."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


def load_settings() -> Settings:
    """
    Build Settings from the current environment.

    Called once at startup by the FastAPI lifespan. Values are stripped; an
    empty N8N_WEBHOOK_URL is stored as None so "unset" and "blank" behave alike.
    """
    webhook_url = os.getenv(N8N_WEBHOOK_URL_ENV, "").strip() or None
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
        openai_api_url=os.getenv("OPENAI_API_URL", "").strip() or OPENAI_API_URL,
        openai_model=os.getenv("OPENAI_MODEL", "").strip() or OPENAI_MODEL,
        openai_max_tokens=int(_env_float("OPENAI_MAX_TOKENS", OPENAI_MAX_TOKENS)),
        n8n_webhook_url=webhook_url,
        processing_delay_seconds=_env_float("PROCESSING_DELAY_SECONDS", PROCESSING_DELAY_SECONDS),
    )
