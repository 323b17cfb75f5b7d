"""
RUN SCRIPT - Start the J.A.R.V.I.S server
=======================================

PURPOSE:
  Single entry point to start the backend and the chat page. Run this once per
  user/machine; the server keeps one conversation in memory until it stops.

WHAT IT DOES:
  - Imports the FastAPI app from app.main.
  - Runs it with uvicorn on host 0.0.0.0 and port 8000.
  - reload=True restarts the server (and the conversation) on code changes.

USAGE:
  python run.py

  Then open http://localhost:8000 in the browser, or run python chat_client.py.

NOTE:
  Set OPENAI_API_KEY (and optionally N8N_WEBHOOK_URL) in .env before running.
  Without a key Jarvis still answers, with the fallback messages.
"""

import uvicorn

# ------------------------------------------------------------------------------
# ENTRY POINT
# ------------------------------------------------------------------------------
if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",   # String path to the FastAPI app instance (module:variable).
        host="0.0.0.0",   # Listen on all network interfaces so other devices can connect.
        port=8000,        # HTTP port; change if 8000 is already in use.
        reload=True       # Auto-restart when .py files change (useful during development).
    )
