"""
J.A.R.V.I.S APPLICATION PACKAGE
===============================

Main Python package for the J.A.R.V.I.S chat backend.

  from app.main import app
  from app.models import Message
  from app.services.dispatcher import ChatDispatcher

FILE STRUCTURE:
  app/
    __init__.py   - This file; marks 'app' as a package.
    main.py       - FastAPI app and all HTTP endpoints (/, /chat, /chat/messages, /webhook/notify).
    models.py     - Pydantic models for the conversation and the API bodies.
    services/     - Conversation state, completion client, dispatcher, webhook notifier.
    static/       - The single chat page served at /.
    utils/        - Helpers: monotonic message ids.
"""
