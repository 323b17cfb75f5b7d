"""
SERVICES PACKAGE
=================

Business logic lives here. The API layer (app.main) calls these services;
they don't handle HTTP routing, only conversation state and outbound calls.

MODULES:
    conversation      - Append-only list of messages, greeting first
    completion_client - One POST to the chat-completion API per call
    dispatcher        - submit(): user message, then reply or fallback in the background
    webhook_notifier  - notify(): one POST to the n8n webhook, errors normalized
"""
