"""
JARVIS TERMINAL CLIENT
======================

PURPOSE:
Command-line interface for chatting with a running J.A.R.V.I.S server, for when
a browser is not handy. It uses the same endpoints as the chat page.

USAGE:
    python chat_client.py

    Make sure the server is running first: python run.py

COMMANDS:
    /history        - Print the whole conversation
    /notify <text>  - Send <text> to the n8n webhook and print the result
    /quit or /exit  - Exit

HOW IT WORKS:
1. Each line you type is POSTed to /chat; the server appends it and returns at once.
2. The client polls /chat/messages until a new assistant message shows up.
3. The reply is printed. If nothing arrives within REPLY_WAIT_SECONDS the
   client gives up waiting; the reply still lands in /history later.
"""

import time

import requests

try:
    from config import ASSISTANT_NAME
except ImportError:
    ASSISTANT_NAME = "Jarvis"


# -----------------------------------------------------------------------------
# CONFIGURATION
# -----------------------------------------------------------------------------
BASE_URL = "http://localhost:8000"
REPLY_WAIT_SECONDS = 60
POLL_INTERVAL_SECONDS = 0.5


# -----------------------------------------------------------------------------
# UI HELPERS
# -----------------------------------------------------------------------------

def print_header():
    print("\n" + "=" * 60)
    print(f"🤖 J.A.R.V.I.S - {ASSISTANT_NAME} chat")
    print("=" * 60)
    print("\nCommands:")
    print("  /history - See the conversation")
    print("  /notify <text> - Send text to the n8n webhook")
    print("  /quit - Exit")
    print("=" * 60 + "\n")


def get_user_input():
    """Read one line; None on Ctrl+C / Ctrl+D."""
    try:
        return input("\nYou: ").strip()
    except (KeyboardInterrupt, EOFError):
        return None


# -----------------------------------------------------------------------------
# API CALLS
# -----------------------------------------------------------------------------

def fetch_messages():
    """Return the conversation as a list of message dicts."""
    response = requests.get(f"{BASE_URL}/chat/messages", timeout=10)
    response.raise_for_status()
    return response.json().get("messages", [])


def send_message(message):
    """
    Submit a message and wait for the assistant's reply.

    The server answers POST /chat before the completion API does, so the reply
    is picked up by polling /chat/messages for assistant messages that were not
    there right after the submit.

    Returns:
        str: The reply text (several replies joined by newlines), or an error message.
    """
    try:
        response = requests.post(f"{BASE_URL}/chat", json={"message": message}, timeout=10)
        if response.status_code != 200:
            return f"❌ Error: {response.status_code} - {response.text}"
        seen = {m["id"] for m in response.json().get("messages", [])}

        deadline = time.monotonic() + REPLY_WAIT_SECONDS
        while time.monotonic() < deadline:
            replies = [m for m in fetch_messages() if m["id"] not in seen and not m.get("isUser")]
            if replies:
                return "\n".join(m["text"] for m in replies)
            time.sleep(POLL_INTERVAL_SECONDS)
        return "⌛ No reply yet. Check /history later."

    except requests.exceptions.ConnectionError:
        return "❌ Cannot connect to backend. Start it with: python run.py"
    except requests.exceptions.RequestException as e:
        return f"❌ Error: {str(e)}"


def send_notification(text):
    """POST text to /webhook/notify and format the outcome."""
    try:
        response = requests.post(f"{BASE_URL}/webhook/notify", json={"message": text}, timeout=30)
    except requests.exceptions.ConnectionError:
        return "❌ Cannot connect to backend. Start it with: python run.py"
    except requests.exceptions.RequestException as e:
        return f"❌ Error: {str(e)}"

    if response.status_code != 200:
        try:
            return f"❌ {response.json()['detail']}"
        except (ValueError, KeyError):
            return f"❌ Error: {response.status_code} - {response.text}"
    result = response.json()
    if isinstance(result, dict) and "error" in result:
        return f"❌ Webhook failed: {result['error']}"
    return f"✅ Webhook response: {result}"


def get_chat_history():
    """Format the whole conversation, numbered, labelled You / assistant name."""
    try:
        messages = fetch_messages()
    except requests.exceptions.RequestException as e:
        return f"Error retrieving history: {str(e)}"

    output = f"\n📜 Chat History ({len(messages)} messages):\n"
    output += "-" * 60 + "\n"
    for i, msg in enumerate(messages, 1):
        role = "You" if msg.get("isUser") else ASSISTANT_NAME
        output += f"{i}. {role}: {msg.get('text', '')}\n"
    output += "-" * 60 + "\n"
    return output


# -----------------------------------------------------------------------------
# MAIN LOOP
# -----------------------------------------------------------------------------

def main():
    """Accept messages until /quit or /exit; handle /history and /notify."""
    print_header()

    while True:
        user_input = get_user_input()
        if user_input is None or user_input in ["/quit", "/exit"]:
            print("\n👋 Goodbye!")
            break

        if user_input == "/history":
            print(get_chat_history())
            continue

        if user_input.startswith("/notify"):
            print(send_notification(user_input[len("/notify"):].strip()))
            continue

        if user_input.startswith("/"):
            print(f"❌ Unknown command: {user_input}")
            continue

        if not user_input:
            continue

        print(f"🤖 {ASSISTANT_NAME}: ", end="", flush=True)
        print(send_message(user_input))


if __name__ == "__main__":
    main()
