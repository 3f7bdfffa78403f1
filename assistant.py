"""LLM weather assistant with tool support and session memory."""

import json
import logging
from datetime import datetime
from typing import Any, cast
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletionMessageParam
from openai.types.chat.chat_completion_message_tool_call import ChatCompletionMessageToolCall

import session_store
from tools import TOOLS, execute_tool

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_SESSION = "default"

logger = logging.getLogger(__name__)

INSTRUCTIONS = """You are Weather Agent, a concise, accurate weather assistant.

Rules:
1) If the user does not provide a location, ask exactly one brief question to get it.
2) If the location contains multiple parts (e.g., "New York, NY"), use the most relevant part ("New York").
3) If the location is non-English, translate it to English for the tool call, but keep the user's language in your reply if possible.
4) Always include temperature, humidity and wind when available.
5) Be brief and helpful. Use bullet points for data and one short line for advice.
6) If the user asks for activities, tailor suggestions to the current conditions.
7) If the tool fails or returns incomplete data, say so plainly and ask for the minimum info needed to try again.

Output format (when you have data):
- Headline: "<Location>: <Condition>, <Temp>°"
- Bullets: Humidity, Wind, Feels-like
- One-liner: "Tip" or suggested activities if asked."""


def get_system_prompt() -> str:
    """Generate system prompt with current timestamp."""
    now = datetime.now()
    timestamp = now.strftime("%A, %B %d, %Y at %I:%M %p")

    return f"""{INSTRUCTIONS}

Current time: {timestamp}"""


def _history_messages(session_id: str) -> list[ChatCompletionMessageParam]:
    """Replay stored turns as chat messages."""
    messages: list[ChatCompletionMessageParam] = []
    for turn in session_store.get_session(session_id):
        messages.append({"role": "user", "content": turn["user_input"]})
        messages.append({"role": "assistant", "content": turn["final_response"]})
    return messages


async def process_message(
    client: AsyncOpenAI,
    user_message: str,
    session_id: str = DEFAULT_SESSION,
    model: str = DEFAULT_MODEL,
) -> str:
    """Process a user message and return the assistant response.

    Handles the tool execution loop internally and records the finished
    turn in the session store.

    Args:
        client: AsyncOpenAI client instance
        user_message: What the user typed
        session_id: Conversation memory key
        model: Model to use for chat completion

    Returns:
        Final text response
    """
    messages: list[ChatCompletionMessageParam] = [
        {"role": "system", "content": get_system_prompt()},
        *_history_messages(session_id),
        {"role": "user", "content": user_message},
    ]
    used_tools: list[dict[str, Any]] = []

    while True:
        kwargs: dict = {
            "model": model,
            "messages": messages,
        }
        if TOOLS:
            kwargs["tools"] = TOOLS

        response = await client.chat.completions.create(**kwargs)  # type: ignore[arg-type]

        choice = response.choices[0]
        message = choice.message

        # No tool calls - this is the answer
        if not message.tool_calls:
            final_response = message.content or ""
            session_store.append_turn(session_id, user_message, final_response, used_tools)
            return final_response

        # Add assistant message with tool calls
        tool_calls = cast(list[ChatCompletionMessageToolCall], message.tool_calls)
        messages.append({
            "role": "assistant",
            "content": message.content,
            "tool_calls": [
                {
                    "id": tc.id,
                    "type": "function",
                    "function": {
                        "name": tc.function.name,
                        "arguments": tc.function.arguments,
                    },
                }
                for tc in tool_calls
            ],
        })

        # Execute each tool and add results
        for tool_call in tool_calls:
            name = tool_call.function.name
            args = json.loads(tool_call.function.arguments)

            logger.info("Tool call: %s %s", name, args)
            used_tools.append({"name": name, "arguments": args})
            result = await execute_tool(name, args)

            messages.append({
                "role": "tool",
                "tool_call_id": tool_call.id,
                "content": result,
            })
