"""Weather Assistant - chat with a weather agent in the terminal."""

import asyncio
import logging
import os

from dotenv import load_dotenv
load_dotenv()

from openai import AsyncOpenAI

from assistant import process_message

# Configuration
MODEL = os.getenv("MODEL", "gpt-4o-mini")
SESSION_ID = os.getenv("SESSION_ID", "default")
DEBUG = os.getenv("DEBUG", "").lower() in ("1", "true", "yes")

EXIT_COMMANDS = ("quit", "exit", "bye")


def log(msg: str) -> None:
    """Print log message with flush."""
    print(msg, flush=True)


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.ERROR,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def chat() -> None:
    """Read-eval-print loop over one session."""
    client = AsyncOpenAI()

    log("Weather Assistant. Ask about current conditions anywhere.")
    log(f"Session: {SESSION_ID}. Type 'quit' to stop.")
    log("")

    while True:
        text = (await asyncio.to_thread(input, "You: ")).strip()
        if not text:
            continue
        if text.lower() in EXIT_COMMANDS:
            break

        response = await process_message(client, text, session_id=SESSION_ID, model=MODEL)
        log(f"Assistant: {response}")
        log("")


def main() -> None:
    """Main entry point."""
    configure_logging()
    try:
        asyncio.run(chat())
    except (KeyboardInterrupt, EOFError):
        pass
    log("\nGoodbye.")


if __name__ == "__main__":
    main()
