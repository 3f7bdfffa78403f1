"""Tool registry base with decorator pattern."""

import argparse
import asyncio
import inspect
import logging
from typing import Awaitable, Callable, TypeVar, Union

from pydantic import BaseModel
from openai import pydantic_function_tool

T = TypeVar("T", bound=BaseModel)

Handler = Callable[[T], Union[str, Awaitable[str]]]

logger = logging.getLogger(__name__)

# Internal registries
_TOOLS: list = []
_HANDLERS: dict[str, tuple[type[BaseModel], Callable]] = {}


def tool(model: type[T]) -> Callable[[Handler], Handler]:
    """Decorator to register a tool with its Pydantic model.

    Handlers may be plain or async functions.

    Usage:
        @tool(GetWeather)
        async def get_weather(params: GetWeather) -> str:
            ...
    """
    def decorator(func: Handler) -> Handler:
        _TOOLS.append(pydantic_function_tool(model))
        _HANDLERS[model.__name__] = (model, func)
        return func
    return decorator


async def execute_tool(name: str, args: dict) -> str:
    """Execute a tool by name with given arguments.

    Failures come back as an error string for the model to read.
    """
    if name not in _HANDLERS:
        return f"Error: Unknown tool '{name}'"

    model_class, handler = _HANDLERS[name]
    try:
        params = model_class(**args)
        result = handler(params)
        if inspect.isawaitable(result):
            result = await result
        return result
    except Exception as e:
        logger.warning("Tool %s failed: %s", name, e)
        return f"Error executing {name}: {e}"


def get_tools() -> list:
    """Get all registered tools."""
    return _TOOLS


def run(model: type[T], handler: Handler) -> None:
    """Run a tool once from the command line, one --flag per model field."""
    parser = argparse.ArgumentParser(description=(model.__doc__ or "").strip())
    for field_name, field in model.model_fields.items():
        parser.add_argument(
            f"--{field_name.replace('_', '-')}",
            dest=field_name,
            required=field.is_required(),
            help=field.description,
        )

    args = {k: v for k, v in vars(parser.parse_args()).items() if v is not None}
    try:
        result = handler(model(**args))
        if inspect.isawaitable(result):
            result = asyncio.run(result)
    except Exception as e:
        raise SystemExit(f"Error: {e}")
    print(result)
