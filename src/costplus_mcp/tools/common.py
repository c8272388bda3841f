"""Shared helpers for the Cost Plus Drugs tool handlers.

Every tool follows the same sequence: validate input against its pydantic
schema, run the query, then wrap the result in a success envelope. Any
exception is classified, logged with the tool's context label and returned
as a failure envelope; nothing escapes the tool boundary.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict
from typing import Any, Awaitable, Callable, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel

from costplus_mcp.core.services import ServiceContainer
from costplus_mcp.core.validation import validate_tool_input

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def handler_context_label(tool_name: str) -> str:
    return f"Error in {tool_name} tool handler"


async def run_tool(
    services: ServiceContainer,
    tool_name: str,
    schema: Type[ModelT],
    raw_input: Optional[Mapping[str, Any]],
    handler: Callable[[ModelT], Awaitable[Any]],
) -> dict:
    """Validate, execute and envelope one tool call.

    Args:
        services: Shared client/formatter services
        tool_name: Canonical tool name (used in labels and failure context)
        schema: Pydantic model for the tool's parameters
        raw_input: Arguments as received from the MCP client
        handler: Coroutine receiving the validated model and returning the payload

    Returns:
        ``asdict`` of the success or failure ``ToolResponse``
    """
    start = time.perf_counter()
    user_input = dict(raw_input or {})

    try:
        validated = validate_tool_input(schema, user_input, tool_name)
        payload = await handler(validated.data)
    except Exception as exc:
        label = handler_context_label(tool_name)
        error = services.classifier.classify(exc, label)
        services.classifier.log(error, label)
        response = services.formatter.wrap_failure(
            error,
            None,
            {"tool_name": tool_name, "user_input": user_input},
        )
        return asdict(response)

    return asdict(services.formatter.wrap_success(payload, start))
