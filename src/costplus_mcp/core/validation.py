"""Schema validation for tool input.

Tool schemas are pydantic models. ``validate_tool_input`` either returns the
parsed model wrapped in ``ValidatedInput`` or raises
``ToolInputValidationError`` carrying pydantic's error list, which the tool
turns into a failure envelope.
"""

import logging
from dataclasses import dataclass
from typing import Any, Generic, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from costplus_mcp.core.errors.upstream import ToolInputValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ValidatedInput(Generic[ModelT]):
    """Successfully validated tool input."""

    data: ModelT


def validate_tool_input(
    schema: Type[ModelT],
    raw: Optional[Mapping[str, Any]],
    tool_name: str,
) -> ValidatedInput[ModelT]:
    """Validate ``raw`` against ``schema``.

    Args:
        schema: Pydantic model describing the tool's parameters
        raw: Raw arguments as received from the MCP client
        tool_name: Used in the error message and logs

    Raises:
        ToolInputValidationError: When ``raw`` does not satisfy ``schema``
    """
    try:
        model = schema.model_validate(dict(raw or {}))
    except ValidationError as e:
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in e.errors(include_url=False, include_context=False)
        ]
        logger.info("Rejected input for %s: %d validation error(s)", tool_name, len(errors))
        raise ToolInputValidationError(tool_name, errors) from e
    return ValidatedInput(data=model)
