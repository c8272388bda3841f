"""
Standard response contracts for MCP tool operations.

Callers can use ``from costplus_mcp.core.responses import success_response``
or import from canonical sub-module paths like ``responses.builders``.

Sub-modules:
    types     - ErrorCode, ErrorType, ToolResponse, _build_meta
    builders  - success_response, error_response
    envelope  - ResponseEnvelopeFormatter (wrap_success / wrap_failure)
"""

# --- Core types ---
from costplus_mcp.core.responses.types import (  # noqa: F401
    RESPONSE_VERSION,
    ErrorCode,
    ErrorType,
    ToolResponse,
    _build_meta,
)

# --- Response builders ---
from costplus_mcp.core.responses.builders import (  # noqa: F401
    error_response,
    success_response,
)

# --- Envelope formatting ---
from costplus_mcp.core.responses.envelope import (  # noqa: F401
    CLINICAL_NOTES,
    DEFAULT_NEXT_ACTIONS,
    DISCLAIMER,
    NextAction,
    ResponseEnvelopeFormatter,
    count_results,
)
