"""Tests for tool input schema validation."""

import pytest

from costplus_mcp.core.errors import ToolInputValidationError
from costplus_mcp.core.validation import ValidatedInput, validate_tool_input
from costplus_mcp.tools.products import GetAllProductsInput


class TestValidateToolInput:
    """Tests for validate_tool_input."""

    def test_valid_input_returns_model(self):
        result = validate_tool_input(GetAllProductsInput, {"first": 10}, "get_all_products")
        assert isinstance(result, ValidatedInput)
        assert result.data.first == 10

    def test_defaults_applied(self):
        result = validate_tool_input(GetAllProductsInput, None, "get_all_products")
        assert result.data.first == 25
        assert result.data.collection is None

    @pytest.mark.parametrize("first", [0, 1001, -5])
    def test_out_of_range_rejected(self, first):
        with pytest.raises(ToolInputValidationError) as exc_info:
            validate_tool_input(GetAllProductsInput, {"first": first}, "get_all_products")

        error = exc_info.value
        assert error.tool_name == "get_all_products"
        assert error.errors[0]["loc"] == ["first"]
        assert error.errors[0]["type"]
        assert "first" in str(error)

    def test_wrong_type_rejected(self):
        with pytest.raises(ToolInputValidationError):
            validate_tool_input(GetAllProductsInput, {"collection": {"id": 31}}, "get_all_products")

    def test_boundaries_accepted(self):
        assert validate_tool_input(GetAllProductsInput, {"first": 1}, "t").data.first == 1
        assert validate_tool_input(GetAllProductsInput, {"last": 1000}, "t").data.last == 1000
