#!/usr/bin/env python3

import pytest

from dto_codegen.cli_utils import reconstruct_command_line
from dto_codegen.dto_codegen import build, dto_codegen


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Test command reconstruction without active Click context (fallback)"""
        assert reconstruct_command_line(dto_codegen) == "dto_codegen"
        assert reconstruct_command_line(build) == "dto_codegen"

    def test_reconstruct_command_line_returns_string(self):
        result = reconstruct_command_line(build)
        assert isinstance(result, str)
        assert "dto_codegen" in result


if __name__ == "__main__":
    pytest.main([__file__])
