#!/usr/bin/env python3

import click
import pytest
from click.testing import CliRunner

from json_spec.cli_utils import reconstruct_command_line
from json_spec.json_spec import generate


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Without an active Click context the program name is returned"""
        assert reconstruct_command_line(generate) == "json_spec"
        assert reconstruct_command_line(generate, "json_spec generate") == "json_spec generate"

    def test_reconstruct_command_line_with_context(self, tmp_path):
        """Arguments come first, then options that differ from their default"""
        spec_path = tmp_path / "tree.json"
        spec_path.write_text("{}")
        seen = []

        @click.command()
        @click.option("--name", "-n", default=None)
        @click.option("--flag", is_flag=True, default=False)
        @click.argument("path", type=click.Path())
        def command(name, flag, path):
            seen.append(reconstruct_command_line(command, "tool"))

        result = CliRunner().invoke(command, [str(spec_path), "--name", "tree"])
        assert result.exit_code == 0, result.output
        assert seen == ["tool tree.json --name tree"]


if __name__ == "__main__":
    pytest.main([__file__])
