"""
Tests for build plan rendering.
"""

import json

import pytest

from crossplan.plan.export import FORMATTERS, render, to_dotenv, to_json, to_shell


@pytest.fixture
def plan(assembler):
    return assembler.assemble("aarch64", {"openssl"}, extra_env={"CFLAGS": "-O2 -g"})


class TestShell:
    def test_header_and_exports(self, plan):
        lines = to_shell(plan).splitlines()

        assert lines[0] == "# crossplan: aarch64 (aarch64-unknown-linux-musl)"
        assert "export AARCH64_UNKNOWN_LINUX_MUSL_OPENSSL_STATIC=1" in lines

    def test_values_are_quoted(self, plan):
        assert "export CFLAGS='-O2 -g'" in to_shell(plan)

    def test_sorted(self, plan):
        keys = [line.split("=", 1)[0] for line in to_shell(plan).splitlines()[1:]]

        assert keys == sorted(keys)


class TestDotenv:
    def test_lines(self, plan):
        lines = to_dotenv(plan).splitlines()

        assert "CARGO_BUILD_TARGET=aarch64-unknown-linux-musl" in lines
        assert len(lines) == len(plan.variables)


class TestJson:
    def test_structure(self, plan):
        data = json.loads(to_json(plan))

        assert data["target"] == "aarch64"
        assert data["link_mode"] == "static"
        assert data["dependencies"] == ["OPENSSL"]
        assert data["toolchain"]["compiler"] == data["toolchain"]["linker"]
        assert data["toolchain"]["stdlib"] == "rust-std-aarch64-unknown-linux-musl@latest"
        assert data["variables"] == dict(plan.variables)


class TestRender:
    @pytest.mark.parametrize("fmt", sorted(FORMATTERS))
    def test_known_formats(self, plan, fmt):
        assert render(plan, fmt) == FORMATTERS[fmt](plan)

    def test_unknown_format(self, plan):
        with pytest.raises(ValueError, match="Unknown output format"):
            render(plan, "toml")

    def test_render_is_stable(self, assembler):
        first = render(assembler.assemble("armv7", {"openssl", "musl"}))
        second = render(assembler.assemble("armv7", {"musl", "openssl"}))

        assert first == second
