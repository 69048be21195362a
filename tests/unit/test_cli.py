"""Unit tests for the command-line interface."""
from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from blend_mcp.cli import _account, build_parser
from blend_mcp.server import open_context as real_open_context


class TestBuildParser:
    def test_serve_command(self) -> None:
        parser = build_parser()
        args = parser.parse_args(["serve"])
        assert args.command == "serve"
        assert args.transport is None

    def test_serve_transport(self) -> None:
        parser = build_parser()
        args = parser.parse_args(["serve", "--transport", "sse"])
        assert args.transport == "sse"

    def test_serve_rejects_unknown_transport(self) -> None:
        parser = build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["serve", "--transport", "http2"])

    def test_account_command(self) -> None:
        parser = build_parser()
        args = parser.parse_args(["account", "0x1111111111111111111111111111111111111111"])
        assert args.command == "account"
        assert args.address == "0x1111111111111111111111111111111111111111"

    def test_config_flag(self) -> None:
        parser = build_parser()
        args = parser.parse_args(["--config", "/tmp/c.yaml", "serve"])
        assert args.config == "/tmp/c.yaml"

    def test_log_level_flag(self) -> None:
        parser = build_parser()
        args = parser.parse_args(["--log-level", "DEBUG", "serve"])
        assert args.log_level == "DEBUG"

    def test_no_command(self) -> None:
        parser = build_parser()
        args = parser.parse_args([])
        assert args.command is None


class TestAccountCommand:
    @pytest.mark.asyncio
    async def test_malformed_address_skips_connection(self, sample_app_config, capsys) -> None:
        with patch("blend_mcp.cli.open_context") as open_context:
            ok = await _account(sample_app_config, "not-an-address")

        assert ok is False
        open_context.assert_not_called()
        assert "[InvalidRequest]" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_reads_status(self, sample_app_config, fake_chain, capsys) -> None:
        def with_fake_chain(config):
            return real_open_context(config, AsyncMock(return_value=fake_chain))

        with patch("blend_mcp.cli.open_context", side_effect=with_fake_chain):
            ok = await _account(sample_app_config, "0x" + "22" * 20)

        assert ok is True
        assert "Account status for" in capsys.readouterr().out
