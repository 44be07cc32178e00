"""Tests for option resolution (cli/options.py).

Every test passes ``environ`` explicitly so the host environment never
leaks in.
"""

from __future__ import annotations

import pytest

from serf_members.cli.options import resolve_config
from serf_members.core.models import MembersConfig
from serf_members.exceptions import OptionParseError


class TestDefaults:
    def test_no_args(self) -> None:
        assert resolve_config([], environ={}) == MembersConfig()

    def test_env_supplies_rpc_defaults(self) -> None:
        cfg = resolve_config(
            [],
            environ={"SERF_RPC_ADDR": "10.0.0.9:7373", "SERF_RPC_AUTH": "token"},
        )
        assert cfg.rpc_address == "10.0.0.9:7373"
        assert cfg.rpc_auth == "token"

    def test_empty_env_values_ignored(self) -> None:
        cfg = resolve_config([], environ={"SERF_RPC_ADDR": "", "SERF_RPC_AUTH": ""})
        assert cfg.rpc_address == "127.0.0.1:7373"
        assert cfg.rpc_auth is None

    def test_option_overrides_env(self) -> None:
        cfg = resolve_config(
            ["-rpc-addr=192.168.0.1:7373"],
            environ={"SERF_RPC_ADDR": "10.0.0.9:7373"},
        )
        assert cfg.rpc_address == "192.168.0.1:7373"


class TestOptionForms:
    @pytest.mark.parametrize(
        "argv",
        [
            ["-role=web", "-status=alive"],
            ["-role", "web", "-status", "alive"],
            ["--role", "web", "--status=alive"],
        ],
    )
    def test_single_and_double_dash(self, argv: list[str]) -> None:
        cfg = resolve_config(argv, environ={})
        assert cfg.role_filter == "web"
        assert cfg.status_filter == "alive"

    @pytest.mark.parametrize("flag", ["-detailed", "--detailed"])
    def test_detailed(self, flag: str) -> None:
        assert resolve_config([flag], environ={}).detailed is True

    def test_regexp_with_equals_sign(self) -> None:
        cfg = resolve_config(["-role=a=b"], environ={})
        assert cfg.role_filter == "a=b"

    def test_invalid_regexp_is_not_an_option_error(self) -> None:
        cfg = resolve_config(["-role=("], environ={})
        assert cfg.role_filter == "("

    def test_rpc_auth(self) -> None:
        assert resolve_config(["-rpc-auth=k"], environ={}).rpc_auth == "k"

    def test_json_format(self) -> None:
        assert resolve_config(["-format=json"], environ={}).output_format == "json"

    def test_verbose(self) -> None:
        assert resolve_config(["-v"], environ={}).verbose is True


class TestParseErrors:
    @pytest.mark.parametrize(
        "argv",
        [
            ["-bogus"],
            ["--detailed=yes"],
            ["-role"],
            ["stray"],
            ["-format=xml"],
            ["--det"],
        ],
    )
    def test_raises_option_parse_error(self, argv: list[str]) -> None:
        with pytest.raises(OptionParseError):
            resolve_config(argv, environ={})

    def test_hint_carries_usage(self) -> None:
        with pytest.raises(OptionParseError) as exc_info:
            resolve_config(["-bogus"], environ={})
        assert exc_info.value.hint is not None
        assert exc_info.value.hint.startswith("usage: serf-members")


class TestDashLeadingValues:
    @pytest.mark.parametrize(
        ("argv", "field", "expected"),
        [
            (["-role", "-web"], "role_filter", "-web"),
            (["-status", "-x"], "status_filter", "-x"),
            (["--role", "--db"], "role_filter", "--db"),
            (["-role=-web"], "role_filter", "-web"),
        ],
    )
    def test_separate_value_taken_verbatim(
        self, argv: list[str], field: str, expected: str,
    ) -> None:
        cfg = resolve_config(argv, environ={})
        assert getattr(cfg, field) == expected

    def test_following_flags_still_parsed(self) -> None:
        cfg = resolve_config(["-role", "-web", "-detailed", "-status", "-x"], environ={})
        assert cfg.role_filter == "-web"
        assert cfg.status_filter == "-x"
        assert cfg.detailed is True

    def test_flag_after_double_dash_is_not_folded(self) -> None:
        with pytest.raises(OptionParseError):
            resolve_config(["--", "-role", "web"], environ={})
