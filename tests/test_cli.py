import sys
from pathlib import Path

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from sample_types import Address, Order

from typeahead import typeahead_cli
from typeahead.typeahead_builtins import Math
from typeahead.typeahead_errors import ParseError

ORDER_MEMBERS = ["id", "name", "price", "label", "status"]


def test_run_typeahead_prints_resolution(capsys: pytest.CaptureFixture[str]) -> None:
    resolution = typeahead_cli.run_typeahead("it.address.", Order)
    assert resolution.type is Address
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "fragment: it.address",
        "type: Address",
        "class identifier: False",
    ]


def test_run_typeahead_lists_static_members(
    capsys: pytest.CaptureFixture[str],
) -> None:
    resolution = typeahead_cli.run_typeahead("Math.", members=True)
    assert resolution.type is Math
    assert resolution.is_class_identifier
    out = capsys.readouterr().out
    assert "  field PI: float" in out
    assert "  method Sqrt: float" in out


def test_run_typeahead_caret(capsys: pytest.CaptureFixture[str]) -> None:
    typeahead_cli.run_typeahead("it.address.city", Order, caret=10, members=True)
    out = capsys.readouterr().out
    assert "type: Address" in out
    assert "  field zip_code: int" in out
    assert "  method format: str" in out


def test_run_typeahead_nothing_to_resolve(
    capsys: pytest.CaptureFixture[str],
) -> None:
    typeahead_cli.run_typeahead("", members=True)
    assert "type: None" in capsys.readouterr().out


def test_run_typeahead_offers_context_members_when_unresolved(
    capsys: pytest.CaptureFixture[str],
) -> None:
    resolution = typeahead_cli.run_typeahead("", Order, members=True)
    assert resolution == (None, False)
    out = capsys.readouterr().out.splitlines()
    assert out[3] == "  parameter it: Order"
    assert "  field address: Address" in out[4:]
    assert "  property label: str" in out[4:]
    assert "  method scale: float" in out[4:]


def test_run_typeahead_context_type_by_name(
    capsys: pytest.CaptureFixture[str],
) -> None:
    typeahead_cli.run_typeahead('Order.parse("x").address.', Order)
    assert "type: Address" in capsys.readouterr().out


def test_run_typeahead_legacy(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(ParseError):
        typeahead_cli.run_typeahead("int32(it.price)", Order)
    typeahead_cli.run_typeahead("int32(it.price)", Order, legacy=True)
    assert "type: int" in capsys.readouterr().out


def test_main_with_type(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(
        sys, "argv", ["typeahead", "it.history[0].", "-t", "sample_types:Order"]
    )
    typeahead_cli.main()
    assert "type: Address" in capsys.readouterr().out


def test_main_from_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = tmp_path / "expr.txt"
    path.write_text("it.address.\n")
    monkeypatch.setattr(
        sys, "argv", ["typeahead", str(path), "-f", "-t", "sample_types:Order"]
    )
    typeahead_cli.main()
    assert "fragment: it.address" in capsys.readouterr().out


def test_main_legacy_flag(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(
        sys,
        "argv",
        ["typeahead", "int32(it.price)", "--legacy", "-t", "sample_types:Order"],
    )
    typeahead_cli.main()
    assert "type: int" in capsys.readouterr().out


def test_main_config_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = tmp_path / "config.json"
    path.write_text('{"is_case_sensitive": true}')
    monkeypatch.setattr(
        sys,
        "argv",
        ["typeahead", "it.ID", "-t", "sample_types:Order", "--config", str(path)],
    )
    with pytest.raises(SystemExit) as e:
        typeahead_cli.main()
    assert e.value.code == 1
    assert "error:" in capsys.readouterr().err


@pytest.mark.parametrize(  # type: ignore[misc]
    "argv",
    [
        ["typeahead", "it.missing", "-t", "sample_types:Order"],
        ["typeahead", "it.id", "-t", "no_colon"],
        ["typeahead", "it.id", "-c", "99"],
        ["typeahead", "missing_file.txt", "-f"],
    ],
)
def test_main_errors_exit_with_status_one(
    argv: list[str],
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(sys, "argv", argv)
    with pytest.raises(SystemExit) as e:
        typeahead_cli.main()
    assert e.value.code == 1
    assert capsys.readouterr().err.startswith("error:")


def test_main_verbose_logs_to_stderr(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["typeahead", "Math.", "--verbose"])
    typeahead_cli.main()
    assert "type: Math" in capsys.readouterr().out


@settings(  # type: ignore[misc]
    suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=25
)
@given(member=st.sampled_from(ORDER_MEMBERS))  # type: ignore[misc]
def test_run_typeahead_any_member(
    member: str, capsys: pytest.CaptureFixture[str]
) -> None:
    resolution = typeahead_cli.run_typeahead(f"it.{member}", Order)
    assert not resolution.is_class_identifier
    assert f"fragment: it.{member}" in capsys.readouterr().out
