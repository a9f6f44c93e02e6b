"""Tests for the numeric input modal."""

from __future__ import annotations

import pytest

from arangotui.browser.modal import DEFAULT_LIMIT, InputModal, ModalOutcome, parse_limit


@pytest.fixture()
def modal() -> InputModal:
    m = InputModal()
    m.open()
    return m


def test_digits_then_confirm(modal: InputModal) -> None:
    assert modal.handle_key("1").outcome is ModalOutcome.EDITED
    assert modal.handle_key("0").outcome is ModalOutcome.EDITED
    assert modal.buffer == "10"

    result = modal.handle_key("enter")

    assert result.outcome is ModalOutcome.CONFIRMED
    assert result.value == 10
    assert modal.active is False


def test_empty_buffer_defaults_to_ten(modal: InputModal) -> None:
    result = modal.handle_key("enter")
    assert result.value == DEFAULT_LIMIT == 10


def test_backspace_removes_last_character(modal: InputModal) -> None:
    for key in ("2", "5", "backspace"):
        modal.handle_key(key)
    assert modal.buffer == "2"

    modal.handle_key("backspace")
    modal.handle_key("backspace")
    assert modal.buffer == ""
    assert modal.active is True


def test_cancel_discards_buffer(modal: InputModal) -> None:
    modal.handle_key("7")
    result = modal.handle_key("escape")

    assert result.outcome is ModalOutcome.CANCELLED
    assert result.value is None
    assert modal.active is False
    assert modal.buffer == ""


@pytest.mark.parametrize("key", ["q", "g", "d", "up", "down", "pagedown", "a", "-"])
def test_non_digit_keys_are_swallowed(modal: InputModal, key: str) -> None:
    result = modal.handle_key(key)
    assert result.outcome is ModalOutcome.EDITED
    assert modal.buffer == ""
    assert modal.active is True


def test_handle_key_requires_open_modal() -> None:
    with pytest.raises(RuntimeError):
        InputModal().handle_key("1")


@pytest.mark.parametrize(
    ("buffer", "expected"),
    [("", 10), ("0", 0), ("007", 7), ("x1", 10), ("-4", 10), ("250", 250)],
)
def test_parse_limit(buffer: str, expected: int) -> None:
    assert parse_limit(buffer) == expected


def test_custom_default() -> None:
    modal = InputModal(default=25)
    modal.open()
    assert modal.handle_key("enter").value == 25
