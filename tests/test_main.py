"""
Tests for main.py prompt helpers.
"""

import pytest

import main
from uniswap_pm.math.position_range import PositionType


@pytest.fixture
def answers(monkeypatch):
    """Подставляет ответы пользователя в input() по очереди."""
    def _set(*values):
        replies = iter(values)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))
    return _set


class TestAskPositionType:

    def test_default(self, answers):
        answers("")
        assert main._ask_position_type() is PositionType.CALL

    def test_invalid_choice_asks_again(self, answers, capsys):
        answers("7", "abc", "2")
        assert main._ask_position_type() is PositionType.PUT
        assert capsys.readouterr().out.count("Неверный выбор") == 2


class TestAskFee:

    def test_default(self, answers):
        answers("")
        assert main._ask_fee() == 3000

    @pytest.mark.parametrize("choice,expected", [("1", 100), ("2", 500), ("4", 10000)])
    def test_choices(self, answers, choice, expected):
        answers(choice)
        assert main._ask_fee() == expected

    def test_invalid_choice_asks_again(self, answers, capsys):
        answers("9", "4")
        assert main._ask_fee() == 10000
        assert "Неверный выбор" in capsys.readouterr().out


class TestAskInt:

    def test_retries_until_int(self, answers):
        answers("x", "-120")
        assert main._ask_int("tick: ") == -120

    def test_default(self, answers):
        answers("")
        assert main._ask_int("decimals: ", 18) == 18
