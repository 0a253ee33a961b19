"""Tests for the calculator state machine.

Key sequences are fed through handle_key exactly as the window would feed
them, and the observable buffers are checked after each sequence.
"""

import pytest

from calculadora_tactil.core import CalculatorEngine, CalculatorError, Mode, UnknownKeyError, replay


@pytest.fixture
def engine():
    return CalculatorEngine()


def press(engine, *keys):
    for key in keys:
        engine.handle_key(key)
    return engine


def state(engine):
    return (engine.expression, engine.display, engine.just_evaluated)


# --- Clear ---

def test_initial_state(engine):
    assert state(engine) == ("", "0", False)
    assert engine.mode is Mode.ENTERING


@pytest.mark.parametrize("keys", [
    [],
    ["5", "+", "3"],
    ["5", "+", "3", "="],
    ["5", "÷", "0", "="],
    [".", "+/-", "%", "×"],
])
def test_clear_resets_everything(engine, keys):
    press(engine, *keys, "C")
    assert state(engine) == ("", "0", False)
    assert engine.mode is Mode.ENTERING


# --- Digits and decimal point ---

def test_digits_concatenate(engine):
    press(engine, "1", "2", "3", "4")
    assert engine.display == "1234"


def test_leading_zero_is_replaced(engine):
    press(engine, "0", "0", "7")
    assert engine.display == "7"


def test_decimal_point_after_zero(engine):
    press(engine, ".", "5")
    assert engine.display == "0.5"


def test_single_decimal_point(engine):
    press(engine, "1", ".", "2", ".", ".", "3", ".")
    assert engine.display == "1.23"
    assert engine.display.count(".") == 1


# --- Sign toggle ---

@pytest.mark.parametrize("keys", [["4", "2"], ["3", ".", "5"], ["0"]])
def test_sign_toggle_twice_is_identity(engine, keys):
    press(engine, *keys)
    before = engine.display
    press(engine, "+/-")
    if before == "0":
        assert engine.display == "0"
    else:
        assert engine.display == "-" + before
    press(engine, "+/-")
    assert engine.display == before


# --- Operators ---

def test_operator_moves_operand_to_expression(engine):
    press(engine, "5", "+", "3", "×")
    assert engine.expression == "5 + 3 × "
    assert engine.display == "0"


def test_operator_reuses_previous_result(engine):
    press(engine, "5", "+", "3", "=", "×")
    assert engine.expression == "8 × "
    assert engine.display == "0"
    assert engine.just_evaluated is False


def test_result_reuse_keeps_decimal_result(engine):
    press(engine, "1", "÷", "3", "=", "+")
    assert engine.expression == "0.333333 + "


# --- Evaluation ---

def test_precedence_and_pending_operand(engine):
    press(engine, "5", "+", "3", "×", "2", "=")
    assert engine.display == "11"
    assert engine.rendered_expression == "5 + 3 × 2 ="
    assert engine.just_evaluated is True
    assert engine.mode is Mode.EVALUATED


def test_division_result_is_rounded_to_six_decimals(engine):
    press(engine, "1", "÷", "3", "=")
    assert engine.display == "0.333333"
    assert engine.expression == "1 / 3 ="


def test_decimal_operands(engine):
    press(engine, "2", ".", "5", "×", "2", "=")
    assert engine.display == "5"


def test_float_noise_is_hidden(engine):
    press(engine, "0", ".", "1", "+", "0", ".", "2", "=")
    assert engine.display == "0.3"


def test_negative_operand(engine):
    press(engine, "5", "-", "3", "+/-", "=")
    assert engine.display == "8"
    assert engine.expression == "5 - -3 ="


def test_equals_with_empty_expression(engine):
    press(engine, "7", "=")
    assert engine.display == "7"
    assert engine.expression == "7 ="


def test_equals_right_after_operator_uses_zero(engine):
    press(engine, "5", "+", "=")
    assert engine.display == "5"
    assert engine.expression == "5 + 0 ="


def test_digit_after_result_starts_fresh(engine):
    press(engine, "5", "+", "3", "=", "2")
    assert state(engine) == ("", "2", False)


# --- Percent ---

def test_percent_divides_current_operand(engine):
    press(engine, "5", "0", "%")
    assert engine.display == "0.5"


def test_percent_of_hundred(engine):
    press(engine, "1", "0", "0", "%")
    assert engine.display == "1"


def test_percent_applies_to_live_operand_only(engine):
    press(engine, "1", "0", "0", "+", "1", "0", "%", "=")
    assert engine.expression == "100 + 0.1 ="
    assert engine.display == "100.1"


def test_percent_keeps_full_precision(engine):
    press(engine, "1", ".", "2", "3", "4", "5", "6", "7", "8", "%")
    assert float(engine.display) == pytest.approx(0.012345678, rel=1e-12)
    assert "e" not in engine.display


def test_percent_operand_is_evaluated_unrounded(engine):
    press(engine, "1", ".", "2", "3", "4", "5", "6", "7", "8", "%", "×", "1", "0", "0", "=")
    assert engine.display == "1.234568"


def test_percent_of_tiny_operand_is_not_zero(engine):
    press(engine, "0", ".", "0", "0", "0", "0", "1", "%")
    assert float(engine.display) == pytest.approx(1e-7)
    assert engine.display.startswith("0.0000001")


# --- Errors ---

def test_division_by_zero_shows_error(engine):
    press(engine, "5", "÷", "0", "=")
    assert engine.display == "Erreur"
    assert engine.mode is Mode.ERROR
    assert engine.expression == "5 ÷ "


@pytest.mark.parametrize("key", ["+", "-", "×", "÷", ".", "+/-", "%", "="])
def test_error_state_ignores_non_digit_keys(engine, key):
    press(engine, "5", "÷", "0", "=", key)
    assert engine.display == "Erreur"
    assert engine.expression == "5 ÷ "


def test_repeated_equals_shows_error(engine):
    press(engine, "5", "+", "3", "=", "=")
    assert engine.display == "Erreur"
    assert engine.expression == "5 + 3 ="
    assert engine.mode is Mode.ERROR


def test_failed_equals_keeps_just_evaluated(engine):
    press(engine, "5", "+", "3", "=", "=")
    assert engine.just_evaluated is True
    assert engine.snapshot().just_evaluated is True

    press(engine, "2")
    assert state(engine) == ("", "2", False)


def test_failed_equals_while_entering_keeps_flag_false(engine):
    press(engine, "5", "÷", "0", "=")
    assert engine.just_evaluated is False


def test_digit_recovers_from_error(engine):
    press(engine, "5", "÷", "0", "=", "4")
    assert state(engine) == ("", "4", False)
    assert engine.mode is Mode.ENTERING


def test_evaluator_failure_is_not_propagated():
    def failing(text):
        raise CalculatorError("boom")

    engine = press(CalculatorEngine(evaluator=failing), "1", "+", "1", "=")
    assert engine.display == "Erreur"


def test_evaluator_receives_translated_text():
    seen = []

    def recording(text):
        seen.append(text)
        return 6.0

    press(CalculatorEngine(evaluator=recording), "3", "×", "4", "÷", "2", "=")
    assert seen == ["3 * 4 / 2"]


def test_unknown_key_raises(engine):
    with pytest.raises(UnknownKeyError):
        engine.handle_key("sqrt")
    assert isinstance(UnknownKeyError("x"), ValueError)


# --- Observers ---

def test_subscribers_receive_snapshots(engine):
    received = []
    unsubscribe = engine.subscribe(received.append)

    press(engine, "4", "×", "2", "=")
    assert [s.key for s in received] == ["4", "×", "2", "="]
    assert received[-1].display == "8"
    assert received[-1].rendered_expression == "4 × 2 ="
    assert received[-1].just_evaluated is True

    unsubscribe()
    press(engine, "C")
    assert len(received) == 4


def test_replay_returns_final_snapshot():
    snapshot = replay(["9", "-", "4", "="])
    assert snapshot.display == "5"
    assert snapshot.expression == "9 - 4 ="
    assert snapshot.mode is Mode.EVALUATED
