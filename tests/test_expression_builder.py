import pytest
from hypothesis import given, strategies as st

from chaincalc import ExpressionBuilder as EB
from chaincalc.config_manager import CalculatorConfig

CONFIG = CalculatorConfig()
DIGITS = st.sampled_from(list("0123456789"))
OPERATORS = st.sampled_from(["+", "-", "×", "÷"])


def build(*events, state=None):
    """Feed events ('d:7', 'op:+', 'dot', 'clear') and return (state, text)."""
    state = state or EB.new_state()
    text = ""
    for event in events:
        if event == "dot":
            state, text = EB.append_dot(state, CONFIG)
        elif event == "clear":
            state, text = EB.clear(state, CONFIG)
        elif event.startswith("op:"):
            state, text = EB.append_operator(state, event[3:], CONFIG)
        else:
            state, text = EB.append_digit(state, event[2:], CONFIG)
    return state, text


def test_new_state_is_the_cleared_state():
    cleared, _ = EB.clear(EB.new_state(), CONFIG)
    assert EB.new_state() == cleared


def test_digits_build_a_number():
    state, text = build("d:1", "d:2", "d:3")
    assert text == "123"
    assert state.last_token_was_digit is True


def test_operator_after_digit_is_accepted():
    state, text = build("d:3", "op:+")
    assert text == "3+"
    assert state.last_token_was_digit is False
    assert state.last_token_was_dot is False


def test_operator_after_operator_is_rejected():
    before, _ = build("d:3", "op:+")
    after, text = EB.append_operator(before, "-", CONFIG)
    assert after == before
    assert text == "3+"


@pytest.mark.parametrize("symbol", ["+", "-", "×", "÷"])
def test_operator_at_start_is_rejected(symbol):
    state, text = EB.append_operator(EB.new_state(), symbol, CONFIG)
    assert state == EB.new_state()
    assert text == ""


def test_operator_after_clear_is_rejected():
    state, _ = build("d:5", "clear", "op:+")
    assert state.buffer == ""


def test_dot_uses_configured_glyph():
    state, text = EB.append_dot(build("d:1")[0], CalculatorConfig(dot_glyph=","))
    assert text == "1,"
    assert state.last_token_was_dot is True
    assert state.last_token_was_digit is False


def test_digits_continue_after_dot():
    state, text = build("d:1", "dot", "d:2", "d:5")
    assert text == "1.25"
    assert state.last_token_was_dot is True


def test_second_dot_in_same_number_is_rejected():
    before, _ = build("d:1", "dot", "d:2")
    after, text = EB.append_dot(before, CONFIG)
    assert after == before
    assert text == "1.2"


def test_dot_allowed_again_after_operator():
    _, text = build("d:1", "dot", "d:2", "op:+", "d:3", "dot", "d:4")
    assert text == "1.2+3.4"


def test_dot_at_start_or_after_operator_is_rejected():
    assert build("dot")[0] == EB.new_state()
    before, _ = build("d:1", "op:+")
    assert EB.append_dot(before, CONFIG)[0] == before


def test_clear_returns_zero_text_and_resets_flags():
    state, text = build("d:1", "dot", "d:2", "op:×", "clear")
    assert text == "0"
    assert state.buffer == ""
    assert state.last_token_was_digit is True
    assert state.last_token_was_dot is False
    assert state.in_error_state is False


def test_clear_uses_configured_zero_text():
    _, text = EB.clear(EB.new_state(), CalculatorConfig(zero_text="0.0"))
    assert text == "0.0"


def test_digit_clears_error_state():
    error_state = EB.CompositionState(buffer="", last_token_was_digit=False, in_error_state=True)
    assert EB.append_operator(error_state, "+", CONFIG)[0] == error_state
    assert EB.append_dot(error_state, CONFIG)[0] == error_state

    state, text = EB.append_digit(error_state, "7", CONFIG)
    assert text == "7"
    assert state.in_error_state is False
    assert state.last_token_was_digit is True


def test_seed_with_integral_result():
    state, text = EB.seed_with_result(build("d:2", "op:+", "d:2")[0], "4", CONFIG)
    assert text == "4"
    assert state.last_token_was_digit is True
    assert state.last_token_was_dot is False


def test_seed_with_fractional_result_blocks_dot_but_not_digits():
    state, _ = EB.seed_with_result(EB.new_state(), "2.5", CONFIG)
    assert state.last_token_was_dot is True
    assert EB.append_dot(state, CONFIG)[0] == state
    assert EB.append_digit(state, "1", CONFIG)[1] == "2.51"


def test_transitions_do_not_mutate_input_state():
    state, _ = build("d:9")
    EB.append_operator(state, "+", CONFIG)
    EB.append_dot(state, CONFIG)
    EB.clear(state, CONFIG)
    assert state.buffer == "9"


@given(st.lists(DIGITS))
def test_digits_are_never_rejected(digits):
    state = EB.new_state()
    for digit in digits:
        state, _ = EB.append_digit(state, digit, CONFIG)
    assert state.buffer == "".join(digits)


@given(st.lists(st.one_of(DIGITS.map(lambda d: "d:" + d),
                          OPERATORS.map(lambda o: "op:" + o),
                          st.just("dot"))))
def test_no_two_operators_and_no_double_dot(events):
    state, _ = build(*events)
    buffer = state.buffer
    symbols = set("+-×÷")

    if buffer:
        assert buffer[0] not in symbols
        assert buffer[0] != "."
    for left, right in zip(buffer, buffer[1:]):
        assert not (left in symbols and right in symbols)

    for number in buffer.replace("×", "+").replace("÷", "+").replace("-", "+").split("+"):
        assert number.count(".") <= 1


def test_seed_with_exponent_result_blocks_dot():
    state, _ = EB.seed_with_result(EB.new_state(), "3e-07", CONFIG)
    assert state.last_token_was_dot is True
    assert EB.append_dot(state, CONFIG)[0] == state
