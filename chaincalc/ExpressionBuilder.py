# ExpressionBuilder.py
"""""
Incremental composition of the expression shown on the calculator display.

Every function here is a pure transition: it takes a CompositionState (plus the
CalculatorConfig with the text resources) and returns a *new* state together
with the text to display. Nothing is mutated in place.

Adjacency rules
---------------
Three flags are enough to keep the buffer evaluable at all times:
- last_token_was_digit : an operand is currently open (operator / dot / equals allowed)
- last_token_was_dot   : the current number already has a decimal separator
- in_error_state       : the last evaluation failed, only a digit may follow

Rejected input (operator after operator, second dot in one number, operator or
dot at the start) is silently dropped: state and display text stay the same.
"""""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class CompositionState:
    buffer: str = ""
    last_token_was_digit: bool = True
    last_token_was_dot: bool = False
    in_error_state: bool = False


def new_state():
    """Return the state of a freshly started (or cleared) session."""
    return CompositionState()


def has_operand(state):
    """True if the buffer ends in something an operator, dot or '=' may follow."""
    # An empty buffer is displayed as zero_text but holds no operand.
    return state.last_token_was_digit and state.buffer != ""


def append_digit(state, token, config):
    """Append a digit token. Always accepted, also clears the error flag."""
    new = replace(state,
                  buffer=state.buffer + token,
                  last_token_was_digit=True,
                  in_error_state=False)
    return new, new.buffer


def append_operator(state, symbol, config):
    if not has_operand(state) or state.in_error_state:
        return state, state.buffer

    new = replace(state,
                  buffer=state.buffer + symbol,
                  last_token_was_digit=False,
                  last_token_was_dot=False)
    return new, new.buffer


def append_dot(state, config):
    if not has_operand(state) or state.in_error_state or state.last_token_was_dot:
        return state, state.buffer

    new = replace(state,
                  buffer=state.buffer + config.dot_glyph,
                  last_token_was_digit=False,
                  last_token_was_dot=True)
    return new, new.buffer


def clear(state, config):
    """Reset everything. The display shows zero_text, not the (empty) buffer."""
    return new_state(), config.zero_text


def seed_with_result(state, text, config):
    """Start a new composition from an evaluated result (chained calculation).

    The text is trusted and appended without adjacency checks. If it already
    carries a decimal separator or an exponent, another dot is refused until an
    operator follows, while digits may still extend the number.
    """
    cleared, _ = clear(state, config)
    new = replace(cleared,
                  buffer=text,
                  last_token_was_dot=config.dot_glyph in text or "e" in text.lower())
    return new, new.buffer
