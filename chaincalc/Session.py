# Session.py
"""""
The five-event interface between a host (window, keyboard, tests) and the core.

A CalculatorSession owns exactly one CompositionState. Each event replaces it
with the state returned by the pure functions in ExpressionBuilder / Evaluator.
The session is meant to be driven from a single thread (e.g. the Qt event loop);
it does no locking of its own.
"""""

from . import ExpressionBuilder
from . import Evaluator
from . import error as E

# Debug toggle for optional prints in this module
debug = False

CLEAR_KEYS = ["C", "c", "Escape"]
EQUALS_KEYS = ["=", "Enter", "Return"]


class CalculatorSession:

    def __init__(self, config):
        self.config = config
        self.state = ExpressionBuilder.new_state()
        self.expression_text = config.zero_text  # What the expression line shows
        self.result_text = ""  # What the result line shows

    def on_digit(self, token):
        self.state, self.expression_text = ExpressionBuilder.append_digit(self.state, token, self.config)
        return self.expression_text

    def on_operator(self, symbol):
        self.state, text = ExpressionBuilder.append_operator(self.state, symbol, self.config)
        if text != "":
            self.expression_text = text
        return self.expression_text

    def on_dot(self):
        self.state, text = ExpressionBuilder.append_dot(self.state, self.config)
        if text != "":
            self.expression_text = text
        return self.expression_text

    def on_clear(self):
        self.state, self.expression_text = ExpressionBuilder.clear(self.state, self.config)
        self.result_text = ""
        return self.expression_text

    def on_equals(self):
        """Evaluate the expression.

        Returns an EvaluationResult:
        - VALUE      : result shown, expression line continues from it
        - ERROR      : error_text shown, expression cleared
        - INCOMPLETE : nothing evaluated, state and result line untouched
        SyntaxError is not converted and reaches the caller.
        """
        try:
            self.state, result = Evaluator.evaluate(self.state, self.config)

        except E.IncompleteExpressionError as e:
            print(E.describe(e))
            return Evaluator.EvaluationResult.incomplete(self.config.incomplete_expression_text)

        self.result_text = result.display
        if self.state.buffer == "":
            self.expression_text = self.config.zero_text
        else:
            self.expression_text = self.state.buffer

        if debug:
            print(f"{result.kind}: {result.display}")
        return result

    def dispatch(self, key):
        """Route a button label or key text to the matching event.

        Returns the EvaluationResult for '=' and the expression text otherwise.
        Unknown keys are ignored and return the current expression text.
        """
        config = self.config

        if key in Evaluator.Digits:
            return self.on_digit(key)
        elif key in ("+", "-"):
            return self.on_operator(key)
        elif key.lower() in (config.multiply_display.lower(), config.multiply_canonical):
            return self.on_operator(config.multiply_display)
        elif key.lower() in (config.divide_display.lower(), config.divide_canonical):
            return self.on_operator(config.divide_display)
        elif key in (config.dot_glyph, "."):
            return self.on_dot()
        elif key in CLEAR_KEYS:
            return self.on_clear()
        elif key in EQUALS_KEYS:
            return self.on_equals()

        if debug:
            print(f"Ignored key: {key!r}")
        return self.expression_text
