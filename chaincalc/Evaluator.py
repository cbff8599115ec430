# Evaluator.py
"""""
Evaluation of the composed expression for the chained calculator.

Pipeline
--------
1) Normalizer: display glyphs (×, ÷, locale dot) -> canonical glyphs (*, /, .).
2) Tokenizer: converts the normalized string into a flat list of tokens.
3) Parser (AST): recursive-descent, precedence aware (+ - below * /, unary sign, brackets).
4) Evaluator: float arithmetic on the AST.
5) Formatter: integral results without ".0", others positional (never with an exponent).

The result (or the error) is folded back into a new CompositionState so the
next digit continues from what is shown.
"""""

import math
import re
from decimal import Decimal
from dataclasses import dataclass, replace

from . import ExpressionBuilder
from . import error as E

# Debug toggle for optional prints in this module
debug = False

Operations = ["+", "-", "*", "/"]
Digits = ["0", "1", "2", "3", "4", "5", "6", "7", "8", "9"]


# -----------------------------
# Result type
# -----------------------------

@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of pressing '='. kind is one of VALUE, ERROR, INCOMPLETE."""
    VALUE = "value"
    ERROR = "error"
    INCOMPLETE = "incomplete"

    kind: str
    display: str

    @classmethod
    def value(cls, display):
        return cls(cls.VALUE, display)

    @classmethod
    def error(cls, display):
        return cls(cls.ERROR, display)

    @classmethod
    def incomplete(cls, display):
        return cls(cls.INCOMPLETE, display)


# -----------------------------
# AST node types
# -----------------------------

class Number:
    """AST node for a numeric literal."""
    def __init__(self, value):
        self.value = float(value)

    def evaluate(self):
        return self.value

    def __repr__(self):
        return f"Number({self.value!r})"


class BinOp:
    """AST node for a binary operation: left <operator> right."""
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right

    def evaluate(self):
        """Evaluate both subtrees and apply the binary operator."""
        left_value = self.left.evaluate()
        right_value = self.right.evaluate()

        if self.operator == '+':
            return left_value + right_value
        elif self.operator == '-':
            return left_value - right_value
        elif self.operator == '*':
            return left_value * right_value
        elif self.operator == '/':
            if right_value == 0:
                raise E.CalculationError("Division by zero", code="3003")
            return left_value / right_value
        else:
            raise E.SyntaxError(f"Unknown operator: {self.operator}", code="3011")

    def __repr__(self):
        return f"BinOp({self.operator!r}, left={self.left}, right={self.right})"


# -----------------------------
# Normalizer
# -----------------------------

def normalize(problem, config):
    """Replace every display glyph with the glyph the parser understands.

    Multiply/divide display glyphs are matched case-insensitively, so an 'x'
    display glyph also covers 'X'.
    """
    problem = re.sub(re.escape(config.multiply_display), lambda m: config.multiply_canonical,
                     problem, flags=re.IGNORECASE)
    problem = re.sub(re.escape(config.divide_display), lambda m: config.divide_canonical,
                     problem, flags=re.IGNORECASE)
    if config.dot_glyph != ".":
        problem = problem.replace(config.dot_glyph, ".")
    return problem


# -----------------------------
# Tokenizer
# -----------------------------

def translator(problem):
    """Convert a normalized expression string into a token list.

    Numbers become floats, operators and brackets stay single-character strings.
    Exponent notation ('2.5e-07') is accepted as a literal.
    """
    full_problem = []
    b = 0

    while b < len(problem):
        current_char = problem[b]

        # --- Numbers: digits, decimal point, optional exponent ---
        if current_char in Digits or current_char == ".":
            start = b
            has_dot = False
            has_exp = False

            while b < len(problem):
                ch = problem[b]
                if ch in Digits:
                    b += 1
                elif ch == "." and not has_dot and not has_exp:
                    has_dot = True
                    b += 1
                elif ch in "eE" and not has_exp:
                    has_exp = True
                    b += 1
                    if b < len(problem) and problem[b] in "+-":
                        b += 1
                    if b >= len(problem) or problem[b] not in Digits:
                        raise E.SyntaxError(f"Invalid number: {problem[start:b]}", code="3012")
                else:
                    break

            str_number = problem[start:b]
            try:
                full_problem.append(float(str_number))
            except ValueError:
                raise E.SyntaxError(f"Invalid number: {str_number}", code="3012")
            continue

        # --- Operators and brackets ---
        elif current_char in Operations or current_char in "()":
            full_problem.append(current_char)

        # --- Whitespace (ignored) ---
        elif current_char.isspace():
            pass

        else:
            raise E.SyntaxError(f"Unexpected token: {current_char}", code="3011")

        b += 1

    return full_problem


# -----------------------------
# Parser (recursive descent)
# -----------------------------

def parse(tokens):
    """Parse a token list into an AST.

    Precedence via nested functions: factor -> unary -> term -> sum.
    Any token left over after the top-level sum is a syntax error.
    """
    tokens = list(tokens)

    def parse_factor(tokens):
        """Numbers and sub-expressions in '()'."""
        if not tokens:
            raise E.SyntaxError("Missing Number.", code="3027")
        token = tokens.pop(0)

        if token == "(":
            tree_in_brackets = parse_sum(tokens)
            if not tokens or tokens.pop(0) != ")":
                raise E.SyntaxError("Missing closing parenthesis ')'", code="3009")
            return tree_in_brackets
        elif isinstance(token, float):
            return Number(token)
        else:
            raise E.SyntaxError(f"Unexpected token: {token}", code="3011")

    def parse_unary(tokens):
        """Handle leading '+'/'-' (unary minus becomes 0 - operand)."""
        if tokens and tokens[0] in ("+", "-"):
            operator = tokens.pop(0)
            operand = parse_unary(tokens)
            if operator == "-":
                if isinstance(operand, Number):
                    return Number(-operand.evaluate())
                return BinOp(Number(0), "-", operand)
            return operand
        return parse_factor(tokens)

    def parse_term(tokens):
        """Multiplication and division."""
        current_tree = parse_unary(tokens)
        while tokens and tokens[0] in ("*", "/"):
            operator = tokens.pop(0)
            right_part = parse_unary(tokens)
            current_tree = BinOp(current_tree, operator, right_part)
        return current_tree

    def parse_sum(tokens):
        """Addition and subtraction."""
        current_tree = parse_term(tokens)
        while tokens and tokens[0] in ("+", "-"):
            operator = tokens.pop(0)
            right_part = parse_term(tokens)
            current_tree = BinOp(current_tree, operator, right_part)
        return current_tree

    final_tree = parse_sum(tokens)

    if tokens:
        if tokens[0] == ")":
            raise E.SyntaxError("Missing opening parenthesis '('", code="3010")
        raise E.SyntaxError(f"Unexpected token: {tokens[0]}", code="3011")

    if debug:
        print("Final AST:")
        print(final_tree)

    return final_tree


# -----------------------------
# Result formatting
# -----------------------------

def format_result(result, config):
    """Render a float for the display.

    Integral values lose the '.0'. Everything else uses the digits of Python's
    shortest repr written out positionally: 3e-07 becomes '0.0000003'.
    Non-finite values cannot be shown and count as an arithmetic failure.
    """
    if not math.isfinite(result):
        raise E.CalculationError("Number too big.", code="3026")

    if math.ceil(result) == math.floor(result):
        output_string = str(int(result))
    else:
        # Positional notation keeps the buffer free of exponents
        output_string = format(Decimal(repr(result)), "f")

    if config.dot_glyph != ".":
        output_string = output_string.replace(".", config.dot_glyph)
    return output_string


def calculate(problem, config):
    """normalize -> tokenize -> parse -> evaluate -> format. Returns the display string."""
    normalized = normalize(problem, config)
    tokens = translator(normalized)
    if debug:
        print(tokens)
    result = parse(tokens).evaluate()
    return format_result(result, config)


# -----------------------------
# Public entry point
# -----------------------------

def evaluate(state, config):
    """Evaluate the buffer of state and return (new_state, EvaluationResult).

    Raises IncompleteExpressionError (state untouched) when the buffer does not
    end in an operand or is flagged erroneous. SyntaxError from the parser is not
    caught here: with the adjacency rules of ExpressionBuilder it means a bug.
    """
    if not ExpressionBuilder.has_operand(state) or state.in_error_state:
        raise E.IncompleteExpressionError(config.incomplete_expression_text, code="3030",
                                          equation=state.buffer)

    try:
        formatted = calculate(state.buffer, config)

    except E.CalculationError as e:
        e.equation = state.buffer
        if debug:
            print(E.describe(e))
        cleared, _ = ExpressionBuilder.clear(state, config)
        error_state = replace(cleared, in_error_state=True, last_token_was_digit=False)
        return error_state, EvaluationResult.error(config.error_text)

    except E.SyntaxError as e:
        e.equation = state.buffer
        raise

    new_state, _ = ExpressionBuilder.seed_with_result(state, formatted, config)
    return new_state, EvaluationResult.value(formatted)
