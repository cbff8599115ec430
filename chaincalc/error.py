# error.py


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

class SyntaxError(MathError):
    pass

class CalculationError(MathError):
    pass

class IncompleteExpressionError(MathError):
    pass

class ConfigurationError(MathError):
    pass




Error_Dictionary = {

    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Unexpected Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "3003" : "Division by Zero",
    "3009" : "Missing ')'. ",
    "3010" : "Missing '('. ",
    "3011" : "Unexpected Token: ", # + Token
    "3012" : "Invalid number: ", # + Number
    "3026" : "Number too big.",
    "3027" : "Missing Number.",
    "3030" : "Expression is incomplete.",


    "4001" : "Clipboard not available: ", # + error


    "5001" : "Invalid text resource: ", # + key


    "9999" : "Unexpected Error: " #+error
}


def describe(error):
    """Return '<area>: <message>' for a MathError, used by the UI for printing."""
    area = Error_Dictionary.get(str(error.code)[:1], Error_Dictionary["9"])
    return f"{area} [{error.code}]: {error.message}"
