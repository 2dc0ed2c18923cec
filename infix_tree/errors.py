"""
Exception hierarchy for the expression pipeline.

Every error raised by validation, conversion, tree building or evaluation
derives from ExpressionError, itself a ValueError, so callers can catch the
whole family at once.
"""


class ExpressionError(ValueError):
    pass


class InvalidExpression(ExpressionError):
    """Raised when an infix expression fails validation."""

    def __init__(self, expression: str, reason: str = "invalid expression"):
        self.expression = expression
        self.reason = reason
        super().__init__(f"{reason}: {expression!r}")


class MalformedPostfix(ExpressionError):
    """Raised when a postfix sequence cannot be turned into a single tree."""

    def __init__(self, postfix: str, reason: str = "malformed postfix expression"):
        self.postfix = postfix
        self.reason = reason
        super().__init__(f"{reason}: {postfix!r}")


class UndefinedVariable(ExpressionError):

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"undefined variable: {name}")


class DivisionByZero(ExpressionError):

    def __init__(self, message: str = "division by zero"):
        super().__init__(message)


class InvalidOperator(ExpressionError):

    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(f"invalid operator: {operator!r}")


class InvalidAssignment(ExpressionError):
    """Raised for an assignment that is not of the form <letter>=<integer>."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"invalid assignment: {text!r}")
