"""Parse failures for perf sched timehist lines."""


class ParseError(ValueError):
    """A line is not a valid timehist record.

    Carries the offending line and the cursor position where parsing stopped.
    """

    kind = "ParseError"

    def __init__(self, message: str, line: str = "", pos: int = 0):
        super().__init__(f"{message} at column {pos}")
        self.line = line
        self.pos = pos


class MalformedNumber(ParseError):
    kind = "MalformedNumber"


class InvalidCpuField(ParseError):
    kind = "InvalidCpuField"


class EmptyTaskName(ParseError):
    kind = "EmptyTaskName"


class InvalidIdentityField(ParseError):
    kind = "InvalidIdentityField"


class MissingSeparator(ParseError):
    kind = "MissingSeparator"


class UnexpectedEndOfInput(ParseError):
    kind = "UnexpectedEndOfInput"
