from __future__ import annotations


class DiceError(ValueError):
    """Base for every failure raised while parsing, building or rolling.

    Messages carry a stable ``[CODE]`` prefix so callers on the far side of a
    text-only boundary can still tell failures apart.
    """

    code = "DICE_ERROR"
    default_message = "Dice expression failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(f"[{self.code}] {message or self.default_message}")


class InvalidDie(DiceError):
    code = "INVALID_DIE"
    default_message = "Dice need at least one side and a non-negative count. Example: '2d6'."


class InvalidExpression(DiceError):
    code = "INVALID_EXPRESSION"
    default_message = "Not a valid dice expression. Example: '2d6 + 3 - d20'."


class IntegerTooLarge(InvalidExpression):
    code = "INTEGER_TOO_LARGE"
    default_message = "Number is too large; literals must fit in 63 bits."


class OverflowPositive(DiceError):
    code = "OVERFLOW_POSITIVE"
    default_message = "Sum is too high for a 64-bit integer."


class OverflowNegative(DiceError):
    code = "OVERFLOW_NEGATIVE"
    default_message = "Sum is too low for a 64-bit integer."


class NoExpression(DiceError):
    code = "NO_EXPRESSION"
    default_message = "No expression was parsed or supplied before finalizing the roll."


class ExceededCap(DiceError):
    code = "EXCEEDED_CAP"
    default_message = "Expression needs more rolls than allowed."


def negate_error(err: DiceError) -> DiceError:
    """Swap the direction of an overflow error; pass anything else through."""
    if isinstance(err, OverflowPositive):
        return OverflowNegative()
    if isinstance(err, OverflowNegative):
        return OverflowPositive()
    return err
