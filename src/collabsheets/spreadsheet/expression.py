"""
Cell expression evaluation.

A cell expression is a number followed by zero or more ``(operator, number)``
pairs with operators ``+ - * /``. Evaluation is a strict left fold with no
operator precedence::

    >>> evaluate("3 + 2 * 4")
    20.0
    >>> evaluate("-5 + 2")
    -3.0

Only the first operand may carry a sign. Anything that does not parse, and
division by zero, evaluates to the fallback value ``0``. ``try_evaluate``
exposes the failure so callers can tell a genuine zero from a fallback.
"""

import operator
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from collabsheets.exceptions import EvaluationError

FALLBACK_VALUE = 0.0

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_EXPRESSION_RE = re.compile(rf"^-?{_NUMBER}(?:[-+*/]{_NUMBER})*$")
_TOKEN_RE = re.compile(rf"(?P<number>{_NUMBER})|(?P<op>[-+*/])")

_OPERATORS: Dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}


@dataclass(frozen=True)
class Evaluation:
    """Tagged outcome of evaluating an expression.

    Attributes:
        value: The computed value, or ``FALLBACK_VALUE`` when evaluation failed
        error: Failure reason, None on success
    """
    value: float
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def _tokenize(text: str) -> Tuple[float, List[Tuple[str, float]]]:
    """Split a whitespace-free expression into a first operand and operator pairs.

    Raises:
        EvaluationError: If the text is empty or not a valid operator chain
    """
    if not text:
        raise EvaluationError("Empty expression")
    if not _EXPRESSION_RE.match(text):
        raise EvaluationError(f"Malformed expression: {text!r}")

    sign = 1.0
    if text.startswith("-"):
        sign = -1.0
        text = text[1:]

    tokens = [m for m in _TOKEN_RE.finditer(text)]
    first = sign * float(tokens[0].group("number"))
    pairs = []
    for op_match, num_match in zip(tokens[1::2], tokens[2::2]):
        pairs.append((op_match.group("op"), float(num_match.group("number"))))
    return first, pairs


def _fold(first: float, pairs: List[Tuple[str, float]]) -> float:
    result = first
    for op, operand in pairs:
        if op == "/" and operand == 0:
            raise EvaluationError("Division by zero")
        result = _OPERATORS[op](result, operand)
    return result


def try_evaluate(text: str) -> Evaluation:
    """Evaluate an expression, reporting failure instead of hiding it.

    Args:
        text: Raw cell input, e.g. ``"100 + 50"``

    Returns:
        Evaluation with the computed value, or the fallback value and the
        failure reason
    """
    if not isinstance(text, str):
        return Evaluation(FALLBACK_VALUE, f"Expected str, got {type(text).__name__}")
    compact = "".join(text.split())
    try:
        first, pairs = _tokenize(compact)
        return Evaluation(_fold(first, pairs))
    except EvaluationError as e:
        return Evaluation(FALLBACK_VALUE, str(e))


def evaluate(text: str) -> float:
    """Evaluate an expression, folding any failure to ``FALLBACK_VALUE``.

    Never raises. Use ``try_evaluate`` to distinguish "genuinely zero" from
    "failed to parse".
    """
    return try_evaluate(text).value
