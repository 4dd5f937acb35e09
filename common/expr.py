"""
Arithmetic expression grammar for answer checking by numeric sampling.

Grammar (lowest to highest precedence):
    sum      := product (('+' | '-') product)*
    product  := unary (('*' | '/') unary | <implicit> power)*
    unary    := ('+' | '-') unary | power
    power    := primary ('^' unary)?            (right-associative)
    primary  := number | variable | pi
              | func '(' sum (',' sum)* ')'
              | '√' ['[' sum ']'] primary
              | '(' sum ')'

Accepted spellings: ``·``/``×`` for ``*``, ``**`` for ``^``, braces as
parentheses, ``π``/``pi``, ``sqrt abs ln log exp sin cos tan root``.
Variables are single letters, so ``2ab`` reads as ``2*a*b``.

Evaluation never raises: domain errors (zero divisor, negative radicand,
logarithm of a non-positive number, fractional power of a negative base,
overflow) produce ``nan`` and equivalence sampling treats any non-finite
sample as a mismatch.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple, Union

from common.errors import ExpressionSyntaxError
from common.prng import Lcg

logger = logging.getLogger(__name__)

NAN = float("nan")

SAMPLING_SEED = 123456789
DEFAULT_SAMPLES = 6
DEFAULT_TOLERANCE = 1e-6


# ---------------------------------------------------------------------------
# AST
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Num:
    value: float


@dataclass(frozen=True, slots=True)
class Var:
    name: str


@dataclass(frozen=True, slots=True)
class Neg:
    operand: "ExprNode"


@dataclass(frozen=True, slots=True)
class BinOp:
    op: str
    left: "ExprNode"
    right: "ExprNode"


@dataclass(frozen=True, slots=True)
class Call:
    name: str
    args: Tuple["ExprNode", ...]


ExprNode = Union[Num, Var, Neg, BinOp, Call]

FUNCTION_ARITY: Dict[str, int] = {
    "sin": 1,
    "cos": 1,
    "tan": 1,
    "sqrt": 1,
    "abs": 1,
    "ln": 1,
    "log": 1,
    "exp": 1,
    "root": 2,
}


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

class TokenKind(Enum):
    NUMBER = auto()
    NAME = auto()
    FUNC = auto()
    PI = auto()
    OP = auto()
    RADICAL = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    COMMA = auto()
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    value: str
    pos: int


_WORDS = sorted(list(FUNCTION_ARITY) + ["pi"], key=len, reverse=True)

_TOKEN_PATTERNS = [
    (r"\s+", None),
    (r"\d+(?:\.\d*)?|\.\d+", TokenKind.NUMBER),
    (r"\*\*", TokenKind.OP),
    (r"[+\-*/^·×÷−]", TokenKind.OP),
    (r"π", TokenKind.PI),
    (r"√", TokenKind.RADICAL),
    (r"[({]", TokenKind.LPAREN),
    (r"[)}]", TokenKind.RPAREN),
    (r"\[", TokenKind.LBRACKET),
    (r"\]", TokenKind.RBRACKET),
    (r",", TokenKind.COMMA),
]

_COMPILED_PATTERNS = [(re.compile(p), k) for p, k in _TOKEN_PATTERNS]

_OP_ALIASES = {"**": "^", "·": "*", "×": "*", "÷": "/", "−": "-"}


def tokenize(text: str) -> List[Token]:
    """Split an arithmetic expression into tokens."""
    tokens: List[Token] = []
    pos = 0
    lower = text.lower()
    while pos < len(text):
        if text[pos].isalpha() and text[pos] != "π":
            word = next((w for w in _WORDS if lower.startswith(w, pos)), None)
            if word == "pi":
                tokens.append(Token(TokenKind.PI, word, pos))
                pos += 2
            elif word is not None:
                tokens.append(Token(TokenKind.FUNC, word, pos))
                pos += len(word)
            elif text[pos].isascii():
                tokens.append(Token(TokenKind.NAME, text[pos], pos))
                pos += 1
            else:
                raise ExpressionSyntaxError(f"unknown symbol {text[pos]!r}", pos, text)
            continue
        for pattern, kind in _COMPILED_PATTERNS:
            m = pattern.match(text, pos)
            if m:
                if kind is not None:
                    value = m.group()
                    if kind is TokenKind.OP:
                        value = _OP_ALIASES.get(value, value)
                    tokens.append(Token(kind, value, pos))
                pos = m.end()
                break
        else:
            raise ExpressionSyntaxError(f"unknown symbol {text[pos]!r}", pos, text)
    tokens.append(Token(TokenKind.EOF, "", pos))
    return tokens


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

_PRIMARY_START = frozenset(
    {TokenKind.NUMBER, TokenKind.NAME, TokenKind.FUNC, TokenKind.PI, TokenKind.RADICAL, TokenKind.LPAREN}
)


class ExpressionParser:
    """Recursive descent parser for arithmetic expressions."""

    def __init__(self, tokens: List[Token], source: str = ""):
        self.tokens = tokens
        self.source = source
        self.pos = 0

    def current(self) -> Token:
        return self.tokens[self.pos]

    def _error(self, message: str, tok: Optional[Token] = None) -> ExpressionSyntaxError:
        tok = tok or self.current()
        return ExpressionSyntaxError(message, tok.pos, self.source)

    def consume(self, kind: TokenKind, what: str) -> Token:
        tok = self.current()
        if tok.kind != kind:
            if tok.kind == TokenKind.EOF:
                raise self._error(f"unexpected end of input, expected {what}")
            raise self._error(f"expected {what}, got {tok.value!r}")
        self.pos += 1
        return tok

    def _at_op(self, *ops: str) -> bool:
        tok = self.current()
        return tok.kind == TokenKind.OP and tok.value in ops

    def parse(self) -> ExprNode:
        if self.current().kind == TokenKind.EOF:
            raise self._error("empty expression")
        node = self.parse_sum()
        tok = self.current()
        if tok.kind != TokenKind.EOF:
            raise self._error(f"unexpected {tok.value!r} after expression")
        return node

    def parse_sum(self) -> ExprNode:
        node = self.parse_product()
        while self._at_op("+", "-"):
            op = self.current().value
            self.pos += 1
            node = BinOp(op, node, self.parse_product())
        return node

    def parse_product(self) -> ExprNode:
        node = self.parse_unary()
        while True:
            if self._at_op("*", "/"):
                op = self.current().value
                self.pos += 1
                node = BinOp(op, node, self.parse_unary())
            elif self.current().kind in _PRIMARY_START:
                node = BinOp("*", node, self.parse_power())
            else:
                return node

    def parse_unary(self) -> ExprNode:
        if self._at_op("+", "-"):
            op = self.current().value
            self.pos += 1
            operand = self.parse_unary()
            return Neg(operand) if op == "-" else operand
        return self.parse_power()

    def parse_power(self) -> ExprNode:
        base = self.parse_primary()
        if self._at_op("^"):
            self.pos += 1
            return BinOp("^", base, self.parse_unary())
        return base

    def parse_primary(self) -> ExprNode:
        tok = self.current()
        if tok.kind == TokenKind.NUMBER:
            self.pos += 1
            return Num(float(tok.value))
        if tok.kind == TokenKind.NAME:
            self.pos += 1
            return Var(tok.value)
        if tok.kind == TokenKind.PI:
            self.pos += 1
            return Num(math.pi)
        if tok.kind == TokenKind.LPAREN:
            self.pos += 1
            node = self.parse_sum()
            self.consume(TokenKind.RPAREN, "closing parenthesis")
            return node
        if tok.kind == TokenKind.RADICAL:
            self.pos += 1
            if self.current().kind == TokenKind.LBRACKET:
                self.pos += 1
                index = self.parse_sum()
                self.consume(TokenKind.RBRACKET, "']' after root index")
                return Call("root", (index, self.parse_primary()))
            return Call("sqrt", (self.parse_primary(),))
        if tok.kind == TokenKind.FUNC:
            return self.parse_call()
        if tok.kind == TokenKind.EOF:
            raise self._error("unexpected end of input")
        raise self._error(f"unexpected {tok.value!r}")

    def parse_call(self) -> ExprNode:
        name = self.consume(TokenKind.FUNC, "function name")
        self.consume(TokenKind.LPAREN, f"'(' after {name.value}")
        args = [self.parse_sum()]
        while self.current().kind == TokenKind.COMMA:
            self.pos += 1
            args.append(self.parse_sum())
        self.consume(TokenKind.RPAREN, f"')' closing {name.value}")
        arity = FUNCTION_ARITY[name.value]
        if len(args) != arity:
            raise self._error(f"{name.value} takes {arity} argument(s), got {len(args)}", name)
        return Call(name.value, tuple(args))


def parse_expression(text: str) -> ExprNode:
    """Parse ``text``; raises ExpressionSyntaxError on malformed input."""
    return ExpressionParser(tokenize(text), text).parse()


def free_variables(node: ExprNode) -> FrozenSet[str]:
    if isinstance(node, Var):
        return frozenset({node.name})
    if isinstance(node, Neg):
        return free_variables(node.operand)
    if isinstance(node, BinOp):
        return free_variables(node.left) | free_variables(node.right)
    if isinstance(node, Call):
        result: FrozenSet[str] = frozenset()
        for arg in node.args:
            result = result | free_variables(arg)
        return result
    return frozenset()


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def _power(base: float, exponent: float) -> float:
    if base < 0 and not float(exponent).is_integer():
        return NAN
    if base == 0 and exponent < 0:
        return NAN
    return math.pow(base, exponent)


def _root(index: float, x: float) -> float:
    if index == 0 or not float(index).is_integer():
        return NAN
    if x < 0:
        if int(index) % 2 == 0:
            return NAN
        return -math.pow(-x, 1.0 / index)
    return math.pow(x, 1.0 / index)


def _apply(name: str, args: Sequence[float]) -> float:
    x = args[0]
    if name == "sin":
        return math.sin(x)
    if name == "cos":
        return math.cos(x)
    if name == "tan":
        return math.tan(x)
    if name == "sqrt":
        return NAN if x < 0 else math.sqrt(x)
    if name == "abs":
        return abs(x)
    if name in ("ln", "log"):
        return NAN if x <= 0 else math.log(x)
    if name == "exp":
        return math.exp(x)
    if name == "root":
        return _root(args[0], args[1])
    return NAN


def evaluate(node: ExprNode, env: Mapping[str, float]) -> float:
    """Evaluate ``node``; unknown variables and domain errors yield ``nan``."""
    try:
        value = _evaluate(node, env)
    except (OverflowError, ValueError, ZeroDivisionError):
        return NAN
    return value if math.isfinite(value) else NAN


def _evaluate(node: ExprNode, env: Mapping[str, float]) -> float:
    if isinstance(node, Num):
        return node.value
    if isinstance(node, Var):
        return env.get(node.name, NAN)
    if isinstance(node, Neg):
        return -_evaluate(node.operand, env)
    if isinstance(node, BinOp):
        left = _evaluate(node.left, env)
        right = _evaluate(node.right, env)
        if math.isnan(left) or math.isnan(right):
            return NAN
        if node.op == "+":
            return left + right
        if node.op == "-":
            return left - right
        if node.op == "*":
            return left * right
        if node.op == "/":
            return NAN if right == 0 else left / right
        if node.op == "^":
            return _power(left, right)
        raise ValueError(f"unknown operator {node.op!r}")
    if isinstance(node, Call):
        args = [_evaluate(arg, env) for arg in node.args]
        if any(math.isnan(a) for a in args):
            return NAN
        return _apply(node.name, args)
    raise TypeError(f"not an expression node: {node!r}")


# ---------------------------------------------------------------------------
# Equivalence by sampling
# ---------------------------------------------------------------------------

def sample_points(
    variables: Sequence[str],
    samples: int = DEFAULT_SAMPLES,
    positive_only: bool = False,
    seed: int = SAMPLING_SEED,
) -> List[Dict[str, float]]:
    """
    Deterministic sample environments on a quarter-step grid.

    Positive-only points lie in [1, 8.75]; otherwise in [-3, 5.75] with
    zero replaced by 2.
    """
    rng = Lcg.from_seed(seed)
    points: List[Dict[str, float]] = []
    for _ in range(samples):
        env: Dict[str, float] = {}
        for name in variables:
            if positive_only:
                whole, rng = rng.randint(1, 5)
                extra, rng = rng.randint(0, 3)
                whole += extra
            else:
                whole, rng = rng.randint(-3, 5)
            quarter, rng = rng.randint(0, 3)
            value = whole + quarter / 4
            if value == 0 and not positive_only:
                value = 2.0
            env[name] = value
        points.append(env)
    return points


def values_close(left: float, right: float, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    if not (math.isfinite(left) and math.isfinite(right)):
        return False
    return math.isclose(left, right, rel_tol=1e-9, abs_tol=tolerance)


def expressions_equivalent(
    expected: Union[str, ExprNode],
    given: Union[str, ExprNode],
    variables: Sequence[str],
    *,
    positive_only: bool = False,
    points: Optional[Sequence[Mapping[str, float]]] = None,
    samples: int = DEFAULT_SAMPLES,
    tolerance: float = DEFAULT_TOLERANCE,
) -> bool:
    """
    True when both expressions agree at every sample point.

    A parse failure or any non-finite sample on either side means the
    expressions are not equivalent.
    """
    try:
        left = parse_expression(expected) if isinstance(expected, str) else expected
        right = parse_expression(given) if isinstance(given, str) else given
    except ExpressionSyntaxError as exc:
        logger.debug("equivalence check rejected unparsable input: %s", exc)
        return False

    envs = points if points is not None else sample_points(variables, samples, positive_only)
    for env in envs:
        if not values_close(evaluate(left, env), evaluate(right, env), tolerance):
            return False
    return True


__all__ = [
    "Num",
    "Var",
    "Neg",
    "BinOp",
    "Call",
    "ExprNode",
    "FUNCTION_ARITY",
    "TokenKind",
    "Token",
    "tokenize",
    "ExpressionParser",
    "parse_expression",
    "free_variables",
    "evaluate",
    "sample_points",
    "values_close",
    "expressions_equivalent",
    "SAMPLING_SEED",
]
