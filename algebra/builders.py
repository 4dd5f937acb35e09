"""
One builder per math mode.

Each builder takes the generator and the difficulty and returns
``(Draft, next_rng)``. Draw order matters: reordering two draws changes
every task generated from a stored seed.
"""

from __future__ import annotations

from math import comb, gcd
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from algebra.monomial import Monomial, monomial_to_fraction
from algebra.payloads import (
    BooleanPayload,
    Draft,
    ExpressionForm,
    ExpressionPayload,
    MathMode,
    MonomialPayload,
    NumericPayload,
    PolynomialPayload,
    RadicalPayload,
    RationalPayload,
    TextPayload,
)
from algebra.polynomial import Polynomial, polynomial_to_string
from algebra.radicals import format_sqrt_form, simplify_sqrt
from common.answers import compact
from common.prng import Lcg
from common.rational import ONE, Rational, rational_to_string

Builder = Callable[[Lcg, str], Tuple[Draft, Lcg]]

POWER_BASES = ("a", "b", "x", "y")


def _pick(easy, medium, hard, difficulty: str):
    return {"easy": easy, "medium": medium, "hard": hard}[difficulty]


def _text(*accepts: str) -> TextPayload:
    return TextPayload(tuple(dict.fromkeys(compact(a) for a in accepts)))


def _other(rng: Lcg, pool: Sequence[str], taken: str) -> Tuple[str, Lcg]:
    return rng.choice([p for p in pool if p != taken])


def _linear(a: int, var: str = "x") -> str:
    return var if a == 1 else f"{a}{var}"


def _signed_term(value: Rational) -> str:
    """`` + 3/2`` or `` - 5`` for appending to an expression."""
    return f" - {rational_to_string(-value)}" if value < 0 else f" + {rational_to_string(value)}"


# ---------------------------------------------------------------------------
# mathCalc
# ---------------------------------------------------------------------------

def _operand(r: Rational) -> str:
    text = rational_to_string(r)
    return f"({text})" if r < 0 or not r.is_integer else text


_OP_SYMBOL = {"+": "+", "-": "-", "*": "·", "/": ":"}


def build_calc(rng: Lcg, difficulty: str) -> Tuple[Draft, Lcg]:
    int_range = _pick(9, 15, 20, difficulty)
    den_max = _pick(9, 10, 12, difficulty)
    allow_negative = difficulty != "easy"

    def signed(rng: Lcg, magnitude: int) -> Tuple[int, Lcg]:
        if allow_negative:
            negative, rng = rng.coin()
            if negative:
                return -magnitude, rng
        return magnitude, rng

    def choose_int(rng: Lcg) -> Tuple[Rational, Lcg]:
        n, rng = rng.randint(1, int_range)
        n, rng = signed(rng, n)
        return Rational(n), rng

    def choose_frac(rng: Lcg) -> Tuple[Rational, Lcg]:
        d, rng = rng.randint(2, den_max)
        n, rng = rng.randint(1, int_range)
        n, rng = signed(rng, n)
        return Rational(n, d), rng

    kinds = ["int-op", "frac-op", "simplify"]
    if difficulty == "hard":
        kinds.append("mixed")
    kind, rng = rng.choice(kinds)

    if kind == "simplify":
        den, rng = rng.randint(2, den_max)
        factor, rng = rng.randint(2, 6)
        base, rng = rng.randint(1, int_range)
        num, rng = signed(rng, base * factor)
        raw_d = den * factor
        value = Rational(num, raw_d)
        return Draft(
            prompt=f"Simplify: {num}/{raw_d}",
            solution=rational_to_string(value),
            payload=RationalPayload(value),
            explanation=f"Cancel the common factor {gcd(num, raw_d)}.",
        ), rng

    if kind == "mixed":
        den, rng = rng.randint(2, den_max)
        whole, rng = rng.randint(1, int_range)
        rest, rng = rng.randint(1, den - 1)
        num, rng = signed(rng, whole * den + rest)
        value = Rational(num, den)
        return Draft(
            prompt=f"Write as a mixed number (or reduced fraction): {value.n}/{value.d}",
            solution=rational_to_string(value),
            payload=RationalPayload(value),
            explanation="A mixed number or a reduced fraction are both accepted.",
        ), rng

    use_frac = kind == "frac-op"
    left, rng = choose_frac(rng) if use_frac else choose_int(rng)
    right, rng = choose_frac(rng) if use_frac else choose_int(rng)
    op, rng = rng.choice(("+", "-", "*") if difficulty == "easy" else ("+", "-", "*", "/"))

    if op == "/" and not use_frac and difficulty != "hard":
        divisor, rng = rng.randint(1, int_range)
        quotient, rng = rng.randint(1, int_range)
        dividend, rng = signed(rng, quotient * divisor)
        left, right = Rational(dividend), Rational(divisor)

    result = {
        "+": lambda: left + right,
        "-": lambda: left - right,
        "*": lambda: left * right,
        "/": lambda: left / right,
    }[op]()
    return Draft(
        prompt=f"Compute: {_operand(left)} {_OP_SYMBOL[op]} {_operand(right)}",
        solution=rational_to_string(result),
        payload=RationalPayload(result),
        explanation="Dividing means multiplying by the reciprocal." if op == "/" else None,
    ), rng


# ---------------------------------------------------------------------------
# mathPowers
# ---------------------------------------------------------------------------

POWER_CLAIMS = (
    ("(a+b)^2 = a^2 + b^2", False),
    ("√(a+b) = √a + √b", False),
    ("(a/b)^n = a^n / b^n (b≠0)", True),
    ("a^0 = 1 (a≠0)", True),
)


def _monomial_draft(prompt: str, monomial: Monomial, explanation: Optional[str] = None, **payload_options) -> Draft:
    return Draft(
        prompt=prompt,
        solution=monomial_to_fraction(monomial),
        payload=MonomialPayload(monomial, **payload_options),
        explanation=explanation,
    )


def build_powers(rng: Lcg, difficulty: str) -> Tuple[Draft, Lcg]:
    max_exp = _pick(3, 4, 5, difficulty)
    kind, rng = rng.choice(("mul", "div", "pow", "prodPow", "zeroNeg", "noNeg", "tf"))

    if kind == "tf":
        (claim, truth), rng = rng.choice(POWER_CLAIMS)
        return Draft(
            prompt=f"Claim: {claim}. True or false?",
            solution="true" if truth else "false",
            payload=BooleanPayload(truth),
        ), rng

    if kind == "noNeg":
        base, rng = rng.choice(POWER_BASES)
        other, rng = _other(rng, POWER_BASES, base)
        neg_exp, rng = rng.randint(1, max_exp)
        pos_exp, rng = rng.randint(1, max_exp)
        monomial = Monomial(ONE, {base: -neg_exp, other: pos_exp})
        return _monomial_draft(
            f"Write without negative exponents: {base}^-{neg_exp}·{other}^{pos_exp}",
            monomial,
            explanation="Move negative exponents into the denominator.",
            disallow_negative=True,
        ), rng

    if kind == "zeroNeg":
        base, rng = rng.choice(POWER_BASES)
        make_negative, rng = rng.coin()
        exp = 0
        if make_negative:
            exp, rng = rng.randint(1, max_exp)
            exp = -exp
        return _monomial_draft(f"Simplify: {base}^{exp}", Monomial(ONE, {base: exp})), rng

    if kind == "prodPow":
        exp, rng = rng.randint(1, max_exp)
        left, rng = rng.choice(POWER_BASES)
        right, rng = _other(rng, POWER_BASES, left)
        is_div, rng = rng.coin()
        inner = f"{left}/{right}" if is_div else f"{left}{right}"
        monomial = Monomial(ONE, {left: exp, right: -exp if is_div else exp})
        return _monomial_draft(f"Simplify: ({inner})^{exp}", monomial), rng

    base, rng = rng.choice(POWER_BASES)
    m, rng = rng.randint(1, max_exp)
    n, rng = rng.randint(1, max_exp)
    if kind == "mul":
        return _monomial_draft(f"Simplify: {base}^{m} · {base}^{n}", Monomial(ONE, {base: m + n})), rng
    if kind == "div":
        return _monomial_draft(f"Simplify: {base}^{m} / {base}^{n}", Monomial(ONE, {base: m - n})), rng
    return _monomial_draft(f"Simplify: ({base}^{m})^{n}", Monomial(ONE, {base: m * n})), rng


# ---------------------------------------------------------------------------
# mathRoots
# ---------------------------------------------------------------------------

def build_roots(rng: Lcg, difficulty: str) -> Tuple[Draft, Lcg]:
    kind, rng = rng.choice(("rational", "simplify", "domain", "tf"))

    if kind == "domain":
        return Draft(
            prompt="For which real a is √a defined?",
            solution="a≥0",
            payload=_text("a>=0", "a≥0", "a=>0", "0<=a", "0≤a"),
            explanation="Domain: the radicand must be ≥ 0.",
        ), rng

    if kind == "tf":
        return Draft(
            prompt="Claim: √(x^2) = |x| for all real x. True or false?",
            solution="true",
            payload=BooleanPayload(True),
            explanation="The absolute value, since a square root is never negative.",
        ), rng

    if kind == "simplify":
        radicand, rng = rng.randint(8, 120 if difficulty == "easy" else 200)
        form = simplify_sqrt(radicand)
        return Draft(
            prompt=f"Simplify: √({radicand})",
            solution=format_sqrt_form(form),
            payload=RadicalPayload(form),
            explanation="Pull square factors out of the root.",
        ), rng

    q, rng = rng.randint(2, 5 if difficulty == "hard" else 4)
    p, rng = rng.randint(1, 3 if difficulty == "easy" else 5)
    forward, rng = rng.coin()
    power = f"a^({p}/{q})"
    radical = f"√[{q}]{{a^{p}}}"
    if forward:
        return Draft(
            prompt=f"Write with a rational exponent: {radical}",
            solution=power,
            payload=ExpressionPayload(power, ("a",), positive_only=True, form=ExpressionForm.POWER),
        ), rng
    return Draft(
        prompt=f"Write as a radical: {power}",
        solution=radical,
        payload=ExpressionPayload(power, ("a",), positive_only=True, form=ExpressionForm.RADICAL),
    ), rng


# ---------------------------------------------------------------------------
# mathBinom
# ---------------------------------------------------------------------------

def build_binom(rng: Lcg, difficulty: str) -> Tuple[Draft, Lcg]:
    pattern, rng = rng.choice(("square", "diff", "coef", "coeffOf"))

    if pattern == "coef":
        n, rng = rng.randint(3, 20 if difficulty == "hard" else 10)
        k, rng = rng.randint(0, n)
        value = comb(n, k)
        return Draft(
            prompt=f"Compute the binomial coefficient C({n}, {k}) (C(n,k)=C(n,n-k) may help)",
            solution=str(value),
            payload=NumericPayload(float(value)),
            explanation=f"Pascal row n={n}: C({n},{k}) = {value}",
        ), rng

    if pattern == "coeffOf":
        n, rng = rng.randint(3, 10 if difficulty == "hard" else 7)
        k, rng = rng.randint(0, min(n, 4))
        base, rng = rng.randint(1, 3)
        value = comb(n, k) * base ** (n - k)
        return Draft(
            prompt=f"Coefficient of x^{k} in (x+{base})^{n}?",
            solution=str(value),
            payload=NumericPayload(float(value)),
            explanation=f"C({n},{k})·{base}^{n - k}",
        ), rng

    a, rng = rng.randint(1, 3 if difficulty == "easy" else 4)
    b, rng = rng.randint(1, 4 if difficulty == "easy" else 6)

    if pattern == "diff":
        poly = Polynomial({2: a * a, 0: -(b * b)})
        return Draft(
            prompt=f"Expand: ({_linear(a)} + {b})({_linear(a)} - {b})",
            solution=polynomial_to_string(poly),
            payload=PolynomialPayload(poly),
        ), rng

    sign, rng = rng.choice((1, -1))
    b *= sign
    poly = Polynomial({2: a * a, 1: 2 * a * b, 0: b * b})
    return Draft(
        prompt=f"Expand: ({_linear(a)} {'+' if b >= 0 else '-'} {abs(b)})^2",
        solution=polynomial_to_string(poly),
        payload=PolynomialPayload(poly),
    ), rng


# ---------------------------------------------------------------------------
# mathQuad
# ---------------------------------------------------------------------------

def vertex_form(a: int, b: int, c: int) -> Tuple[Rational, Rational, str]:
    """``ax^2 + bx + c = a(x + h)^2 + k``; returns ``(h, k, text)``."""
    h = Rational(b, 2 * a)
    k = Rational(c) - Rational(b * b, 4 * a)
    inner = "x" if not h else f"x{_signed_term(h)}"
    text = f"({inner})^2"
    if a != 1:
        text = f"{a}{text}"
    if k:
        text += _signed_term(k)
    return h, k, text


def build_quad(rng: Lcg, difficulty: str) -> Tuple[Draft, Lcg]:
    a = 1
    if difficulty == "hard":
        use_a, rng = rng.coin()
        if use_a:
            a, rng = rng.randint(1, 3)
    if difficulty == "easy":
        half_b, rng = rng.randint(-8, 8)
        b = 2 * half_b
    else:
        b, rng = rng.randint(-11, 11)
    c, rng = rng.randint(-8, 10)
    h, k, expected = vertex_form(a, b, c)
    poly = polynomial_to_string(Polynomial({2: a, 1: b, 0: c}))
    return Draft(
        prompt=f"Write {poly} in vertex form a(x + h)^2 + k.",
        solution=expected,
        payload=ExpressionPayload(expected, ("x",), form=ExpressionForm.VERTEX),
        explanation=f"h = {b}/(2·{a}) = {rational_to_string(h)}, k = {rational_to_string(k)}",
    ), rng


# ---------------------------------------------------------------------------
# mathLogs
# ---------------------------------------------------------------------------

def build_logs(rng: Lcg, difficulty: str) -> Tuple[Draft, Lcg]:
    pattern, rng = rng.choice(("prod", "quot", "power", "changebase", "value", "eq", "domain"))
    base, rng = rng.randint(2, 6)

    if pattern == "prod":
        return Draft(
            prompt="Split up: log_b(x·y)",
            solution="log_b(x)+log_b(y)",
            payload=_text("log_b(x)+log_b(y)", "logb(x)+logb(y)", "log_b(y)+log_b(x)"),
            explanation="Product rule: log_b(xy)=log_b(x)+log_b(y).",
        ), rng

    if pattern == "quot":
        return Draft(
            prompt="Split up: log_b(x / y)",
            solution="log_b(x)-log_b(y)",
            payload=_text("log_b(x)-log_b(y)", "logb(x)-logb(y)"),
            explanation="Quotient rule: log_b(x/y)=log_b(x)-log_b(y).",
        ), rng

    if pattern == "power":
        k, rng = rng.randint(2, 6 if difficulty == "hard" else 4)
        return Draft(
            prompt=f"Move the exponent to the front: log_b(x^{k})",
            solution=f"{k}·log_b(x)",
            payload=_text(f"{k}log_b(x)", f"{k}*log_b(x)", f"{k}·log_b(x)", f"{k}logb(x)"),
            explanation="Power rule.",
        ), rng

    if pattern == "changebase":
        a, rng = rng.randint(2, 12)
        return Draft(
            prompt=f"Write log_{base}({a}) using ln.",
            solution=f"ln({a})/ln({base})",
            payload=_text(f"ln({a})/ln({base})", f"log({a})/log({base})"),
            explanation="Change of base: log_b(a)=ln(a)/ln(b).",
        ), rng

    if pattern == "value":
        k, rng = rng.randint(1, 5)
        of_one, rng = rng.coin()
        if of_one:
            return Draft(
                prompt=f"Value: log_{base}(1)",
                solution="0",
                payload=NumericPayload(0.0),
            ), rng
        return Draft(
            prompt=f"Value: log_{base}({base}^{k})",
            solution=str(k),
            payload=NumericPayload(float(k)),
        ), rng

    if pattern == "eq":
        variant, rng = rng.choice(("exp", "log"))
        if variant == "exp":
            a, rng = rng.randint(2, 15)
            return Draft(
                prompt=f"{base}^x = {a}  → x = ?",
                solution=f"log_{base}({a})",
                payload=_text(f"log_{base}({a})", f"ln({a})/ln({base})", f"log({a})/log({base})"),
            ), rng
        k, rng = rng.randint(1, 4)
        return Draft(
            prompt=f"log_{base}(x) = {k}  → x = ?",
            solution=f"{base}^{k}",
            payload=_text(f"{base}^{k}", f"{base}**{k}", str(base ** k)),
        ), rng

    return Draft(
        prompt="Which conditions hold for log_b(x)?",
        solution="x>0, b>0, b≠1",
        payload=_text("x>0,b>0,b!=1", "x>0,b>0,b≠1", "x>0;b>0;b≠1", "x>0;b>0;b!=1"),
        explanation="Positive argument, positive base different from 1.",
    ), rng


# ---------------------------------------------------------------------------
# mathSums
# ---------------------------------------------------------------------------

SET_INDEX = (1, 2, 5)


def build_sums(rng: Lcg, difficulty: str) -> Tuple[Draft, Lcg]:
    pattern, rng = rng.choice(("sigmaValue", "sigmaExpand", "productExpand", "setIndex"))

    if pattern == "sigmaValue":
        seq, rng = rng.choice(("k", "2k+1", "r^k"))
        n, rng = rng.randint(3, 7 if difficulty == "hard" else 5)
        if seq == "k":
            value, term, note = n * (n + 1) // 2, "k", "Arithmetic series: n(n+1)/2."
        elif seq == "2k+1":
            value, term, note = n * n + 2 * n, "(2k+1)", "Arithmetic series: n(n+1) + n."
        else:
            r, rng = rng.randint(2, 3)
            value, term, note = (r ** (n + 1) - r) // (r - 1), f"{r}^k", "Geometric series: (r^(n+1) - r)/(r - 1)."
        return Draft(
            prompt=f"Compute: Σ_{{k=1..{n}}} {term}",
            solution=str(value),
            payload=NumericPayload(float(value)),
            explanation=note,
        ), rng

    if pattern == "sigmaExpand":
        n, rng = rng.randint(3, 6)
        solution = "+".join(f"a{i}" for i in range(1, n + 1))
        return Draft(
            prompt=f"Expand: Σ_{{k=1..{n}}} a_k",
            solution=solution,
            payload=_text(solution, "+".join(f"a_{i}" for i in range(1, n + 1))),
            explanation="Write out every summand.",
        ), rng

    if pattern == "productExpand":
        n, rng = rng.randint(3, 5)
        indices = range(1, n + 1)
        solution = "*".join(f"b{i}" for i in indices)
        return Draft(
            prompt=f"Expand: Π_{{k=1..{n}}} b_k",
            solution=solution,
            payload=_text(
                solution,
                "·".join(f"b{i}" for i in indices),
                "*".join(f"b_{i}" for i in indices),
                "·".join(f"b_{i}" for i in indices),
            ),
            explanation="Write out every factor.",
        ), rng

    term, rng = rng.choice(("k", "2k", "k+1"))
    values: List[int] = [{"k": k, "2k": 2 * k, "k+1": k + 1}[term] for k in SET_INDEX]
    total = sum(values)
    return Draft(
        prompt=f"Compute: Σ_{{k∈{{1;2;5}}}} {term}",
        solution=str(total),
        payload=NumericPayload(float(total)),
        explanation=f"Insert k∈{{1,2,5}}: {' + '.join(map(str, values))} = {total}",
    ), rng


BUILDERS: Dict[MathMode, Builder] = {
    MathMode.CALC: build_calc,
    MathMode.POWERS: build_powers,
    MathMode.ROOTS: build_roots,
    MathMode.BINOM: build_binom,
    MathMode.QUAD: build_quad,
    MathMode.LOGS: build_logs,
    MathMode.SUMS: build_sums,
}


__all__ = [
    "BUILDERS",
    "build_calc",
    "build_powers",
    "build_roots",
    "build_binom",
    "build_quad",
    "build_logs",
    "build_sums",
    "vertex_form",
]
