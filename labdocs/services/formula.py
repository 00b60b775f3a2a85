"""Evaluation of calculated tests such as ``TC/HDL Ratio = LIP001 / LIP002``.

Formulas are arithmetic over sibling test ids within one visit. Only numbers,
test ids, ``+ - * /``, unary signs and parentheses are accepted.
"""

import ast
import logging
import math
import operator
from typing import Iterable, Mapping

from labdocs.config import settings
from labdocs.schemas.catalog import InputType
from labdocs.schemas.snapshot import TestSnapshot
from labdocs.services.values import to_float

logger = logging.getLogger(__name__)

_BINARY = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
}
_UNARY = {ast.USub: operator.neg, ast.UAdd: operator.pos}


class FormulaError(ValueError):
    pass


def _evaluate(node: ast.AST, values: Mapping[str, float | None]) -> float:
    if isinstance(node, ast.Expression):
        return _evaluate(node.body, values)
    if isinstance(node, ast.Constant) and type(node.value) in (int, float):
        return float(node.value)
    if isinstance(node, ast.Name):
        number = values.get(node.id)
        if number is None:
            raise FormulaError(f"no numeric value for {node.id}")
        return number
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY:
        return _BINARY[type(node.op)](_evaluate(node.left, values), _evaluate(node.right, values))
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY:
        return _UNARY[type(node.op)](_evaluate(node.operand, values))
    raise FormulaError(f"unsupported expression {type(node).__name__}")


def evaluate_formula(formula: str | None, values: Mapping[str, float | None]) -> float | None:
    if not formula or not formula.strip():
        return None
    if len(formula) > settings.formula_max_length:
        logger.debug("Formula of %s characters exceeds the length limit", len(formula))
        return None
    try:
        result = _evaluate(ast.parse(formula.strip(), mode="eval"), values)
    except (SyntaxError, ValueError, ArithmeticError, RecursionError, MemoryError) as exc:
        logger.debug("Formula %r not evaluated: %s", formula, exc)
        return None
    return result if math.isfinite(result) else None


def apply_calculated_values(
    snapshots: Iterable[TestSnapshot],
    enabled: bool | None = None,
    precision: int | None = None,
) -> list[TestSnapshot]:
    """Fill blank calculated snapshots from their siblings' entered values.

    Snapshots are evaluated in list order, so a calculated test may use a
    calculated sibling listed before it. Entered values are never replaced.
    """
    items = list(snapshots)
    if not (enabled if enabled is not None else settings.evaluate_formulas):
        return items
    places = precision if precision is not None else settings.formula_precision

    values: dict[str, float | None] = {s.test_id: to_float(s.value) for s in items if s.test_id}
    filled = []
    for snapshot in items:
        if snapshot.input_type is not InputType.CALCULATED or snapshot.value.strip() or not snapshot.formula:
            filled.append(snapshot)
            continue
        result = evaluate_formula(snapshot.formula, values)
        if result is None:
            filled.append(snapshot)
            continue
        result = round(result, places)
        if snapshot.test_id:
            values[snapshot.test_id] = result
        filled.append(snapshot.model_copy(update={"value": f"{result:.{places}f}"}))
    return filled
