"""Intermediate representation for abacus: the syntax tree."""

from abacus.core.ir.syntax import (
    ARITHMETIC_OPS,
    COMPARISON_OPS,
    LOGICAL_OPS,
    BinaryExpr,
    BinaryOp,
    BoolLiteral,
    Conditional,
    ExpressionStatement,
    FunctionCall,
    FunctionDef,
    Line,
    Node,
    NumberLiteral,
    Param,
    Statement,
    UnaryExpr,
    UnaryOp,
    Variable,
    is_condition,
)

__all__ = [
    "ARITHMETIC_OPS",
    "COMPARISON_OPS",
    "LOGICAL_OPS",
    "BinaryExpr",
    "BinaryOp",
    "BoolLiteral",
    "Conditional",
    "ExpressionStatement",
    "FunctionCall",
    "FunctionDef",
    "Line",
    "Node",
    "NumberLiteral",
    "Param",
    "Statement",
    "UnaryExpr",
    "UnaryOp",
    "Variable",
    "is_condition",
]
