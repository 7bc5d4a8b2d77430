"""
Syntax tree types for the abacus calculator language.

Supports:
- Arithmetic: +, -, *, /, % over numeric literals of every kind
- Comparison: =, !=, <, >, <=, >=
- Logic: &, |, ^, ! (no short-circuit)
- Variables: parameter references inside function bodies
- Function definitions and calls: fn inc(num) { num + 1 }, inc(4)
- Conditionals: if cond { a } else { b }
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from abacus.core.numbers import Number

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators."""

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    # Comparison
    EQ = "="
    NE = "!="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    # Logical
    AND = "&"
    OR = "|"
    XOR = "^"


class UnaryOp(StrEnum):
    """Unary operators."""

    PLUS = "+"
    NEG = "-"
    NOT = "!"


ARITHMETIC_OPS = frozenset(
    {BinaryOp.ADD, BinaryOp.SUB, BinaryOp.MUL, BinaryOp.DIV, BinaryOp.MOD}
)
COMPARISON_OPS = frozenset(
    {BinaryOp.EQ, BinaryOp.NE, BinaryOp.LT, BinaryOp.GT, BinaryOp.LE, BinaryOp.GE}
)
LOGICAL_OPS = frozenset({BinaryOp.AND, BinaryOp.OR, BinaryOp.XOR})


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class NumberLiteral(BaseModel):
    """A numeric literal of any kind."""

    value: Number = Field(description="The literal value")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __str__(self) -> str:
        return str(self.value)


class BoolLiteral(BaseModel):
    """``true`` or ``false``."""

    value: bool

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "true" if self.value else "false"


class Variable(BaseModel):
    """Reference to a function parameter, resolved through the call scope."""

    name: str = Field(description="Parameter name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class UnaryExpr(BaseModel):
    """Unary operation: sign or logical not."""

    op: UnaryOp
    operand: Node

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.op.value}{self.operand}"


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Node
    right: Node

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


class Param(BaseModel):
    """A declared function parameter, optionally annotated with a type name."""

    name: str
    type_name: str | None = None

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.type_name:
            return f"{self.name}: {self.type_name}"
        return self.name


class FunctionDef(BaseModel):
    """
    Function definition: fn name(params) -> types { body }.

    Type annotations are recorded as written and never checked.
    """

    name: str = Field(description="Function name")
    params: list[Param] = Field(default_factory=list, description="Ordered parameters")
    return_types: list[str] = Field(default_factory=list, description="Return annotations")
    body: Statement

    model_config = ConfigDict(frozen=True)

    @property
    def arity(self) -> int:
        return len(self.params)

    @property
    def param_names(self) -> list[str]:
        return [p.name for p in self.params]

    def __str__(self) -> str:
        params_str = ", ".join(str(p) for p in self.params)
        returns = f" -> {', '.join(self.return_types)}" if self.return_types else ""
        return f"fn {self.name}({params_str}){returns} {{ {self.body} }}"


class FunctionCall(BaseModel):
    """
    Call of a previously defined function.

    The body is resolved when the call is parsed; ``scope`` pairs each
    parameter name with the argument node in the same position.
    """

    name: str = Field(description="Function name")
    args: list[Node] = Field(default_factory=list, description="Arguments")
    function: FunctionDef = Field(description="Definition resolved at parse time")
    scope: dict[str, Node] = Field(default_factory=dict, description="Parameter bindings")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.args)
        return f"{self.name}({args_str})"


class ExpressionStatement(BaseModel):
    """A statement that is a single expression or condition."""

    expr: Node

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.expr)


class Conditional(BaseModel):
    """if cond { then } else { otherwise }. Both branches are mandatory."""

    condition: Node = Field(description="If condition")
    then_branch: Statement = Field(description="Taken when the condition holds")
    else_branch: Statement = Field(description="Taken otherwise")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"if {self.condition} {{ {self.then_branch} }} else {{ {self.else_branch} }}"


# ---------------------------------------------------------------------------
# Union types
# ---------------------------------------------------------------------------

Statement = ExpressionStatement | Conditional

Node = (
    NumberLiteral
    | BoolLiteral
    | Variable
    | UnaryExpr
    | BinaryExpr
    | FunctionCall
    | ExpressionStatement
    | Conditional
)

Line = FunctionDef | Statement

# Rebuild models for recursive forward references
UnaryExpr.model_rebuild()
BinaryExpr.model_rebuild()
FunctionDef.model_rebuild()
FunctionCall.model_rebuild()
ExpressionStatement.model_rebuild()
Conditional.model_rebuild()


def is_condition(node: Node) -> bool:
    """True for nodes that evaluate to a truth value rather than a number."""
    if isinstance(node, BoolLiteral):
        return True
    if isinstance(node, UnaryExpr):
        return node.op == UnaryOp.NOT
    if isinstance(node, BinaryExpr):
        return node.op in COMPARISON_OPS or node.op in LOGICAL_OPS
    if isinstance(node, ExpressionStatement):
        return is_condition(node.expr)
    return False
