"""
Recursive descent parser for the abacus calculator language.

Grammar (precedence low to high):
    line               → function | statement ";"?
    function           → "fn" IDENT "(" (param ("," param)*)? ")"
                         ("->" IDENT ("," IDENT)*)? block
    param              → IDENT (":" IDENT)?
    statement          → "if" compound_condition block "else" block
                       | compound_condition
    block              → "{" statement "}"
    compound_condition → condition (("&" | "|" | "^") condition)*
    condition          → "true" | "false"
                       | "!" compound_condition
                       | "(" compound_condition ")"
                       | expression (comp_op expression)?
    expression         → term (("+" | "-") term)*
    term               → factor (("*" | "/" | "%") factor)*
    factor             → ("+" | "-") factor
                       | NUMBER
                       | IDENT "(" (expression ("," expression)*)? ")"
                       | IDENT
                       | "(" expression ")"

A statement without a comparison is a plain expression, so the same entry
point parses ``2 + 2`` and ``2 < 3 & 1 < 4``. A parenthesised group at
condition position that turns out to be arithmetic continues as the first
factor of an expression, so ``(1 + 2) * 2 < 7`` is a valid condition.

Continuation protocol: every grammar rule is a generator. When a rule needs
a token but the buffered line is exhausted, it yields an ``InputRequest`` and
resumes with the line the driver sends back. A missing token is requested
whenever the grammar requires one, and any token is requested while a
``{ ... }`` block is open. At the top level an exhausted line simply ends the
statement.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Iterable
from dataclasses import dataclass
from typing import TypeVar

from abacus.core.calc_lang.functions import FunctionTable
from abacus.core.calc_lang.tokenizer import Lexer, Token, TokenKind
from abacus.core.errors import ParseError, make_parse_error
from abacus.core.ir.syntax import (
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

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

KEYWORDS = frozenset({"fn", "if", "else"})

_COMPARISON_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.EQ: BinaryOp.EQ,
    TokenKind.NE: BinaryOp.NE,
    TokenKind.LT: BinaryOp.LT,
    TokenKind.GT: BinaryOp.GT,
    TokenKind.LE: BinaryOp.LE,
    TokenKind.GE: BinaryOp.GE,
}

_LOGICAL_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.AND: BinaryOp.AND,
    TokenKind.OR: BinaryOp.OR,
    TokenKind.XOR: BinaryOp.XOR,
}

_ADDITIVE_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_MULTIPLICATIVE_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
    TokenKind.PERCENT: BinaryOp.MOD,
}


@dataclass(frozen=True)
class InputRequest:
    """Yielded by the parser when the current statement needs another line."""

    reason: str  # e.g. "function body", "else branch"
    line: int  # number the requested line will have
    depth: int  # open blocks at the time of the request


ParseSteps = Generator[InputRequest, "str | None", _T]
LineSource = Callable[[], "str | None"]


class Parser:
    """
    Parser over a streaming lexer.

    Usage:
        parser = Parser()
        parser.append("fn inc(num) {")
        steps = parser.parse_line()
        request = next(steps)           # InputRequest(reason="function body", ...)
        steps.send("num + 1 }")         # StopIteration carries the FunctionDef

    ``parse`` wraps that loop for callers that already hold the lines.
    """

    def __init__(
        self,
        functions: FunctionTable | None = None,
        *,
        check_arity: bool = True,
        unicode_operators: bool = True,
    ) -> None:
        self.functions = functions if functions is not None else FunctionTable()
        self.check_arity = check_arity
        self.lexer = Lexer(unicode_operators=unicode_operators)
        self._depth = 0
        self._blocks: list[str] = []

    def append(self, line: str) -> None:
        """Make ``line`` the lexer's buffer, discarding any leftover lookahead."""
        self.lexer.reset(line.rstrip("\r\n"))

    def parse_line(self) -> ParseSteps[Line | None]:
        """Parse one top-level line from the current buffer.

        Returns None for a blank line.
        """
        self._depth = 0
        self._blocks.clear()

        token = yield from self._look()
        if token.kind == TokenKind.EOF:
            return None

        node: Line
        if _is_keyword(token, "fn"):
            node = yield from self._function()
        else:
            node = yield from self._statement()

        yield from self._match(TokenKind.SEMI)
        token = yield from self._look()
        if token.kind != TokenKind.EOF:
            raise self._error(f"Unexpected token after statement: {token.value!r}", token)
        if isinstance(node, FunctionDef):
            self.functions.define(node)
        return node

    def parse(self, line: str, more: Iterable[str] | LineSource = ()) -> Line | None:
        """
        Parse one statement starting at ``line``.

        Args:
            line: First line of the statement.
            more: Continuation lines, either as an iterable or as a callable
                returning the next line (None at end of stream).

        Returns:
            The parsed function definition or statement, or None for a blank line.

        Raises:
            LexError: If a line cannot be tokenized.
            ParseError: If the statement is invalid or input runs out.
        """
        if callable(more):
            source = more
        else:
            lines = iter(more)

            def source() -> str | None:
                return next(lines, None)

        self.append(line)
        steps = self.parse_line()
        try:
            request = next(steps)
            while True:
                logger.debug("Reading continuation line %d for %s", request.line, request.reason)
                request = steps.send(source())
        except StopIteration as done:
            result: Line | None = done.value
            return result

    # -- token helpers --

    def _look(self, required: bool = False) -> ParseSteps[Token]:
        """Return the current token, requesting more input when it is needed."""
        token = self.lexer.current
        while token.kind == TokenKind.EOF and (required or self._depth > 0):
            reason = self._blocks[-1] if self._blocks else "statement"
            logger.debug("Statement incomplete, requesting input for %s", reason)
            line = yield InputRequest(reason=reason, line=self.lexer.line + 1, depth=self._depth)
            if line is None:
                raise self._error("Unexpected end of input", token)
            self.append(line)
            token = self.lexer.current
        return token

    def _advance(self) -> Token:
        return self.lexer.advance()

    def _expect(self, kind: TokenKind) -> ParseSteps[Token]:
        token = yield from self._look(required=True)
        if token.kind != kind:
            raise self._error(f"Expected {kind}, got {token.kind} ({token.value!r})", token)
        return self._advance()

    def _match(self, *kinds: TokenKind) -> ParseSteps[Token | None]:
        token = yield from self._look()
        if token.kind in kinds:
            return self._advance()
        return None

    def _error(self, message: str, token: Token) -> ParseError:
        return make_parse_error(
            message,
            self.lexer.line,
            token.pos,
            snippet=self.lexer.text,
            offending=token.value or None,
        )

    # -- functions --

    def _function(self) -> ParseSteps[FunctionDef]:
        """'fn' IDENT '(' params? ')' ('->' types)? block"""
        self._advance()  # fn
        name = yield from self._expect(TokenKind.IDENT)
        if name.value in KEYWORDS:
            raise self._error(f"Reserved word cannot name a function: {name.value!r}", name)
        yield from self._expect(TokenKind.LPAREN)

        params: list[Param] = []
        token = yield from self._look(required=True)
        if token.kind != TokenKind.RPAREN:
            params.append((yield from self._param()))
            while (yield from self._match(TokenKind.COMMA)) is not None:
                params.append((yield from self._param()))
        yield from self._expect(TokenKind.RPAREN)

        seen: set[str] = set()
        for param in params:
            if param.name in seen:
                raise self._error(f"Duplicate parameter: {param.name!r}", name)
            seen.add(param.name)

        return_types: list[str] = []
        if (yield from self._match(TokenKind.ARROW)) is not None:
            return_types.append((yield from self._expect(TokenKind.IDENT)).value)
            while (yield from self._match(TokenKind.COMMA)) is not None:
                return_types.append((yield from self._expect(TokenKind.IDENT)).value)

        body = yield from self._block("function body")

        return FunctionDef(
            name=name.value, params=params, return_types=return_types, body=body
        )

    def _param(self) -> ParseSteps[Param]:
        """IDENT (':' IDENT)?"""
        name = yield from self._expect(TokenKind.IDENT)
        type_name: str | None = None
        if (yield from self._match(TokenKind.COLON)) is not None:
            type_name = (yield from self._expect(TokenKind.IDENT)).value
        return Param(name=name.value, type_name=type_name)

    # -- statements --

    def _statement(self) -> ParseSteps[Statement]:
        """'if' compound_condition block 'else' block | compound_condition"""
        token = yield from self._look(required=True)
        if not _is_keyword(token, "if"):
            expr = yield from self._compound_condition()
            return ExpressionStatement(expr=expr)

        self._advance()  # if
        condition = yield from self._compound_condition()
        then_branch = yield from self._block("if branch")

        token = yield from self._look(required=True)
        if not _is_keyword(token, "else"):
            raise self._error(f"Expected 'else' after if block, got {token.value!r}", token)
        self._advance()
        else_branch = yield from self._block("else branch")

        return Conditional(
            condition=condition,
            then_branch=then_branch,
            else_branch=else_branch,
        )

    def _block(self, reason: str) -> ParseSteps[Statement]:
        """'{' statement '}'"""
        yield from self._expect(TokenKind.LBRACE)
        self._depth += 1
        self._blocks.append(reason)
        body = yield from self._statement()
        yield from self._expect(TokenKind.RBRACE)
        self._blocks.pop()
        self._depth -= 1
        return body

    # -- conditions --

    def _compound_condition(self) -> ParseSteps[Node]:
        """condition (('&' | '|' | '^') condition)*"""
        left = yield from self._condition()
        while True:
            token = yield from self._look()
            op = _LOGICAL_OPS.get(token.kind)
            if op is None:
                return left
            self._advance()
            right = yield from self._condition()
            left = BinaryExpr(op=op, left=left, right=right)

    def _condition(self) -> ParseSteps[Node]:
        """BOOL | '!' compound_condition | '(' compound_condition ')' | simple_condition"""
        token = yield from self._look(required=True)

        if token.kind in (TokenKind.TRUE, TokenKind.FALSE):
            self._advance()
            return BoolLiteral(value=token.kind == TokenKind.TRUE)

        if token.kind == TokenKind.NOT:
            self._advance()
            operand = yield from self._compound_condition()
            return UnaryExpr(op=UnaryOp.NOT, operand=operand)

        if token.kind == TokenKind.LPAREN:
            self._advance()
            inner = yield from self._compound_condition()
            yield from self._expect(TokenKind.RPAREN)
            if is_condition(inner):
                return inner
            left = yield from self._expression(first=inner)
        else:
            left = yield from self._expression()

        return (yield from self._simple_condition(left))

    def _simple_condition(self, left: Node) -> ParseSteps[Node]:
        """expression (comp_op expression)?, with the left side already parsed"""
        token = yield from self._look()
        op = _COMPARISON_OPS.get(token.kind)
        if op is None:
            return left
        self._advance()
        right = yield from self._expression()
        return BinaryExpr(op=op, left=left, right=right)

    # -- arithmetic --

    def _expression(self, first: Node | None = None) -> ParseSteps[Node]:
        """term (('+' | '-') term)*"""
        left = yield from self._term(first)
        while True:
            token = yield from self._look()
            op = _ADDITIVE_OPS.get(token.kind)
            if op is None:
                return left
            self._advance()
            right = yield from self._term()
            left = BinaryExpr(op=op, left=left, right=right)

    def _term(self, first: Node | None = None) -> ParseSteps[Node]:
        """factor (('*' | '/' | '%') factor)*"""
        left = first if first is not None else (yield from self._factor())
        while True:
            token = yield from self._look()
            op = _MULTIPLICATIVE_OPS.get(token.kind)
            if op is None:
                return left
            self._advance()
            right = yield from self._factor()
            left = BinaryExpr(op=op, left=left, right=right)

    def _factor(self) -> ParseSteps[Node]:
        """('+' | '-') factor | NUMBER | call | IDENT | '(' expression ')'"""
        token = yield from self._look(required=True)

        if token.kind in (TokenKind.PLUS, TokenKind.MINUS):
            self._advance()
            operand = yield from self._factor()
            op = UnaryOp.PLUS if token.kind == TokenKind.PLUS else UnaryOp.NEG
            return UnaryExpr(op=op, operand=operand)

        if token.kind == TokenKind.NUMBER:
            self._advance()
            assert token.number is not None
            return NumberLiteral(value=token.number)

        if token.kind == TokenKind.IDENT:
            if token.value in KEYWORDS:
                raise self._error(f"Unexpected keyword: {token.value!r}", token)
            # Look ahead for function call
            if self.lexer.peek_token().kind == TokenKind.LPAREN:
                return (yield from self._call())
            self._advance()
            return Variable(name=token.value)

        if token.kind == TokenKind.LPAREN:
            self._advance()
            node = yield from self._expression()
            yield from self._expect(TokenKind.RPAREN)
            return node

        raise self._error(f"Unexpected token: {token.kind} ({token.value!r})", token)

    def _call(self) -> ParseSteps[FunctionCall]:
        """IDENT '(' (expression (',' expression)*)? ')'"""
        name = self._advance()
        function = self.functions.get(name.value)
        if function is None:
            raise self._error(f"Function does not exist: {name.value}", name)
        yield from self._expect(TokenKind.LPAREN)

        args: list[Node] = []
        token = yield from self._look(required=True)
        if token.kind != TokenKind.RPAREN:
            args.append((yield from self._expression()))
            while (yield from self._match(TokenKind.COMMA)) is not None:
                args.append((yield from self._expression()))
        yield from self._expect(TokenKind.RPAREN)

        if self.check_arity and len(args) != function.arity:
            raise self._error(
                f"Function {name.value} expects {function.arity} argument(s), got {len(args)}",
                name,
            )

        scope = dict(zip(function.param_names, args, strict=False))
        return FunctionCall(name=name.value, args=args, function=function, scope=scope)


def _is_keyword(token: Token, word: str) -> bool:
    return token.kind == TokenKind.IDENT and token.value == word


def parse_statement(
    source: str, functions: FunctionTable | None = None, **options: bool
) -> Line | None:
    """Parse a statement given as text, one buffered line per newline.

    Args:
        source: Statement text, possibly spanning several lines.
        functions: Function table to resolve calls against and to register
            definitions in.
        **options: ``check_arity`` / ``unicode_operators`` for the parser.

    Raises:
        LexError: If tokenization fails.
        ParseError: If the statement is invalid or incomplete.
    """
    first, *rest = source.split("\n")
    parser = Parser(functions, **options)
    return parser.parse(first, rest)
