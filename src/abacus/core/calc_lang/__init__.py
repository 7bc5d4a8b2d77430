"""
abacus calculator language.

Tokenizer, parser and evaluator for the statement language.

Usage:
    from abacus.core.calc_lang import Parser, evaluate

    parser = Parser()
    parser.parse("fn inc(num) { num + 1 }")
    result = evaluate(parser.parse("inc(4)"))
    # result == Natural(5)
"""

from abacus.core.calc_lang.evaluator import evaluate, truth, value
from abacus.core.calc_lang.functions import FunctionTable
from abacus.core.calc_lang.parser import InputRequest, Parser, parse_statement
from abacus.core.calc_lang.tokenizer import Lexer, Token, TokenKind, tokenize

__all__ = [
    "FunctionTable",
    "InputRequest",
    "Lexer",
    "Parser",
    "Token",
    "TokenKind",
    "evaluate",
    "parse_statement",
    "tokenize",
    "truth",
    "value",
]
