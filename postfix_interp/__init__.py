"""Postfix expression interpreter: tokenizer, tree builder, evaluator and printer."""

from .config import InterpreterSettings, configure_logging, load_settings
from .errors import (
    EvalError,
    EvalErrorKind,
    InterpreterError,
    ParseError,
    ParseErrorKind,
    SymbolTableFullError,
)
from .evaluator import Evaluator, evaluate
from .interpreter import Interpreter
from .parser import TreeBuilder, make_parse_tree
from .printer import to_infix, to_postfix
from .symtab import Symbol, SymbolTable
from .tokenizer import TokenStack, tokenize
from .tree import InteriorNode, LeafKind, LeafNode, NodeAllocator, Operator

__all__ = [
    'InterpreterSettings', 'configure_logging', 'load_settings',
    'EvalError', 'EvalErrorKind', 'InterpreterError', 'ParseError',
    'ParseErrorKind', 'SymbolTableFullError',
    'Evaluator', 'evaluate',
    'Interpreter',
    'TreeBuilder', 'make_parse_tree',
    'to_infix', 'to_postfix',
    'Symbol', 'SymbolTable',
    'TokenStack', 'tokenize',
    'InteriorNode', 'LeafKind', 'LeafNode', 'NodeAllocator', 'Operator',
]
