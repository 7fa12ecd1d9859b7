"""
Static configuration data for the loxwalk interpreter.
This includes the fixed-token table used by the lexer, operator mappings used
by the grammar, and the column conventions used when rendering diagnostics.
"""

from loxwalk.lexer.tokens import FixedTokenKind
from loxwalk.parser.core.classes import BinaryOperator, UnaryOperator

# Longer entries that contain a shorter entry as a prefix (>=, <=, ==, !=)
# must come before it. Minus is not in this table: whether '-' is an operator
# or the sign of a numeric literal depends on the character that follows it.
SYMBOL_TOKEN_TABLE = [
    (">=", FixedTokenKind.GREATER_EQUAL),
    (">", FixedTokenKind.GREATER),
    ("<=", FixedTokenKind.LESS_EQUAL),
    ("<", FixedTokenKind.LESS),
    ("==", FixedTokenKind.EQUAL_EQUAL),
    ("=", FixedTokenKind.EQUAL),
    ("!=", FixedTokenKind.BANG_EQUAL),
    ("!", FixedTokenKind.BANG),
    ("(", FixedTokenKind.LEFT_PARENTHESIS),
    (")", FixedTokenKind.RIGHT_PARENTHESIS),
    ("{", FixedTokenKind.LEFT_BRACE),
    ("}", FixedTokenKind.RIGHT_BRACE),
    (",", FixedTokenKind.COMMA),
    (".", FixedTokenKind.DOT),
    ("+", FixedTokenKind.PLUS),
    (";", FixedTokenKind.SEMICOLON),
    ("/", FixedTokenKind.FORWARD_SLASH),
    ("*", FixedTokenKind.ASTERISK),
    ("\n", FixedTokenKind.NEWLINE),
]

# Keywords only match on a word boundary, so 'variable' stays an identifier.
KEYWORD_TOKEN_TABLE = {
    "true": FixedTokenKind.TRUE,
    "false": FixedTokenKind.FALSE,
    "nil": FixedTokenKind.NIL,
    "var": FixedTokenKind.VAR,
    "if": FixedTokenKind.IF,
    "else": FixedTokenKind.ELSE,
    "for": FixedTokenKind.FOR,
    "while": FixedTokenKind.WHILE,
    "fun": FixedTokenKind.FUN,
    "return": FixedTokenKind.RETURN,
    "class": FixedTokenKind.CLASS,
    "this": FixedTokenKind.THIS,
    "super": FixedTokenKind.SUPER,
    "and": FixedTokenKind.AND,
    "or": FixedTokenKind.OR,
    "print": FixedTokenKind.PRINT,
}

# Source text of every fixed token, used when echoing tokens back to the user.
FIXED_TOKEN_TEXT = {kind: text for text, kind in SYMBOL_TOKEN_TABLE}
FIXED_TOKEN_TEXT.update({kind: text for text, kind in KEYWORD_TOKEN_TABLE.items()})
FIXED_TOKEN_TEXT[FixedTokenKind.MINUS] = "-"

# --- Grammar operator maps, one per precedence level ---
LOGICAL_OR_OPERATOR_MAP = {FixedTokenKind.OR: BinaryOperator.OR}
LOGICAL_AND_OPERATOR_MAP = {FixedTokenKind.AND: BinaryOperator.AND}
EQUALITY_OPERATOR_MAP = {
    FixedTokenKind.EQUAL_EQUAL: BinaryOperator.EQUALITY,
    FixedTokenKind.BANG_EQUAL: BinaryOperator.INEQUALITY,
}
COMPARISON_OPERATOR_MAP = {
    FixedTokenKind.GREATER: BinaryOperator.GREATER_THAN,
    FixedTokenKind.GREATER_EQUAL: BinaryOperator.GREATER_THAN_OR_EQUAL_TO,
    FixedTokenKind.LESS: BinaryOperator.LESS_THAN,
    FixedTokenKind.LESS_EQUAL: BinaryOperator.LESS_THAN_OR_EQUAL_TO,
}
TERM_OPERATOR_MAP = {
    FixedTokenKind.PLUS: BinaryOperator.ADDITION,
    FixedTokenKind.MINUS: BinaryOperator.SUBTRACTION,
}
FACTOR_OPERATOR_MAP = {
    FixedTokenKind.ASTERISK: BinaryOperator.MULTIPLICATION,
    FixedTokenKind.FORWARD_SLASH: BinaryOperator.DIVISION,
}
UNARY_OPERATOR_MAP = {
    FixedTokenKind.MINUS: UnaryOperator.NEGATE,
    FixedTokenKind.BANG: UnaryOperator.NOT,
}

# --- Diagnostics ---
# A tab is reported as this many columns wider than a plain character.
TAB_EXTRA_WIDTH = 3

# --- Recursion ---
# Parsing and evaluation recurse once per nesting level of the input (about a
# dozen frames per level while parsing), so the host limit is raised to this
# while they run.
RECURSION_LIMIT = 10_000
