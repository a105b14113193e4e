"""
The primitive operators, keyed by glyph, and the names they go by.

Integer division and remainder work the way a systems language does them:
Quotients truncate toward zero, and remainders take the sign of the dividend,
so that a == (a/b)*b + a%b holds for every non-zero integer b.
Everything else defers to the operands' own arithmetic.
"""
import math
import operator
from .ontology import ArithmeticFault

def _quotient(a, b):
	if isinstance(a, int) and isinstance(b, int):
		q = abs(a) // abs(b)
		return q if (a < 0) == (b < 0) else -q
	return a / b

def _remainder(a, b):
	if isinstance(a, int) and isinstance(b, int):
		return a - b * _quotient(a, b)
	if isinstance(a, (int, float)) and isinstance(b, (int, float)):
		# math.fmod raises ValueError on a zero divisor or an infinite dividend.
		if not b: raise ZeroDivisionError("float modulo")
		if math.isinf(a): return math.nan
		return math.fmod(a, b)
	return a % b

PRIMITIVE_UNARY = {
	"+" : operator.pos,
	"-" : operator.neg,
	"~" : operator.invert,
}

PRIMITIVE_BINARY = {
	"+" : operator.add,
	"-" : operator.sub,
	"*" : operator.mul,
	"/" : _quotient,
	"%" : _remainder,
}

UNARY_KINDS = {
	"+" : "Plus",
	"-" : "Negate",
	"~" : "BitNot",
}

BINARY_KINDS = {
	"+" : "Add",
	"-" : "Sub",
	"*" : "Mul",
	"/" : "Div",
	"%" : "Mod",
}

# The special methods a class must define to take part in each operator,
# as (forward, reflected) for binary operators.
UNARY_METHODS = {
	"+" : "__pos__",
	"-" : "__neg__",
	"~" : "__invert__",
}

BINARY_METHODS = {
	"+" : ("__add__", "__radd__"),
	"-" : ("__sub__", "__rsub__"),
	"*" : ("__mul__", "__rmul__"),
	"/" : ("__truediv__", "__rtruediv__"),
	"%" : ("__mod__", "__rmod__"),
}

def apply_unary(glyph:str, value):
	try: return PRIMITIVE_UNARY[glyph](value)
	except ArithmeticError as ex: raise ArithmeticFault(UNARY_KINDS[glyph]) from ex

def apply_binary(glyph:str, lhs, rhs):
	try: return PRIMITIVE_BINARY[glyph](lhs, rhs)
	except ArithmeticError as ex: raise ArithmeticFault(BINARY_KINDS[glyph]) from ex
