"""
Judging the result type of an operator from the types of its operands.
  --  Ask the arithmetic, not the textbook.  --

Every expression node knows, at construction, the type its evaluation will produce.
That is how an unsupported operator gets refused before anything is evaluated.

Design Note:
-------------
For the well-known value types, the judgement is made by actually applying the
primitive operation to representative (non-zero) values. Whatever the native
arithmetic does with those, it will do with any other values of the same types.
A TypeError from that experiment means the combination is unsupported.

Other classes get a plausibility check: they must at least define the special
method that Python would call. Their results are judged to be ANY, because
there is no honest way to know more without evaluating.
"""
from decimal import Decimal
from fractions import Fraction
from functools import lru_cache
from .ontology import ANY, ConstructionRejected, type_name
from . import primitive

PROTOTYPES = {
	bool: True,
	int: 3,
	float: 3.0,
	complex: 3+1j,
	Fraction: Fraction(3, 2),
	Decimal: Decimal(3),
	str: "%s",
}

def is_well_known(t:type) -> bool:
	return t in PROTOTYPES

@lru_cache(None)
def unary_result(glyph:str, operand:type) -> type:
	if operand is ANY: return ANY
	if is_well_known(operand):
		try: return type(primitive.PRIMITIVE_UNARY[glyph](PROTOTYPES[operand]))
		except TypeError: pass
	elif hasattr(operand, primitive.UNARY_METHODS[glyph]):
		return ANY
	pattern = "%s (%s) does not apply to %s."
	raise ConstructionRejected(pattern % (primitive.UNARY_KINDS[glyph], glyph, type_name(operand)))

@lru_cache(None)
def binary_result(glyph:str, lhs:type, rhs:type) -> type:
	if lhs is ANY or rhs is ANY: return ANY
	if is_well_known(lhs) and is_well_known(rhs):
		try: return type(primitive.PRIMITIVE_BINARY[glyph](PROTOTYPES[lhs], PROTOTYPES[rhs]))
		except TypeError: pass
	elif _plausible(glyph, lhs, rhs):
		return ANY
	pattern = "%s (%s) does not apply to %s and %s."
	raise ConstructionRejected(pattern % (primitive.BINARY_KINDS[glyph], glyph, type_name(lhs), type_name(rhs)))

def _plausible(glyph, lhs, rhs) -> bool:
	# At least one side is a stranger. Strangers must bring their own methods.
	forward, reflected = primitive.BINARY_METHODS[glyph]
	if not is_well_known(lhs) and hasattr(lhs, forward): return True
	if not is_well_known(rhs) and hasattr(rhs, reflected): return True
	return False

def admits(declared:type, actual:type) -> bool:
	""" Would a variable declared this way accept values of the actual type? """
	return declared is ANY or issubclass(actual, declared)

def conforms(value, declared:type) -> bool:
	return declared is ANY or isinstance(value, declared)
