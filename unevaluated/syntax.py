"""
The set of expression nodes, and the smart constructors that build them.

Nodes are built bottom-up by operator overloading on Expression.
Each constructor judges its result type from its children (see algebra),
so an operator that cannot apply is refused right here, at construction.
Once built, a node never changes: Evaluate it or format it as often as you like.

Anything that is not an Expression is a literal: It evaluates to itself.
An operator between two literals never builds a node; the smart constructors
just compute the answer right away (and Python does the same natively).
"""
from typing import Any
from .ontology import ConstructionRejected, type_name
from . import algebra, primitive

class Expression:
	""" Base of the deferred-computation nodes. """
	__slots__ = ()
	value_type: type

	def _seal(self, **fields):
		for name, value in fields.items():
			object.__setattr__(self, name, value)

	def __setattr__(self, name, value):
		raise AttributeError("%s nodes are immutable" % type(self).__name__)

	def __delattr__(self, name):
		raise AttributeError("%s nodes are immutable" % type(self).__name__)

	# Nodes never change, so a copy is the node itself.
	def __copy__(self): return self
	def __deepcopy__(self, memo): return self

	def key(self) -> tuple: raise NotImplementedError(type(self))
	def __eq__(self, other): return type(self) is type(other) and self.key() == other.key()
	def __hash__(self): return hash((type(self), self.key()))

	def __str__(self):
		from .formatter import format_expression
		return format_expression(self)

	def __format__(self, format_spec): return format(str(self), format_spec)

	def __pos__(self): return unary("+", self)
	def __neg__(self): return unary("-", self)
	def __invert__(self): return unary("~", self)

	def __add__(self, other): return binary("+", self, other)
	def __radd__(self, other): return binary("+", other, self)
	def __sub__(self, other): return binary("-", self, other)
	def __rsub__(self, other): return binary("-", other, self)
	def __mul__(self, other): return binary("*", self, other)
	def __rmul__(self, other): return binary("*", other, self)
	def __truediv__(self, other): return binary("/", self, other)
	def __rtruediv__(self, other): return binary("/", other, self)
	def __mod__(self, other): return binary("%", self, other)
	def __rmod__(self, other): return binary("%", other, self)


class Variable(Expression):
	""" A named placeholder, resolved only when evaluated. """
	__slots__ = ("name", "value_type")
	name: str

	def __init__(self, name:str, value_type:type=int):
		if not isinstance(name, str) or not name:
			raise ConstructionRejected("A variable needs a non-empty name, not %r." % (name,))
		if not isinstance(value_type, type):
			raise ConstructionRejected("The declared type of %r must be a class, not %r." % (name, value_type))
		self._seal(name=name, value_type=value_type)

	def key(self): return self.name, self.value_type
	def __repr__(self): return "<Variable %s:%s>" % (self.name, type_name(self.value_type))


class UnaryOp(Expression):
	__slots__ = ("glyph", "operand", "value_type")
	glyph: str
	operand: Expression

	def __init__(self, glyph:str, operand:Expression):
		if glyph not in primitive.UNARY_KINDS:
			raise ConstructionRejected("There is no unary operator %r." % (glyph,))
		if not isinstance(operand, Expression):
			raise ConstructionRejected("A %s node needs an expression to work on, not %r." % (primitive.UNARY_KINDS[glyph], operand))
		value_type = algebra.unary_result(glyph, operand.value_type)
		self._seal(glyph=glyph, operand=operand, value_type=value_type)

	@property
	def kind(self) -> str: return primitive.UNARY_KINDS[self.glyph]
	def key(self): return self.glyph, self.operand
	def __repr__(self): return "<%s %r>" % (self.kind, self.operand)


class BinaryOp(Expression):
	__slots__ = ("glyph", "lhs", "rhs", "value_type")
	glyph: str
	lhs: Any
	rhs: Any

	def __init__(self, glyph:str, lhs, rhs):
		if glyph not in primitive.BINARY_KINDS:
			raise ConstructionRejected("There is no binary operator %r." % (glyph,))
		if not (isinstance(lhs, Expression) or isinstance(rhs, Expression)):
			raise ConstructionRejected("A %s node needs at least one expression among its operands." % primitive.BINARY_KINDS[glyph])
		value_type = algebra.binary_result(glyph, literal_type(lhs), literal_type(rhs))
		self._seal(glyph=glyph, lhs=lhs, rhs=rhs, value_type=value_type)

	@property
	def kind(self) -> str: return primitive.BINARY_KINDS[self.glyph]
	def key(self): return self.glyph, self.lhs, self.rhs
	def __repr__(self): return "<%s %r %r>" % (self.kind, self.lhs, self.rhs)


def literal_type(item) -> type:
	""" The type that evaluating this item would produce. """
	if isinstance(item, Expression): return item.value_type
	return type(item)

def is_composite(item) -> bool:
	return isinstance(item, (UnaryOp, BinaryOp))

def unary(glyph:str, operand):
	if isinstance(operand, Expression): return UnaryOp(glyph, operand)
	return primitive.apply_unary(glyph, operand)

def binary(glyph:str, lhs, rhs):
	if isinstance(lhs, Expression) or isinstance(rhs, Expression): return BinaryOp(glyph, lhs, rhs)
	return primitive.apply_binary(glyph, lhs, rhs)

def positive(x): return unary("+", x)
def negate(x): return unary("-", x)
def invert(x): return unary("~", x)
def add(a, b): return binary("+", a, b)
def subtract(a, b): return binary("-", a, b)
def multiply(a, b): return binary("*", a, b)
def divide(a, b): return binary("/", a, b)
def modulo(a, b): return binary("%", a, b)

def variable(name:str, value_type:type=int) -> Variable:
	return Variable(name, value_type)

class Shorthand:
	"""
	Ergonomics for making variables:
		V.block_size is Variable("block_size")
		V["block_size"] is the same thing,
		V["ratio", float] declares the type too.
	"""
	def __getattr__(self, name:str) -> Variable:
		if name.startswith("__"): raise AttributeError(name)
		return Variable(name)

	def __getitem__(self, key) -> Variable:
		if isinstance(key, tuple): return Variable(*key)
		return Variable(key)

V = Shorthand()
