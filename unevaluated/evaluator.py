"""
Straight-up structural recursion: Literals are themselves, variables come from
the environment, and operators apply the primitive operations to whatever
their operands evaluate to.

Evaluation is pure. Nothing is cached, nothing is mutated, and any failure
aborts the whole evaluation; there are no partial results.
"""
from typing import Any, Callable
from boozetools.support.foundation import Visitor
from .syntax import Expression, Variable, UnaryOp, BinaryOp
from .formatter import format_expression
from . import primitive

LOOKUP = Callable[[Variable], Any]

class Evaluator(Visitor):
	def __init__(self, lookup:LOOKUP):
		self._lookup = lookup

	def value_of(self, item):
		if isinstance(item, Expression): return self.visit(item)
		if isinstance(item, tuple): return _rebuild(item, [self.value_of(element) for element in item])
		return item

	def visit_Variable(self, var:Variable):
		return self._lookup(var)

	def visit_UnaryOp(self, op:UnaryOp):
		return primitive.apply_unary(op.glyph, self.value_of(op.operand))

	def visit_BinaryOp(self, op:BinaryOp):
		return primitive.apply_binary(op.glyph, self.value_of(op.lhs), self.value_of(op.rhs))

def _rebuild(template:tuple, elements:list) -> tuple:
	# Named tuples (records) keep their type; other tuples come back plain.
	make = getattr(type(template), "_make", None)
	return make(elements) if make else tuple(elements)

def evaluate(expr, env):
	"""
	Resolve an expression to a concrete value against the given environment.
	A static environment checks the whole expression before evaluating any of it.
	"""
	env.admit(expr)
	return Evaluator(env.lookup).value_of(expr)

class Prepared:
	"""
	An expression that already passed the static check against some environment,
	with every variable it mentions resolved up front. Evaluating it can only fail
	the way arithmetic fails.
	"""
	def __init__(self, expr, cells:dict[str, Any]):
		self.expr = expr
		self._cells = dict(cells)

	def _lookup(self, var:Variable):
		return self._cells[var.name]

	def evaluate(self):
		return Evaluator(self._lookup).value_of(self.expr)

	def __str__(self): return format_expression(self.expr)
	def __repr__(self): return "<Prepared %s>" % self
