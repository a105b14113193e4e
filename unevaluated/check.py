"""
Checking an expression against an environment's signature before evaluating any of it.

A signature maps each bound name to the type of its value. A plausible expression
mentions only names the signature has, each declared with a type that the bound
type satisfies. Operator applicability was already settled when the nodes were
built, so names and types are all that remain to check.

Every problem gets reported, not just the first one, so that a caller can fix
them all in one go. Then the whole expression is refused with ConstructionRejected.
"""
from typing import Mapping, Optional
from boozetools.support.foundation import Visitor
from .ontology import ConstructionRejected
from .syntax import Expression, Variable, UnaryOp, BinaryOp
from .diagnostics import Report, TooManyIssues
from .formatter import layout
from . import algebra

class SignatureChecker(Visitor):
	def __init__(self, signature:Mapping[str, type], report:Report):
		self._signature = signature
		self._report = report

	def check(self, expr):
		self._layout = layout(expr)
		self._declared = {}
		self._seen = {}
		self._report.info("Checking", self._layout.text)
		self.tour(expr)

	def tour(self, item):
		if isinstance(item, Expression): self.visit(item)
		elif isinstance(item, tuple):
			for element in item: self.tour(element)

	def _span(self, var:Variable):
		# Leaves are visited in the same order the formatter wrote them.
		nth = self._seen.get(id(var), 0)
		self._seen[id(var)] = nth + 1
		spans = self._layout.spans_of(var)
		return spans[nth] if nth < len(spans) else self._layout.first_span(var)

	def visit_Variable(self, var:Variable):
		span = self._span(var)
		name = var.name
		if name in self._declared:
			first, first_span = self._declared[name]
			if first.value_type is not var.value_type:
				types = first.value_type, var.value_type
				self._report.conflicting_declarations(self._layout, name, first_span, span, types)
		else:
			self._declared[name] = var, span
		if name not in self._signature:
			self._report.unbound_variable(self._layout, name, span)
		elif not algebra.admits(var.value_type, self._signature[name]):
			self._report.wrong_type(self._layout, name, span, var.value_type, self._signature[name])

	def visit_UnaryOp(self, op:UnaryOp):
		self.tour(op.operand)

	def visit_BinaryOp(self, op:BinaryOp):
		self.tour(op.lhs)
		self.tour(op.rhs)

class VariableCollector(Visitor):
	""" Finds the variables in an expression, in order of first appearance, once per name. """
	def __init__(self):
		self.found: dict[str, Variable] = {}

	def tour(self, item):
		if isinstance(item, Expression): self.visit(item)
		elif isinstance(item, tuple):
			for element in item: self.tour(element)

	def visit_Variable(self, var:Variable):
		self.found.setdefault(var.name, var)

	def visit_UnaryOp(self, op:UnaryOp):
		self.tour(op.operand)

	def visit_BinaryOp(self, op:BinaryOp):
		self.tour(op.lhs)
		self.tour(op.rhs)

def free_variables(expr) -> list[Variable]:
	collector = VariableCollector()
	collector.tour(expr)
	return list(collector.found.values())

def require_plausible(expr, signature:Mapping[str, type], report:Optional[Report]=None):
	"""
	Raise ConstructionRejected, carrying the rendered issues,
	unless the expression fits the signature. Only issues found by this
	check count against it, so one report may serve many checks.
	"""
	if report is None: report = Report(max_issues=25)
	before = len(report.issues)
	try: SignatureChecker(signature, report).check(expr)
	except TooManyIssues: report.info("Giving up after a few issues.")
	if len(report.issues) > before:
		raise ConstructionRejected(report.summary(before), report.texts(before))
