"""
Rendering expressions as text, without any environment.

The parenthesization rule is simple: An operand gets parentheses
if and only if it is itself a composite (unary or binary) node, whatever the
true precedence. So ceil_div(n, d), built as (n + d - 1) / d, comes out
as "((12345+block_size)-1)/block_size". Output strings are part of the
public contract; precedence-aware formatting would be a separate feature.

There is no parser going the other way. Formatting is strictly one-way.
"""
from boozetools.support.foundation import Visitor
from .location import Layout, Span
from .syntax import Expression, Variable, UnaryOp, BinaryOp, is_composite

class Formatter(Visitor):
	"""
	Writes the text of an expression while noting where each node lands,
	so diagnostics can point at the guilty part of a formatted expression.
	"""
	def __init__(self):
		self.layout = Layout()

	def render(self, item, start:int) -> str:
		if isinstance(item, Expression):
			text = self.visit(item, start)
			self.layout.insert(item, Span(start, start + len(text)))
			return text
		if isinstance(item, tuple):
			parts, offset = [], start + 1
			for element in item:
				part = self.render(element, offset)
				parts.append(part)
				offset += len(part) + 2
			return "(" + ", ".join(parts) + ")"
		return str(item)

	def operand(self, item, start:int) -> str:
		if is_composite(item): return "(" + self.render(item, start + 1) + ")"
		return self.render(item, start)

	def visit_Variable(self, var:Variable, start:int):
		return var.name

	def visit_UnaryOp(self, op:UnaryOp, start:int):
		return op.glyph + self.operand(op.operand, start + len(op.glyph))

	def visit_BinaryOp(self, op:BinaryOp, start:int):
		left = self.operand(op.lhs, start)
		right = self.operand(op.rhs, start + len(left) + len(op.glyph))
		return left + op.glyph + right

def layout(item) -> Layout:
	formatter = Formatter()
	formatter.layout.text = formatter.render(item, 0)
	return formatter.layout

def format_expression(item) -> str:
	return Formatter().render(item, 0)
