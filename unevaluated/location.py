"""
I want a simple, light-weight way to point at a sub-expression within the formatted text of a whole expression.
The concept is simple: Use character offsets, with spans of them associated to specific nodes.
The same node object may appear more than once in a tree, so each node maps to a list of spans.
"""
from typing import NamedTuple

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	start: int
	stop: int
	def width(self) -> int: return self.stop - self.start
	def as_slice(self) -> slice: return slice(self.start, self.stop)

class Layout:
	""" The formatted text of an expression, plus where each node landed in it. """
	text: str

	def __init__(self):
		self.text = ""
		self._spans: dict[int, list[Span]] = {}
		self._nodes: dict[int, object] = {}  # Pins each node so its id stays unique.

	def insert(self, node, span:Span):
		self._spans.setdefault(id(node), []).append(span)
		self._nodes[id(node)] = node

	def spans_of(self, node) -> list[Span]:
		return self._spans.get(id(node), [])

	def first_span(self, node) -> Span:
		spans = self.spans_of(node)
		return spans[0] if spans else Span(0, len(self.text))

	def excerpt(self, span:Span) -> str:
		return self.text[span.as_slice()]
