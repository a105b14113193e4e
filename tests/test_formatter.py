import unittest

from unevaluated.syntax import V
from unevaluated.formatter import format_expression, layout
from unevaluated.location import Span

def ceil_div(n, d):
	return (n + d - 1) / d

class FormatterTests(unittest.TestCase):
	""" The exact text is part of the contract, so these pin it down. """

	def test_simple_forms(self):
		foo, bar = V.foo, V.bar
		for expr, text in [
			(foo, "foo"),
			(+foo, "+foo"), (-foo, "-foo"), (~foo, "~foo"),
			(7 + foo, "7+foo"), (foo + 7, "foo+7"), (foo + bar, "foo+bar"),
			(foo - 7, "foo-7"), (7 - foo, "7-foo"), (foo - bar, "foo-bar"),
			(foo * 7, "foo*7"), (7 * foo, "7*foo"), (foo * bar, "foo*bar"),
			(foo / 7, "foo/7"), (7 / foo, "7/foo"), (foo / bar, "foo/bar"),
			(foo % 7, "foo%7"), (7 % foo, "7%foo"), (foo % bar, "foo%bar"),
			(foo * 0.5, "foo*0.5"),
		]:
			with self.subTest(text):
				self.assertEqual(text, format_expression(expr))

	def test_composites_get_parentheses_regardless_of_precedence(self):
		foo, bar = V.foo, V.bar
		for expr, text in [
			(-(-foo), "-(-foo)"),
			(-(foo + bar), "-(foo+bar)"),
			(~(+foo), "~(+foo)"),
			(foo * bar + 1, "(foo*bar)+1"),
			(foo + bar * 2, "foo+(bar*2)"),
			((foo + bar) * (foo - bar), "(foo+bar)*(foo-bar)"),
			(foo - -bar, "foo-(-bar)"),
		]:
			with self.subTest(text):
				self.assertEqual(text, format_expression(expr))

	def test_ceiling_division(self):
		num_blocks = ceil_div(12345, V.block_size)
		self.assertEqual("((12345+block_size)-1)/block_size", format_expression(num_blocks))

	def test_tuples(self):
		num_blocks = ceil_div(12345, V.block_size)
		shape = (V.block_size, num_blocks)
		self.assertEqual("(block_size, ((12345+block_size)-1)/block_size)", format_expression(shape))
		self.assertEqual("(1, foo)", format_expression((1, V.foo)))

	def test_literals_format_themselves(self):
		self.assertEqual("5", format_expression(5))
		self.assertEqual("2.5", format_expression(2.5))

	def test_str_and_format_use_the_formatter(self):
		expr = V.foo - V.bar
		self.assertEqual("foo-bar", str(expr))
		self.assertEqual("foo-bar", "%s" % expr)
		self.assertEqual("[foo-bar]", "[{}]".format(expr))
		self.assertEqual("   foo", "{:>6}".format(V.foo))
		self.assertIn("Sub", repr(expr))

class LayoutTests(unittest.TestCase):

	def test_spans_locate_each_node(self):
		foo, bar = V.foo, V.bar
		expr = foo - bar
		lay = layout(expr)
		self.assertEqual("foo-bar", lay.text)
		self.assertEqual([Span(0, 3)], lay.spans_of(foo))
		self.assertEqual([Span(4, 7)], lay.spans_of(bar))
		self.assertEqual([Span(0, 7)], lay.spans_of(expr))
		self.assertEqual("bar", lay.excerpt(lay.first_span(bar)))

	def test_a_shared_node_gets_a_span_per_appearance(self):
		block_size = V.block_size
		lay = layout(ceil_div(12345, block_size))
		spans = lay.spans_of(block_size)
		self.assertEqual([Span(8, 18), Span(23, 33)], spans)
		for span in spans:
			self.assertEqual("block_size", lay.excerpt(span))

	def test_spans_inside_parentheses_and_tuples(self):
		foo = V.foo
		lay = layout((1, -(foo + 2)))
		self.assertEqual("(1, -(foo+2))", lay.text)
		self.assertEqual("foo", lay.excerpt(lay.first_span(foo)))

	def test_unknown_nodes_span_everything(self):
		lay = layout(V.foo + 1)
		self.assertEqual(Span(0, 5), lay.first_span(V.bar))


if __name__ == '__main__':
	unittest.main()
