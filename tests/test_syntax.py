import copy
from fractions import Fraction
import unittest

from unevaluated.ontology import ConstructionRejected, ANY
from unevaluated.syntax import V, Variable, UnaryOp, BinaryOp, variable
from unevaluated import syntax

class Meters:
	""" A stranger to the type algebra, with only addition defined. """
	def __init__(self, n): self.n = n
	def __add__(self, other): return Meters(self.n + other)

class ConstructionTests(unittest.TestCase):

	def test_variables_default_to_int(self):
		foo = Variable("foo")
		self.assertEqual("foo", foo.name)
		self.assertIs(int, foo.value_type)
		self.assertEqual(foo, variable("foo"))

	def test_shorthand(self):
		self.assertEqual(Variable("block_size"), V.block_size)
		self.assertEqual(Variable("block_size"), V["block_size"])
		self.assertEqual(Variable("ratio", float), V["ratio", float])
		self.assertFalse(hasattr(V, "__wrapped__"))

	def test_operators_build_nodes(self):
		foo, bar = V.foo, V.bar
		for expr, kind in [
			(+foo, "Plus"), (-foo, "Negate"), (~foo, "BitNot"),
		]:
			with self.subTest(kind):
				self.assertIsInstance(expr, UnaryOp)
				self.assertEqual(kind, expr.kind)
				self.assertIs(foo, expr.operand)
		for expr, kind in [
			(foo + bar, "Add"), (foo - 7, "Sub"), (7 * foo, "Mul"),
			(foo / bar, "Div"), (7 % foo, "Mod"),
		]:
			with self.subTest(kind):
				self.assertIsInstance(expr, BinaryOp)
				self.assertEqual(kind, expr.kind)

	def test_reflected_operators_keep_the_literal_on_the_left(self):
		expr = 7 - V.foo
		self.assertEqual(7, expr.lhs)
		self.assertEqual(V.foo, expr.rhs)

	def test_two_literals_compute_right_away(self):
		self.assertEqual(7, syntax.add(3, 4))
		self.assertEqual(-3, syntax.divide(-7, 2))
		self.assertEqual(-1, syntax.modulo(-7, 2))
		self.assertEqual(-5, syntax.negate(5))
		self.assertEqual(~5, syntax.invert(5))
		self.assertIsInstance(syntax.subtract(V.foo, 1), BinaryOp)
		self.assertIsInstance(syntax.positive(V.foo), UnaryOp)

	def test_result_types(self):
		self.assertIs(int, (V.foo / V.bar).value_type)
		self.assertIs(int, (-V.foo % 3).value_type)
		self.assertIs(float, (V.foo / 2.0).value_type)
		self.assertIs(complex, (V.foo * 1j).value_type)
		self.assertIs(Fraction, (V["f", Fraction] + 1).value_type)
		self.assertIs(int, (V["b", bool] + V["b", bool]).value_type)
		self.assertIs(str, (V["s", str] * 3).value_type)
		self.assertIs(ANY, (~V["a", object]).value_type)
		self.assertIs(ANY, (V["m", Meters] + 1).value_type)

	def test_unsupported_operators_are_refused_at_construction(self):
		for build in [
			lambda: ~V["x", float],
			lambda: V["s", str] - 1,
			lambda: V.foo % 1j,
			lambda: V["z", complex] % 2,
			lambda: -V["s", str],
			lambda: 1 - V["m", Meters],
			lambda: V.foo + (1, 2),
		]:
			with self.subTest(build=build):
				with self.assertRaises(ConstructionRejected):
					build()

	def test_malformed_nodes_are_refused(self):
		for build in [
			lambda: Variable(""),
			lambda: Variable("x", "int"),
			lambda: UnaryOp("-", 5),
			lambda: UnaryOp("!", V.foo),
			lambda: BinaryOp("+", 1, 2),
			lambda: BinaryOp("**", V.foo, 2),
		]:
			with self.subTest(build=build):
				self.assertRaises(ConstructionRejected, build)

	def test_rejection_is_a_type_error(self):
		with self.assertRaises(TypeError):
			~V["x", float]

	def test_nodes_are_immutable(self):
		expr = V.foo + 1
		with self.assertRaises(AttributeError):
			expr.lhs = V.bar
		with self.assertRaises(AttributeError):
			V.foo.name = "bar"

	def test_copies_are_the_same_node(self):
		expr = (V.foo + 1) * V["s", str]
		self.assertIs(expr, copy.copy(expr))
		self.assertIs(expr, copy.deepcopy(expr))
		self.assertEqual([expr, (V.bar, 2)], copy.deepcopy([expr, (V.bar, 2)]))

	def test_string_formatting_is_plausible(self):
		self.assertIs(str, (V["s", str] % 3).value_type)
		self.assertIs(str, (V["s", str] % V["t", str]).value_type)
		with self.assertRaises(ConstructionRejected):
			3 % V["s", str]

	def test_structural_equality(self):
		self.assertEqual(V.foo + 1, V.foo + 1)
		self.assertEqual(hash(V.foo + 1), hash(V.foo + 1))
		self.assertNotEqual(V.foo, V["foo", float])
		self.assertNotEqual(V.foo - V.bar, V.bar - V.foo)
		self.assertNotEqual(-V.foo, +V.foo)


if __name__ == '__main__':
	unittest.main()
