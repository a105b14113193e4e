"""
These most-fundamental classes are separate from the rest
to avoid various circular-import scenarios.

Everything the package raises on purpose descends from ExpressionError.
Each kind of failure also inherits from the nearest built-in exception,
so that ordinary Python handlers (KeyError, TypeError, ArithmeticError)
catch them the way a caller would expect.
"""

# A variable declared with this type accepts any value,
# and any operator applied to it yields this type again.
ANY = object

def type_name(t) -> str:
	return getattr(t, "__qualname__", None) or repr(t)

class ExpressionError(Exception):
	pass

class UnboundVariable(ExpressionError, KeyError):
	""" Nothing in the environment answers to this name. """
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def __str__(self): return "No binding for %r" % self.name

class TypeMismatch(ExpressionError, TypeError):
	""" The environment has a value for the name, but not of the declared type. """
	def __init__(self, name:str, expected:type, actual:type):
		super().__init__(name, expected, actual)
		self.name, self.expected, self.actual = name, expected, actual
	def __str__(self):
		return "%r was declared %s but is bound to a(n) %s" % (self.name, type_name(self.expected), type_name(self.actual))

class ArithmeticFault(ExpressionError, ArithmeticError):
	"""
	A native numeric operation faulted during evaluation.
	The native exception is chained as __cause__.
	"""
	def __init__(self, kind:str):
		super().__init__(kind)
		self.kind = kind
	def __str__(self):
		cause = self.__cause__
		return "%s failed: %s" % (self.kind, cause) if cause else "%s failed" % self.kind

class ConstructionRejected(ExpressionError, TypeError):
	"""
	Something that could never evaluate successfully was refused
	before any evaluation happened. When the static checker is the
	one refusing, the rendered diagnostics ride along in `issues`.
	"""
	def __init__(self, reason:str, issues=()):
		super().__init__(reason)
		self.reason = reason
		self.issues = tuple(issues)
	def __str__(self): return self.reason
