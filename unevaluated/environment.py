"""
Environments: ordered collections of name/value bindings, never mutated in place.

Every set or erase returns a new environment and leaves the old one as it was,
which makes it easy to explore several what-if bindings from a shared base.
These environments stay small, so plain copy-on-update does the job.

Setting a name that is already bound removes the old binding and appends the new
one: Lookup sees a simple replacement, but the name moves to the end of the order.

Two flavors:
	DynamicEnvironment holds type-erased values. Whether a variable's value
		has its declared type is checked as evaluation reaches the variable.
	StaticEnvironment fixes each binding's type when the binding is made.
		Expressions are checked against its signature before any evaluation,
		so a missing name or wrong type is refused up front, never half-way.
"""
import abc
from typing import Any, Iterator, Mapping, NamedTuple, Optional
from .ontology import UnboundVariable, TypeMismatch, ConstructionRejected, type_name
from .diagnostics import Report
from . import algebra, check, evaluator

class Binding(NamedTuple):
	name: str
	value: Any
	value_type: type

def _require_name(name):
	if not isinstance(name, str) or not name:
		raise ConstructionRejected("A binding needs a non-empty name, not %r." % (name,))

def bind(name:str, value, value_type:Optional[type]=None) -> Binding:
	_require_name(name)
	if value_type is None: return Binding(name, value, type(value))
	if not isinstance(value_type, type):
		raise ConstructionRejected("The type bound to %r must be a class, not %r." % (name, value_type))
	if not algebra.conforms(value, value_type):
		raise ConstructionRejected("Cannot bind %r to a(n) %s as a(n) %s." % (name, type_name(type(value)), type_name(value_type)))
	return Binding(name, value, value_type)

class Environment(abc.ABC):

	@classmethod
	def empty(cls) -> "Environment":
		return cls()

	@abc.abstractmethod
	def bindings(self) -> tuple[Binding, ...]:
		""" The active bindings, in order. """

	@abc.abstractmethod
	def get(self, name:str) -> Any:
		pass

	@abc.abstractmethod
	def set(self, name:str, value) -> "Environment":
		pass

	@abc.abstractmethod
	def erase(self, name:str) -> "Environment":
		pass

	@abc.abstractmethod
	def contains(self, name:str) -> bool:
		pass

	def admit(self, expr):
		""" Called once, before evaluating an expression. Raise to refuse it. """

	def lookup(self, var) -> Any:
		value = self.get(var.name)
		if not algebra.conforms(value, var.value_type):
			raise TypeMismatch(var.name, var.value_type, type(value))
		return value

	def names(self) -> list[str]:
		return [b.name for b in self.bindings()]

	def signature(self) -> dict[str, type]:
		return {b.name: b.value_type for b in self.bindings()}

	def __contains__(self, name): return self.contains(name)
	def __iter__(self) -> Iterator[Binding]: return iter(self.bindings())
	def __len__(self): return len(self.bindings())

	def __eq__(self, other):
		return type(self) is type(other) and self.bindings() == other.bindings()

	def __repr__(self):
		return "%s(%s)" % (type(self).__name__, ", ".join("%s=%r" % (b.name, b.value) for b in self.bindings()))


class DynamicEnvironment(Environment):
	""" An ordered mapping from names to type-erased values. """
	_cells: dict[str, Any]

	def __init__(self, cells:Optional[Mapping[str, Any]]=None):
		self._cells = {}
		for name, value in (cells or {}).items():
			_require_name(name)
			self._cells[name] = value

	@classmethod
	def of(cls, **values) -> "DynamicEnvironment":
		return cls(values)

	def _adopt(self, cells:dict) -> "DynamicEnvironment":
		it = DynamicEnvironment()
		it._cells = cells
		return it

	def bindings(self):
		return tuple(Binding(name, value, type(value)) for name, value in self._cells.items())

	def contains(self, name:str) -> bool:
		return name in self._cells

	def get(self, name:str):
		try: return self._cells[name]
		except KeyError: raise UnboundVariable(name) from None

	def set(self, name:str, value) -> "DynamicEnvironment":
		_require_name(name)
		cells = dict(self._cells)
		cells.pop(name, None)
		cells[name] = value
		return self._adopt(cells)

	def erase(self, name:str) -> "DynamicEnvironment":
		if name not in self._cells: raise UnboundVariable(name)
		cells = dict(self._cells)
		del cells[name]
		return self._adopt(cells)


class StaticEnvironment(Environment):
	""" A fixed, ordered tuple of typed bindings. """
	_bindings: tuple[Binding, ...]

	def __init__(self, *bindings:Binding):
		seen = set()
		for b in bindings:
			if b.name in seen: raise ConstructionRejected("%r is bound more than once." % b.name)
			seen.add(b.name)
			bind(*b)
		self._bindings = tuple(bindings)

	@classmethod
	def of(cls, **values) -> "StaticEnvironment":
		return cls(*(bind(name, value) for name, value in values.items()))

	def bindings(self):
		return self._bindings

	def _find(self, name:str) -> Binding:
		for b in self._bindings:
			if b.name == name: return b
		raise UnboundVariable(name)

	def contains(self, name:str) -> bool:
		return any(b.name == name for b in self._bindings)

	def get(self, name:str):
		return self._find(name).value

	def set(self, name:str, value, value_type:Optional[type]=None) -> "StaticEnvironment":
		fresh = bind(name, value, value_type)
		return StaticEnvironment(*(b for b in self._bindings if b.name != name), fresh)

	def erase(self, name:str) -> "StaticEnvironment":
		self._find(name)
		return StaticEnvironment(*(b for b in self._bindings if b.name != name))

	def admit(self, expr, report:Optional[Report]=None):
		check.require_plausible(expr, self.signature(), report)

	def prepare(self, expr, report:Optional[Report]=None) -> evaluator.Prepared:
		"""
		Check the expression once, resolve its variables once,
		and hand back something that can be evaluated repeatedly.
		"""
		self.admit(expr, report)
		cells = {var.name: self.get(var.name) for var in check.free_variables(expr)}
		return evaluator.Prepared(expr, cells)


def empty() -> DynamicEnvironment:
	return DynamicEnvironment()
