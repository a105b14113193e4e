import sys, random
from typing import Sequence
from boozetools.support.failureprone import illustration

from .location import Layout
from .ontology import type_name

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott",
		'Jeepers', 'Heavens', 'Nuts', 'Rats',
	]

	resignations = [
		'I cannot evaluate that.',
		'Nothing was evaluated.',
		'The arithmetic will have to wait.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects the issues found while checking expressions, and tells the console about them on request. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._unbound = {}
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> Sequence["Pic"]: return tuple(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) >= self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()
		self._unbound.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	def summary(self, since:int=0) -> str:
		return " ".join(pic.intro for pic in self._issues[since:])

	def texts(self, since:int=0) -> list[str]:
		return [pic.as_text() for pic in self._issues[since:]]

	# Methods the signature-checker calls:

	def unbound_variable(self, layout:Layout, name:str, span):
		# Keyed on the layout itself, which the map keeps alive.
		key = layout, name
		if key not in self._unbound:
			intro = "Nothing in the environment is called '%s'." % name
			self._unbound[key] = pic = Pic(intro, [])
			self.issue(pic)
		self._unbound[key].also(layout, span)

	def wrong_type(self, layout:Layout, name:str, span, declared:type, bound:type):
		intro = "'%s' is declared %s, but the environment binds a(n) %s." % (name, type_name(declared), type_name(bound))
		problem = [Annotation(layout, span, "needs a(n) "+type_name(declared))]
		self.issue(Pic(intro, problem))

	def conflicting_declarations(self, layout:Layout, name:str, first, second, types:Sequence[type]):
		intro = "'%s' is declared with two different types in the same expression." % name
		problem = [
			Annotation(layout, first, type_name(types[0])),
			Annotation(layout, second, type_name(types[1])),
		]
		footer = ["That's probably an oversight."]
		self.issue(Pic(intro, problem, footer))

class Annotation:
	text: str
	slice: slice
	caption: str
	def __init__(self, layout:Layout, span, caption:str=""):
		self.text = layout.text
		self.slice = span.as_slice()
		self.caption = caption
	def illustrate(self):
		width = self.slice.stop - self.slice.start
		return illustration(self.text, self.slice.start, width, prefix='    |', caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self.intro, self._anns, self._footer = intro, anns, footer
	def also(self, layout:Layout, span, caption:str=""): self._anns.append(Annotation(layout, span, caption))
	def as_text(self):
		lines = [self.intro, ""]
		for ann in self._anns:
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
