"""
This is a demonstration driver for deferred arithmetic expressions.

{0}

It builds a handful of expressions over the variables foo, bar, and block_size,
then prints each one beside its value in an environment of your choosing:

    unevaluated -b foo=13 -b bar=7 --block-size 128

will evaluate everything with those bindings, while

    unevaluated --static -b bar=None

shows how a static environment refuses expressions before evaluating them.

    unevaluated -h

will explain all the arguments.
"""
import sys, argparse, ast
from .ontology import ExpressionError
from .syntax import V
from .formatter import format_expression
from .environment import DynamicEnvironment, StaticEnvironment
from .diagnostics import Report
from . import check, evaluator

DEFAULT_BINDINGS = {"foo": 13, "bar": 7, "block_size": 128}

parser = argparse.ArgumentParser(
	prog="unevaluated",
	description="Build some expressions, then format and evaluate them.",
)
parser.add_argument('-b', "--bind", action="append", default=[], metavar="NAME=VALUE", help="Bind (or re-bind) a name. The value is a Python literal; None erases the name.")
parser.add_argument("--block-size", type=int, help="Shorthand for --bind block_size=N.")
parser.add_argument('-s', "--static", action="store_true", help="Use a static environment, which checks each expression before evaluating it.")
parser.add_argument('-c', "--check", action="store_true", help="Check the expressions against the environment but do not actually evaluate them.")
parser.add_argument('-v', "--verbose", action="count", default=0, help="Say more about what is going on.")

def ceil_div(n, d):
	return (n + d - 1) / d

def showcase() -> list:
	foo, bar, block_size = V.foo, V.bar, V.block_size
	num_blocks = ceil_div(12345, block_size)
	return [
		foo, +foo, -foo, ~foo,
		7 + foo, foo - bar, foo * 7, foo / bar, foo % 7,
		num_blocks,
		(block_size, num_blocks),
	]

def parse_binding(text:str) -> tuple[str, object]:
	name, sep, literal = text.partition("=")
	if not sep or not name.strip():
		raise argparse.ArgumentTypeError("expected NAME=VALUE, got %r" % text)
	try: value = ast.literal_eval(literal.strip())
	except (ValueError, SyntaxError):
		raise argparse.ArgumentTypeError("%r is not a Python literal" % literal) from None
	return name.strip(), value

def build_environment(args, report:Report):
	env = StaticEnvironment.of(**DEFAULT_BINDINGS) if args.static else DynamicEnvironment.of(**DEFAULT_BINDINGS)
	pairs = [parse_binding(text) for text in args.bind]
	if args.block_size is not None: pairs.append(("block_size", args.block_size))
	for name, value in pairs:
		env = env.erase(name) if value is None else env.set(name, value)
	report.info("Environment:", env)
	return env

def run(args):
	report = Report(verbose=args.verbose, max_issues=25)
	try: env = build_environment(args, report)
	except (argparse.ArgumentTypeError, ExpressionError) as ex:
		print(ex, file=sys.stderr)
		return 2
	failures = 0
	for expr in showcase():
		text = format_expression(expr)
		try:
			if args.check:
				check.require_plausible(expr, env.signature(), report)
			elif args.static:
				print(text, "=>", env.prepare(expr, report).evaluate())
			else:
				print(text, "=>", evaluator.evaluate(expr, env))
		except ExpressionError as ex:
			failures += 1
			print(text, "=> error:", ex, file=sys.stderr)
			report.complain_to_console()
		report.reset()
	if failures:
		return 1
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
	return 0

def main():
	if len(sys.argv) > 1:
		sys.exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
		sys.exit(run(parser.parse_args([])))
