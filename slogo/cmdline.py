"""
This is an interpreter for the SLogo turtle-graphics language.

{0}

For example:

    slogo square.logo

will run square.logo if possible, or else try to explain why not.
Afterwards it shows where each turtle ended up, and what variables exist.

    slogo -l French carre.logo

reads the program with French instruction names.

    slogo -h

will explain all the arguments.
"""
import sys, argparse
from math import degrees
from pathlib import Path

from .classifier import available_rule_sets

parser = argparse.ArgumentParser(
	prog="slogo",
	description="Interpreter for the SLogo turtle-graphics language.",
)
parser.add_argument("program", help="try examples/square.logo for example.")
parser.add_argument('-l', "--language", default="English", help="Natural language of the instruction names. (Default: English)")
parser.add_argument('-c', "--check", action="store_true", help="Check the program but do not actually run it.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what is going on.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .executive import Session
	from .ontology import SlogoError
	report = Report(verbose=args.verbose)
	if args.language not in available_rule_sets():
		report.no_such_language(args.language, [n for n in available_rule_sets() if n != "Syntax"])
		report.complain_to_console()
		return 1
	path = Path.cwd() / args.program
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except OSError as ex:
		print("Could not read %s: %s"%(path, ex.strerror), file=sys.stderr)
		return 1
	session = Session(args.language, report)
	try:
		if args.check:
			session.parse(text, path)
			print("Looks plausible to me.", file=sys.stderr)
			return
		result = session.run(text, path)
	except SlogoError as ex:
		try: report.failed(ex)
		except TooManyIssues: pass
		report.complain_to_console()
		return 1
	show_world(session)
	report.info("Final value:", result)

def show_world(session):
	for turtle in session.turtles:
		print("turtle %d: x=%g y=%g heading=%g pen=%s%s" % (
			turtle.ident, turtle.x, turtle.y, degrees(turtle.heading),
			"down" if turtle.pen_down else "up",
			"" if turtle.visible else " (hidden)",
		))
	if session.symbols.list_of_variables():
		print(str(session.symbols), end="")

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
