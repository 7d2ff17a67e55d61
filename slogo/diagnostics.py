import sys, random
from typing import Any, Optional
from boozetools.support.failureprone import illustration

from .classifier import UnrecognizedKeyword
from .front_end import SlogoParseError
from .location import lookup_span
from .ontology import Phrase, SlogoError
from .symbols import UndefinedVariable

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Hmm, ", "", ""]

	minced_oaths = [
		'Barnacles', 'Bother', 'Crumbs', 'Drat', 'Egad', 'Fiddlesticks',
		'Gadzooks', 'Good Grief', 'Great Scott', 'Jeepers', 'Leaping Lizards',
		'Nuts', 'Rats', 'Shell Shock', 'Snapping Turtles', 'Tortoise Tails',
	]

	resignations = [
		'The turtle refuses to budge.',
		'I have pulled my head into my shell.',
		'This is as far as I go.',
		'Somebody please put me right way up.',
		'I need a hand here.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects what went wrong, and can tell the console about it. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> list["Pic"]: return list(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

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

	def _pic(self, intro:str, phrase:Optional[Phrase], caption:str="", footer=()):
		problem = [] if phrase is None else [Annotation(phrase, caption)]
		self.issue(Pic(intro, problem, footer))

	# One method per kind of failure a program run can have:

	def unrecognized_token(self, ex):
		self._pic(str(ex), ex.token, "This word is not in the current language.")

	def malformed_program(self, ex):
		self._pic("SLogo got confused by this program.", ex.token, ex.message)

	def undefined_variable(self, ex):
		self._pic(ex.message, ex.phrase, "I don't see what this refers to.")

	def runtime_error(self, ex):
		self._pic("Something went wrong while running the program.", ex.phrase, ex.message)

	def failed(self, ex:SlogoError):
		""" Route any failure to the right kind of complaint. """
		if isinstance(ex, UnrecognizedKeyword): self.unrecognized_token(ex)
		elif isinstance(ex, SlogoParseError): self.malformed_program(ex)
		elif isinstance(ex, UndefinedVariable): self.undefined_variable(ex)
		else: self.runtime_error(ex)

	def no_such_language(self, language:str, available):
		intro = "I don't know a language called %r."%language
		self.issue(Pic(intro, [], ["Try one of: "+", ".join(available)]))

class Annotation:
	caption: str
	def __init__(self, node:Phrase, caption:str=""):
		span = lookup_span(*node.span())
		self.path = span.path
		self.source = span.source
		self.slice = span.slice
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.slice.start)
		single_line = self.source.line_of_text(row)
		width = self.slice.stop - self.slice.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def intro(self): return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		for ann in self._anns:
			if ann.path is not None:
				lines.append(str(ann.path))
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
