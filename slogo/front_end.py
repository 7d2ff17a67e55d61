"""
Turns program text into a syntax tree.

Scanning splits the text into words and asks the lexicon what kind each one is.
Building then walks the words left to right: each instruction knows how many
inputs it takes, so the tree falls out of a simple recursive descent.
A handful of special forms (make, repeat, to, ask, and so on) take
[bracketed] lists in fixed places, so they get their own little rules.
"""
import re
from pathlib import Path
from typing import Callable, Mapping, Optional

from boozetools.parsing.interface import ParseError

from . import syntax
from .classifier import Lexicon, UnrecognizedKeyword
from .commands import TURTLE_COMMANDS, MANAGER_COMMANDS
from .location import start_segment, insert_token, row_col
from .ontology import SlogoError
from .primitive import OPERATORS

class SlogoParseError(ParseError, SlogoError):
	def __init__(self, message:str, token:Optional[syntax.Token]):
		super().__init__(message, token)
		self.message = message
		self.phrase = self.token = token

	def __str__(self):
		if self.token is None: return self.message
		row, col = row_col(self.token.spot)
		return "%s (at %r, line %d column %d)"%(self.message, self.token.text, row, col)

CLOSERS = frozenset(["ListEnd", "GroupEnd"])
_WORD = re.compile(r"\S+")
_INTEGER = re.compile(r"-?[0-9]+")

def scan(text:str, lexicon:Lexicon, path:Optional[Path]=None) -> list[syntax.Token]:
	""" Classify each word. A comment runs to the end of its line. """
	start_segment(path, text)
	tokens = []
	offset = 0
	for line in text.splitlines(keepends=True):
		for match in _WORD.finditer(line):
			start = offset + match.start()
			spot = insert_token(slice(start, offset + match.end()))
			try: kind = lexicon.kind(match.group())
			except UnrecognizedKeyword:
				raise UnrecognizedKeyword(match.group(), syntax.Token("?", match.group(), spot, start)) from None
			if kind == "Comment": break
			tokens.append(syntax.Token(kind, match.group(), spot, start))
		offset += len(line)
	return tokens

def literal_value(text:str):
	return int(text) if _INTEGER.fullmatch(text) else float(text)

class TreeBuilder:
	"""
	One builder per parse. It learns the arity of each procedure as it
	reads its definition, so later (and recursive) calls know how many inputs to take.
	"""
	def __init__(self, lexicon:Lexicon, procedures:Mapping[str, int]=()):
		self._lexicon = lexicon
		self._arity = dict(procedures)
		self._tokens, self._index = [], 0
		self._special = {
			"MakeVariable": self._make_variable,
			"Repeat": self._repeat,
			"DoTimes": self._dotimes,
			"For": self._for,
			"If": self._if,
			"IfElse": self._ifelse,
			"MakeUserInstruction": self._define,
			"Tell": self._tell,
			"Ask": self._ask,
			"AskWith": self._ask_with,
		}

	def build(self, tokens:list[syntax.Token]) -> syntax.Program:
		self._tokens, self._index = tokens, 0
		body = []
		while self._index < len(tokens):
			body.append(self._expression())
		return syntax.Program(body)

	# Token-level helpers

	def _next(self) -> syntax.Token:
		if self._index >= len(self._tokens):
			last = self._tokens[-1] if self._tokens else None
			raise SlogoParseError("The program ran out of words before it was finished.", last)
		token = self._tokens[self._index]
		self._index += 1
		return token

	def _peek_kind(self) -> Optional[str]:
		if self._index < len(self._tokens): return self._tokens[self._index].kind

	def _expect(self, kind:str, what:str) -> syntax.Token:
		token = self._next()
		if token.kind != kind:
			raise SlogoParseError("Expected %s here."%what, token)
		return token

	# Grammar

	def _expression(self) -> syntax.Expression:
		token = self._next()
		if token.kind == "Constant": return syntax.Literal(token, literal_value(token.text))
		if token.kind == "Variable": return syntax.Variable(token)
		if token.kind == "Command": return self._instruction(token)
		if token.kind == "GroupStart": return self._group(token)
		if token.kind == "ListStart":
			raise SlogoParseError("A [list] cannot stand where a value belongs.", token)
		raise SlogoParseError("This does not close anything.", token)

	def _operands(self, head:syntax.Token, arity:int) -> list[syntax.Expression]:
		args = []
		while len(args) < arity:
			if self._peek_kind() in CLOSERS:
				plural = '' if arity == 1 else 's'
				message = "%s takes %d input%s, but got only %d."%(head.text, arity, plural, len(args))
				raise SlogoParseError(message, head)
			args.append(self._expression())
		return args

	def _instruction(self, token:syntax.Token) -> syntax.Expression:
		if self._lexicon.knows(token.text):
			token.symbol = self._lexicon.translate(token.text)
			if token.symbol in self._special:
				return self._special[token.symbol](token)
		arity, make = self._resolve(token)
		return make(self._operands(token, arity))

	def _resolve(self, token:syntax.Token) -> tuple[int, Callable[[list], syntax.Expression]]:
		""" Arity and node-constructor for an ordinary (not special-form) instruction. """
		symbol = token.symbol
		if symbol in TURTLE_COMMANDS:
			command = TURTLE_COMMANDS[symbol]
			return command.arity, lambda args: syntax.CommandCall(token, command, args)
		if symbol in MANAGER_COMMANDS:
			command = MANAGER_COMMANDS[symbol]
			return command.arity, lambda args: syntax.ManagerCall(token, command, args)
		if symbol in OPERATORS:
			primitive = OPERATORS[symbol]
			return primitive.arity, lambda args: syntax.Operation(token, primitive, args)
		if symbol is not None:
			raise SlogoParseError("%s is not something this interpreter can do here."%symbol, token)
		name = token.text.lower()
		if name in self._arity:
			return self._arity[name], lambda args: syntax.ProcedureCall(token, args)
		raise UnrecognizedKeyword(token.text, token)

	def _group(self, opener:syntax.Token) -> syntax.Expression:
		"""
		(sum 1 2 3 4) folds a reducible operator over all its inputs.
		Anything else in a group repeats over consecutive runs of inputs: (fd 10 20) is fd 10 fd 20.
		"""
		head = self._expect("Command", "an instruction at the start of this (group)")
		if self._lexicon.knows(head.text):
			head.symbol = self._lexicon.translate(head.text)
			if head.symbol in self._special:
				raise SlogoParseError("This instruction cannot be grouped.", head)
		arity, make = self._resolve(head)
		args = []
		while self._peek_kind() != "GroupEnd":
			if self._peek_kind() == "ListEnd":
				raise SlogoParseError("This (group) is missing its closing parenthesis.", opener)
			args.append(self._expression())
		closer = self._next()
		primitive = OPERATORS.get(head.symbol)
		if primitive is not None and primitive.reducible and len(args) >= primitive.arity:
			return make(args)
		if arity == 0 and not args:
			return make(args)
		if arity == 0 or not args or len(args) % arity:
			message = "This group has %d inputs, which do not divide evenly among %s's %d."
			raise SlogoParseError(message%(len(args), head.text, arity), head)
		calls = [make(args[i:i+arity]) for i in range(0, len(args), arity)]
		return calls[0] if len(calls) == 1 else syntax.Block(opener, calls, closer)

	def _block(self) -> syntax.Block:
		opener = self._expect("ListStart", "a [list]")
		body = []
		while self._peek_kind() != "ListEnd":
			if self._peek_kind() == "GroupEnd":
				raise SlogoParseError("This does not close anything.", self._next())
			body.append(self._expression())
		return syntax.Block(opener, body, self._next())

	def _variable(self) -> syntax.Variable:
		return syntax.Variable(self._expect("Variable", "a :variable"))

	# Special forms

	def _make_variable(self, head):
		target = self._variable()
		return syntax.MakeVariable(head, target, self._expression())

	def _repeat(self, head):
		count = self._expression()
		return syntax.Repeat(head, count, self._block())

	def _dotimes(self, head):
		self._expect("ListStart", "[ :variable limit ]")
		variable = self._variable()
		limit = self._expression()
		self._expect("ListEnd", "the ] closing [ :variable limit ]")
		return syntax.DoTimes(head, variable, limit, self._block())

	def _for(self, head):
		self._expect("ListStart", "[ :variable start end increment ]")
		variable = self._variable()
		start, end, step = self._expression(), self._expression(), self._expression()
		self._expect("ListEnd", "the ] closing [ :variable start end increment ]")
		return syntax.For(head, variable, start, end, step, self._block())

	def _if(self, head):
		condition = self._expression()
		return syntax.If(head, condition, self._block())

	def _ifelse(self, head):
		condition = self._expression()
		then_part = self._block()
		return syntax.IfElse(head, condition, then_part, self._block())

	def _define(self, head):
		nom = self._expect("Command", "the name of the new instruction")
		if self._lexicon.knows(nom.text):
			raise SlogoParseError("%s is already built in, so it cannot be redefined."%nom.text, nom)
		self._expect("ListStart", "a [list] of :parameters")
		params = []
		while self._peek_kind() != "ListEnd":
			params.append(self._variable())
		self._next()
		self._arity[nom.text.lower()] = len(params)
		return syntax.DefineProcedure(head, nom, params, self._block())

	def _tell(self, head):
		return syntax.Tell(head, self._block())

	def _ask(self, head):
		idents = self._block()
		return syntax.Ask(head, idents, self._block())

	def _ask_with(self, head):
		condition = self._block()
		return syntax.AskWith(head, condition, self._block())

def parse_text(text:str, lexicon:Lexicon, procedures:Mapping[str, int]=(), path:Optional[Path]=None) -> syntax.Program:
	""" Scan and build. Raises UnrecognizedKeyword or SlogoParseError. """
	return TreeBuilder(lexicon, procedures).build(scan(text, lexicon, path))

def parse_file(path:Path, lexicon:Lexicon, procedures:Mapping[str, int]=()) -> syntax.Program:
	with open(path, "r", encoding="utf-8") as fh:
		return parse_text(fh.read(), lexicon, procedures, path)
