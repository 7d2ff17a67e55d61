"""
This is the overall control for running programs, and the face a host application sees.

A Session bundles the lexicon, the symbol table, and the turtles.
Each call to `run` parses one program text and interprets it against the same
world, so variables, procedures, and turtle positions carry over from one run
to the next. A failed run leaves the world as far along as it got, and the
session stays ready for the next program.
"""
from numbers import Number
from pathlib import Path
from typing import Optional

from . import syntax
from .classifier import Lexicon
from .diagnostics import Report
from .front_end import parse_text
from .interpreter import Context, interpret, evaluate
from .symbols import SymbolTable
from .turtles import TurtleManager

class Session:
	def __init__(self, language:str="English", report:Optional[Report]=None):
		self.lexicon = Lexicon(language)
		self.symbols = SymbolTable()
		self.turtles = TurtleManager()
		self.context = Context(self.symbols, self.turtles)
		self._report = report or Report(verbose=0)

	def set_language(self, language:str):
		self._report.info("Switching language to", language)
		self.lexicon.set_language(language)

	def procedures(self) -> dict[str, int]:
		return {name: len(dfn.params) for name, dfn in self.symbols.procedures().items()}

	def parse(self, text:str, path:Optional[Path]=None) -> syntax.Program:
		program = parse_text(text, self.lexicon, self.procedures(), path)
		self._report.info("Parsed %d top-level instructions."%len(program.body))
		return program

	def run(self, text:str, path:Optional[Path]=None) -> Number:
		program = self.parse(text, path)
		self.turtles.clear_motion()
		result = interpret(program, self.context)
		self._report.info("Result:", result)
		return result

	def evaluate(self, text:str) -> Number:
		""" Compute the value of a program which must not change anything. """
		return evaluate(self.parse(text), self.context)

	def reset(self):
		self.symbols.reset_state()
		self.turtles.reset()
