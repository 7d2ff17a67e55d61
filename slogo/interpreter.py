"""
The tree-walker.

There is a single entry point per node, `Interpreter.execute(node, mode)`.
Before dispatching, it checks that the node honors the requested mode,
so a PURE_ATTEMPT that bumps into a turtle-moving command stops right there
with an ImpureExpression rather than moving the turtle.

Every node evaluates to a number: the language treats the result of the
last instruction as a usable value.

Turtles take turns. When several turtles are active, each instruction runs to
completion for one turtle before the next turtle starts, and `ask` runs its
whole body for one turtle before the next. All of them share the one symbol table.
"""
from contextlib import contextmanager
from functools import reduce
from math import isfinite
from numbers import Number
from typing import NamedTuple

from boozetools.support.foundation import Visitor

from . import syntax
from .ontology import Mode, RuntimeEvaluationError, ImpureExpression
from .symbols import SymbolTable, VariableType, UndefinedVariable, type_of
from .turtles import TurtleManager, Turtle

class Context(NamedTuple):
	symbols: SymbolTable
	turtles: TurtleManager

	@property
	def active(self) -> tuple[Turtle, ...]:
		return self.turtles.active

REPCOUNT = "repcount"

@contextmanager
def _pointing_at(node:syntax.Expression):
	""" Errors from deeper down that know no better get pinned on this node. """
	try: yield
	except RuntimeEvaluationError as ex:
		if ex.phrase is None: ex.phrase = node
		raise
	except (ArithmeticError, ValueError) as ex:
		raise RuntimeEvaluationError("%s: %s"%(node.head.text, ex), node) from None

class Interpreter(Visitor):
	def __init__(self, context:Context):
		self._symbols = context.symbols
		self._turtles = context.turtles

	def execute(self, node:syntax.Expression, mode:Mode) -> Number:
		if mode not in node.modes: raise ImpureExpression(node)
		return self.visit(node, mode)

	def _number(self, node:syntax.Expression, mode:Mode) -> Number:
		value = self.execute(node, mode)
		assert isinstance(value, Number), (node, value)
		return value

	def _each(self, nodes, mode:Mode) -> list:
		return [self._number(n, mode) for n in nodes]

	def _tally(self, node:syntax.Expression, mode:Mode) -> int:
		value = self._number(node, mode)
		if not isfinite(value):
			raise RuntimeEvaluationError("Cannot count to %r."%value, node)
		return int(value)

	@contextmanager
	def _local(self, name:str, value):
		self._symbols.set_local_variable(name, value, type_of(value))
		try: yield
		finally: self._symbols.remove_local_variable(name)

	def _count(self, name:str, values, body:syntax.Block, mode:Mode) -> Number:
		""" Run the body with a local loop variable taking each value in turn. """
		result = 0
		values = iter(values)
		first = next(values, None)
		if first is None: return result
		with self._local(name, first):
			result = self.execute(body, mode)
			for value in values:
				self._symbols.set_value(name, value, type_of(value))
				result = self.execute(body, mode)
		return result

	# Pure things

	def visit_Literal(self, node:syntax.Literal, mode:Mode):
		return node.value

	def visit_Variable(self, node:syntax.Variable, mode:Mode):
		try:
			kind = self._symbols.get_variable_type(node.name)
			value = self._symbols.get_value_in_general_form(node.name)
		except UndefinedVariable as ex:
			ex.phrase = node
			raise
		if kind in (VariableType.INTEGER, VariableType.DOUBLE):
			return value
		raise RuntimeEvaluationError("The %s :%s is not a number."%(kind.value, node.name), node)

	def visit_Operation(self, node:syntax.Operation, mode:Mode):
		args = self._each(node.args, mode)
		primitive = node.primitive
		try:
			if len(args) > primitive.arity:
				return reduce(primitive.fn, args)
			return primitive.fn(*args)
		except (ArithmeticError, ValueError) as ex:
			raise RuntimeEvaluationError("%s: %s"%(node.head.symbol, ex), node) from None

	def visit_Block(self, node:syntax.Block, mode:Mode):
		result = 0
		for expr in node.body:
			result = self.execute(expr, mode)
		return result

	def visit_Program(self, node:syntax.Program, mode:Mode):
		return self.visit_Block(node, mode)

	# Turtle commands

	def visit_CommandCall(self, node:syntax.CommandCall, mode:Mode):
		result = 0
		for turtle in self._turtles.active:
			with self._turtles.focus([turtle.ident]):
				command = node.command(*self._each(node.args, mode))
				before = turtle.pose()
				with _pointing_at(node): result = command.update(turtle)
				if result is None:
					result = command.outcome(before, turtle.pose())
		return result

	def visit_ManagerCall(self, node:syntax.ManagerCall, mode:Mode):
		command = node.command(*self._each(node.args, mode))
		with _pointing_at(node): result = command.update(self._turtles)
		return command.outcome(None, None) if result is None else result

	# Variables and control

	def visit_MakeVariable(self, node:syntax.MakeVariable, mode:Mode):
		value = self._number(node.expr, mode)
		self._symbols.set_value(node.target.name, value, type_of(value))
		return value

	def visit_Repeat(self, node:syntax.Repeat, mode:Mode):
		count = self._tally(node.count, mode)
		return self._count(REPCOUNT, range(1, count+1), node.body, mode)

	def visit_DoTimes(self, node:syntax.DoTimes, mode:Mode):
		limit = self._tally(node.limit, mode)
		return self._count(node.variable.name, range(1, limit+1), node.body, mode)

	def visit_For(self, node:syntax.For, mode:Mode):
		start, end, step = self._each((node.start, node.end, node.step), mode)
		if not step: raise RuntimeEvaluationError("A for-loop cannot count by zero.", node.step)
		def steps():
			value = start
			while (value <= end) if step > 0 else (value >= end):
				yield value
				value += step
		return self._count(node.variable.name, steps(), node.body, mode)

	def visit_If(self, node:syntax.If, mode:Mode):
		if self._number(node.condition, mode):
			return self.execute(node.then_part, mode)
		return 0

	def visit_IfElse(self, node:syntax.IfElse, mode:Mode):
		if self._number(node.condition, mode):
			return self.execute(node.then_part, mode)
		return self.execute(node.else_part, mode)

	# User-defined procedures

	def visit_DefineProcedure(self, node:syntax.DefineProcedure, mode:Mode):
		self._symbols.set_expression(node.name, node)
		return 1

	def visit_ProcedureCall(self, node:syntax.ProcedureCall, mode:Mode):
		try:
			kind = self._symbols.get_variable_type(node.name)
		except UndefinedVariable as ex:
			ex.phrase = node
			raise
		if kind is not VariableType.FUNCTION:
			raise RuntimeEvaluationError("%s is a variable, not an instruction."%node.name, node)
		procedure = self._symbols.get_value_in_general_form(node.name)
		assert isinstance(procedure, syntax.DefineProcedure)
		if len(procedure.params) != len(node.args):
			raise RuntimeEvaluationError("%s now takes %d inputs."%(node.name, len(procedure.params)), node)
		args = self._each(node.args, mode)
		bound = []
		try:
			for param, value in zip(procedure.params, args):
				self._symbols.set_local_variable(param.name, value, type_of(value))
				bound.append(param.name)
			return self.execute(procedure.body, mode)
		finally:
			for name in reversed(bound):
				self._symbols.remove_local_variable(name)

	# Many turtles

	def _idents(self, node:syntax.Expression, block:syntax.Block, mode:Mode) -> list:
		""" Addressing a new turtle hatches it, which a pure attempt may not do. """
		idents = self._each(block.body, mode)
		with _pointing_at(block):
			for i in idents:
				if mode is Mode.EFFECTFUL: self._turtles.turtle(i)
				elif self._turtles.ident(i) not in self._turtles: raise ImpureExpression(node)
		return idents

	def visit_Tell(self, node:syntax.Tell, mode:Mode):
		idents = self._idents(node, node.idents, mode)
		self._turtles.tell(idents)
		return idents[-1] if idents else 0

	def _dispatch(self, idents, body:syntax.Block, mode:Mode):
		result = 0
		for ident in idents:
			with self._turtles.focus([ident]):
				result = self.execute(body, mode)
		return result

	def visit_Ask(self, node:syntax.Ask, mode:Mode):
		return self._dispatch(self._idents(node, node.idents, mode), node.body, mode)

	def visit_AskWith(self, node:syntax.AskWith, mode:Mode):
		chosen = []
		for turtle in self._turtles:
			with self._turtles.focus([turtle.ident]):
				if self.execute(node.condition, Mode.PURE_ATTEMPT):
					chosen.append(turtle.ident)
		return self._dispatch(chosen, node.body, mode)

def interpret(node:syntax.Expression, context:Context) -> Number:
	""" Execute for effect, and also yield the value. """
	return _guarded(node, context, Mode.EFFECTFUL)

def evaluate(node:syntax.Expression, context:Context) -> Number:
	""" Compute a value without leaving a mark, or refuse with ImpureExpression. """
	return _guarded(node, context, Mode.PURE_ATTEMPT)

def _guarded(node, context, mode):
	try: return Interpreter(context).execute(node, mode)
	except RecursionError:
		raise RuntimeEvaluationError("The program recursed too deeply.", node) from None
