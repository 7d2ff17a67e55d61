"""
The set of parse-nodes.
The tree builder calls these constructors bottom-up as it recognizes each instruction.
Every node owns its children outright; nothing points back up the tree.

Each node class says which evaluation modes it honors. Nodes that only ever
compute, or that just pass the mode along to their children, honor either mode.
Nodes that would leave a lasting mark on the world honor only the effectful one.
"""
from typing import Optional, Sequence, Type

from .ontology import Phrase, EFFECTFUL_ONLY, EITHER_MODE
from .commands import Command
from .primitive import Primitive

class Token(Phrase):
	""" One classified word of program text. """
	kind: str   # From the syntax rules: Constant, Variable, Command, ListStart, and so forth.
	symbol: Optional[str] = None   # The canonical instruction, once translated.

	def __init__(self, kind:str, text:str, spot:int, offset:int):
		self.kind, self.text, self.spot, self.offset = kind, text, spot, offset
	def __repr__(self): return "<%s %r>"%(self.kind, self.text)
	def left(self): return self.spot
	def right(self): return self.spot

class Expression(Phrase):
	head: Token
	modes = EITHER_MODE
	def left(self): return self.head.left()
	def right(self): return self.head.right()

def _last(head:Token, children:Sequence[Phrase]) -> int:
	return (children[-1] if children else head).right()

class Literal(Expression):
	def __init__(self, head:Token, value):
		self.head, self.value = head, value
	def __repr__(self): return repr(self.value)

class Variable(Expression):
	def __init__(self, head:Token):
		self.head = head
		self.name = head.text[1:]
	def __repr__(self): return ":"+self.name

class CommandCall(Expression):
	""" Run one command per active turtle. """
	def __init__(self, head:Token, command:Type[Command], args:Sequence[Expression]):
		assert len(args) == command.arity
		self.head, self.command, self.args = head, command, args
	@property
	def modes(self): return self.command.modes
	def right(self): return _last(self.head, self.args)

class ManagerCall(CommandCall):
	""" Run one command against the flock as a whole. """

class Operation(Expression):
	def __init__(self, head:Token, primitive:Primitive, args:Sequence[Expression]):
		assert len(args) == primitive.arity or (primitive.reducible and len(args) > primitive.arity)
		self.head, self.primitive, self.args = head, primitive, args
	def right(self): return _last(self.head, self.args)

class Block(Expression):
	""" A [bracketed] list of expressions. Its value is the last one's. """
	def __init__(self, head:Token, body:Sequence[Expression], coda:Token):
		self.head, self.body, self.coda = head, body, coda
	def right(self): return self.coda.right()
	def __len__(self): return len(self.body)

class Program(Block):
	def __init__(self, body:Sequence[Expression]):
		self.body = body
	def left(self): return self.body[0].left()
	def right(self): return self.body[-1].right()

class MakeVariable(Expression):
	modes = EFFECTFUL_ONLY
	def __init__(self, head:Token, target:Variable, expr:Expression):
		self.head, self.target, self.expr = head, target, expr
	def right(self): return self.expr.right()

class Repeat(Expression):
	def __init__(self, head:Token, count:Expression, body:Block):
		self.head, self.count, self.body = head, count, body
	def right(self): return self.body.right()

class DoTimes(Expression):
	def __init__(self, head:Token, variable:Variable, limit:Expression, body:Block):
		self.head, self.variable, self.limit, self.body = head, variable, limit, body
	def right(self): return self.body.right()

class For(Expression):
	def __init__(self, head:Token, variable:Variable, start:Expression, end:Expression, step:Expression, body:Block):
		self.head, self.variable, self.body = head, variable, body
		self.start, self.end, self.step = start, end, step
	def right(self): return self.body.right()

class If(Expression):
	def __init__(self, head:Token, condition:Expression, then_part:Block):
		self.head, self.condition, self.then_part = head, condition, then_part
	def right(self): return self.then_part.right()

class IfElse(Expression):
	def __init__(self, head:Token, condition:Expression, then_part:Block, else_part:Block):
		self.head, self.condition = head, condition
		self.then_part, self.else_part = then_part, else_part
	def right(self): return self.else_part.right()

class DefineProcedure(Expression):
	modes = EFFECTFUL_ONLY
	def __init__(self, head:Token, nom:Token, params:Sequence[Variable], body:Block):
		self.head, self.nom, self.params, self.body = head, nom, params, body
		self.name = nom.text.lower()
	def __repr__(self): return "<to %s %s>"%(self.name, self.params)
	def right(self): return self.body.right()

class ProcedureCall(Expression):
	def __init__(self, head:Token, args:Sequence[Expression]):
		self.head, self.args = head, args
		self.name = head.text.lower()
	def right(self): return _last(self.head, self.args)

class Tell(Expression):
	modes = EFFECTFUL_ONLY
	def __init__(self, head:Token, idents:Block):
		self.head, self.idents = head, idents
	def right(self): return self.idents.right()

class Ask(Expression):
	""" Run the body once for each listed turtle, one after the other. """
	def __init__(self, head:Token, idents:Block, body:Block):
		self.head, self.idents, self.body = head, idents, body
	def right(self): return self.body.right()

class AskWith(Expression):
	""" Run the body once for each turtle that satisfies the condition. """
	def __init__(self, head:Token, condition:Block, body:Block):
		self.head, self.condition, self.body = head, condition, body
	def right(self): return self.body.right()
