"""
These most-fundamental classes are separate from the rest
to avoid various circular-import scenarios. Everything that
can be pointed at in the source text is a Phrase, and every
failure a program can provoke is a SlogoError.
"""
from enum import Enum
from typing import Optional

class Phrase:
	def left(self) -> int:
		""" Return the index of the leftmost token of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the index of the rightmost token of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> tuple[int, int]: return self.left(), self.right()

class Mode(Enum):
	"""
	The two ways to run a node. An EFFECTFUL run may move turtles and bind variables.
	A PURE_ATTEMPT must not leave any lasting mark; nodes that cannot honor that refuse.
	"""
	EFFECTFUL = "effectful"
	PURE_ATTEMPT = "pure attempt"

EFFECTFUL_ONLY = frozenset([Mode.EFFECTFUL])
EITHER_MODE = frozenset(Mode)

#######################################################################

class SlogoError(Exception):
	""" Root of everything a program can do wrong, short of a bug in the interpreter. """
	phrase: Optional[Phrase] = None

class RuntimeEvaluationError(SlogoError):
	def __init__(self, message:str, phrase:Optional[Phrase]=None):
		super().__init__(message)
		self.message = message
		self.phrase = phrase

class ImpureExpression(RuntimeEvaluationError):
	""" Something with side-effects came up while trying to evaluate purely. """
	def __init__(self, phrase:Phrase):
		super().__init__("This would have side-effects, so it cannot be evaluated purely.", phrase)
