"""
Commands are the small units of work that bind an instruction's operands to one turtle.

A command is made fresh for each invocation and holds nothing but its operands.
Its `update` either mutates the turtle and returns None, or merely reads the
turtle and returns a number. The language still gives a mutation a value:
that comes from `outcome`, which sees the turtle's pose before and after.

A few commands address the whole flock rather than one turtle. Those
take the TurtleManager in `update` instead.
"""
from math import atan2, cos, degrees, isfinite, radians, sin
from typing import Optional

from .ontology import EFFECTFUL_ONLY, EITHER_MODE, RuntimeEvaluationError
from .turtles import Pose, Turtle, TurtleManager

class Command:
	arity = 0
	modes = EFFECTFUL_ONLY

	def __init__(self, *operands):
		assert len(operands) == self.arity, (type(self), operands)
		self.operands = operands

	def __repr__(self):
		return "%s%r"%(type(self).__name__, self.operands)

	def update(self, turtle:Turtle) -> Optional[float]:
		raise NotImplementedError(type(self))

	def outcome(self, before:Optional[Pose], after:Optional[Pose]) -> float:
		return self.operands[-1] if self.operands else 0

class Query(Command):
	""" Reads, but never writes. So these are fine to evaluate purely. """
	modes = EITHER_MODE

###############################################################################

class Forward(Command):
	arity = 1
	def update(self, turtle):
		distance = self.operands[0]
		turtle.move_to(turtle.x + distance*cos(turtle.heading), turtle.y + distance*sin(turtle.heading))

class Backward(Command):
	arity = 1
	def update(self, turtle):
		Forward(-self.operands[0]).update(turtle)

class Left(Command):
	arity = 1
	def update(self, turtle):
		turtle.heading += radians(self.operands[0])

class Right(Command):
	arity = 1
	def update(self, turtle):
		turtle.heading -= radians(self.operands[0])

def _turned(before:Pose, after:Pose) -> float:
	return degrees(after.heading - before.heading)

class SetHeading(Command):
	arity = 1
	def update(self, turtle):
		turtle.heading = radians(self.operands[0])
	def outcome(self, before, after): return _turned(before, after)

class SetTowards(Command):
	arity = 2
	def update(self, turtle):
		x, y = self.operands
		if (x, y) != (turtle.x, turtle.y):
			turtle.heading = atan2(y - turtle.y, x - turtle.x)
	def outcome(self, before, after): return _turned(before, after)

class SetPosition(Command):
	arity = 2
	def update(self, turtle):
		turtle.move_to(*self.operands)
	def outcome(self, before, after): return before.distance_to(after)

class Home(Command):
	def update(self, turtle):
		turtle.move_to(0.0, 0.0)
		turtle.heading = 0.0
	def outcome(self, before, after): return before.distance_to(after)

class ClearScreen(Home):
	def update(self, turtle):
		super().update(turtle)
		turtle.clear_trail()

class PenDown(Command):
	def update(self, turtle): turtle.pen_down = True
	def outcome(self, before, after): return 1

class PenUp(Command):
	def update(self, turtle): turtle.pen_down = False
	def outcome(self, before, after): return 0

class ShowTurtle(Command):
	def update(self, turtle): turtle.visible = True
	def outcome(self, before, after): return 1

class HideTurtle(Command):
	def update(self, turtle): turtle.visible = False
	def outcome(self, before, after): return 0

def _index(value) -> int:
	if not isfinite(value) or value < 0 or value != int(value):
		raise RuntimeEvaluationError("%r will not do as an index."%value)
	return int(value)

class SetPenColor(Command):
	arity = 1
	def update(self, turtle): turtle.pen_color = _index(self.operands[0])

class SetPenSize(Command):
	arity = 1
	def update(self, turtle):
		size = self.operands[0]
		if size < 0: raise RuntimeEvaluationError("A pen cannot be %r pixels wide."%size)
		turtle.pen_size = size

class SetShape(Command):
	arity = 1
	def update(self, turtle): turtle.shape = _index(self.operands[0])

class Stamp(Command):
	def update(self, turtle): turtle.stamps.append(turtle.pose())
	def outcome(self, before, after): return 1

###############################################################################

class XCoordinate(Query):
	def update(self, turtle): return turtle.x

class YCoordinate(Query):
	def update(self, turtle): return turtle.y

class Heading(Query):
	def update(self, turtle): return degrees(turtle.heading)

class IsPenDown(Query):
	def update(self, turtle): return int(turtle.pen_down)

class IsShowing(Query):
	def update(self, turtle): return int(turtle.visible)

class GetPenColor(Query):
	def update(self, turtle): return turtle.pen_color

class GetShape(Query):
	def update(self, turtle): return turtle.shape

class ID(Query):
	def update(self, turtle): return turtle.ident

###############################################################################

class SetBackground(Command):
	arity = 1
	def update(self, manager:TurtleManager): manager.set_background(self.operands[0])

class SetPalette(Command):
	arity = 4
	def update(self, manager:TurtleManager): manager.set_palette(*self.operands)
	def outcome(self, before, after): return self.operands[0]

class ClearStamps(Command):
	def update(self, manager:TurtleManager):
		for turtle in manager: turtle.stamps.clear()
	def outcome(self, before, after): return 1

class Turtles(Query):
	def update(self, manager:TurtleManager): return len(manager)

###############################################################################

def _catalog(*classes):
	return {c.__name__:c for c in classes}

TURTLE_COMMANDS = _catalog(
	Forward, Backward, Left, Right, SetHeading, SetTowards, SetPosition, Home, ClearScreen,
	PenDown, PenUp, ShowTurtle, HideTurtle, SetPenColor, SetPenSize, SetShape, Stamp,
	XCoordinate, YCoordinate, Heading, IsPenDown, IsShowing, GetPenColor, GetShape, ID,
)

MANAGER_COMMANDS = _catalog(SetBackground, SetPalette, ClearStamps, Turtles)
