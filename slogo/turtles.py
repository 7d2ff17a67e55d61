"""
Turtle state, and the manager which owns the flock.

Headings are radians, measured anticlockwise from the +x axis.
The language speaks in degrees; commands do the conversion.
"""
import os
from contextlib import contextmanager
from math import hypot, isfinite
from typing import Iterable, Iterator, NamedTuple

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
from pygame import Color

from .ontology import RuntimeEvaluationError

DEFAULT_PALETTE = ("white", "black", "red", "green", "blue", "yellow", "orange", "purple")

class Pose(NamedTuple):
	x: float
	y: float
	heading: float

	def distance_to(self, other:"Pose") -> float:
		return hypot(other.x - self.x, other.y - self.y)

class Segment(NamedTuple):
	""" One stroke of the pen, for whatever draws the picture. """
	start: tuple[float, float]
	end: tuple[float, float]
	color: int
	size: float

class Turtle:
	def __init__(self, ident:int):
		self.ident = ident
		self.x, self.y, self.heading = 0.0, 0.0, 0.0
		self.pen_down = True
		self.visible = True
		self.shape = 0
		self.pen_color = 1
		self.pen_size = 1.0
		self.moved = False
		self.trail: list[Segment] = []
		self.stamps: list[Pose] = []

	def __repr__(self):
		return "<Turtle %d at (%g, %g)>"%(self.ident, self.x, self.y)

	def pose(self) -> Pose: return Pose(self.x, self.y, self.heading)

	def move_to(self, x:float, y:float):
		""" Every change of position comes through here. """
		if self.pen_down:
			self.trail.append(Segment((self.x, self.y), (x, y), self.pen_color, self.pen_size))
		self.x, self.y = x, y
		self.moved = True

	def clear_trail(self):
		self.trail.clear()

class TurtleManager:
	"""
	Owns every turtle and knows which ones are presently listening.
	Turtles come into being the first time something addresses them by number.
	"""
	_turtles: dict[int, Turtle]
	_active: tuple[int, ...]

	def __init__(self):
		self._turtles = {}
		self.background = 0
		self.palette = [Color(name) for name in DEFAULT_PALETTE]
		self._active = (self.turtle(1).ident,)

	@staticmethod
	def ident(ident) -> int:
		if not isfinite(ident) or ident != int(ident) or ident < 1:
			raise RuntimeEvaluationError("Turtles are numbered from 1, so %r is no turtle."%ident)
		return int(ident)

	def turtle(self, ident) -> Turtle:
		ident = self.ident(ident)
		if ident not in self._turtles:
			self._turtles[ident] = Turtle(ident)
		return self._turtles[ident]

	def __iter__(self) -> Iterator[Turtle]:
		return iter([self._turtles[k] for k in sorted(self._turtles)])

	def __len__(self): return len(self._turtles)

	def __contains__(self, ident): return ident in self._turtles

	@property
	def active(self) -> tuple[Turtle, ...]:
		return tuple(self._turtles[k] for k in self._active)

	def tell(self, idents:Iterable) -> tuple[int, ...]:
		self._active = tuple(self.turtle(i).ident for i in idents)
		return self._active

	@contextmanager
	def focus(self, idents:Iterable):
		""" Temporarily address only these turtles, then go back to the prior selection. """
		prior = self._active
		self.tell(idents)
		try: yield self.active
		finally: self._active = prior

	def color(self, index) -> Color:
		try: return self.palette[self._index(index)]
		except IndexError: raise RuntimeEvaluationError("There is no color %r in the palette."%index) from None

	def set_palette(self, index, r, g, b) -> int:
		index = self._index(index)
		try: color = Color(int(r), int(g), int(b))
		except (ValueError, OverflowError): raise RuntimeEvaluationError("Colors take red, green, and blue from 0 to 255.") from None
		if index < len(self.palette): self.palette[index] = color
		elif index == len(self.palette): self.palette.append(color)
		else: raise RuntimeEvaluationError("Palette entries must be filled in order; next is %d."%len(self.palette))
		return index

	def set_background(self, index) -> int:
		self.color(index)
		self.background = self._index(index)
		return self.background

	@staticmethod
	def _index(index) -> int:
		if not isfinite(index) or index < 0: raise RuntimeEvaluationError("There is no color %r in the palette."%index)
		return int(index)

	def clear_motion(self):
		for t in self._turtles.values(): t.moved = False

	def reset(self):
		self.__init__()
