"""
The arithmetic and logical operators.
None of these touch a turtle, so any of them may be evaluated purely.
Trigonometry speaks degrees, like the rest of the language.
"""
import math
import operator
import random
from typing import Callable, NamedTuple

class Primitive(NamedTuple):
	arity: int
	fn: Callable
	reducible: bool = False   # May a (group ...) fold it over many operands?

def _truth(fn):
	return lambda *args: int(bool(fn(*args)))

def _random(limit):
	if limit < 0: raise ValueError("random needs a non-negative limit")
	return random.random() * limit

def _degrees(fn):
	return lambda angle: fn(math.radians(angle))

OPERATORS = {
	"Sum": Primitive(2, operator.add, True),
	"Difference": Primitive(2, operator.sub, True),
	"Product": Primitive(2, operator.mul, True),
	"Quotient": Primitive(2, operator.truediv, True),
	"Remainder": Primitive(2, math.fmod),
	"Minus": Primitive(1, operator.neg),
	"Random": Primitive(1, _random),
	"Sine": Primitive(1, _degrees(math.sin)),
	"Cosine": Primitive(1, _degrees(math.cos)),
	"Tangent": Primitive(1, _degrees(math.tan)),
	"ArcTangent": Primitive(1, lambda x: math.degrees(math.atan(x))),
	"NaturalLog": Primitive(1, math.log),
	"Power": Primitive(2, math.pow),
	"Pi": Primitive(0, lambda: math.pi),
	"LessThan": Primitive(2, _truth(operator.lt)),
	"GreaterThan": Primitive(2, _truth(operator.gt)),
	"Equal": Primitive(2, _truth(operator.eq)),
	"NotEqual": Primitive(2, _truth(operator.ne)),
	"And": Primitive(2, _truth(lambda a, b: a and b), True),
	"Or": Primitive(2, _truth(lambda a, b: a or b), True),
	"Not": Primitive(1, _truth(operator.not_)),
}
