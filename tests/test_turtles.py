from math import pi
import unittest

from slogo import commands
from slogo.ontology import RuntimeEvaluationError, EITHER_MODE, EFFECTFUL_ONLY
from slogo.turtles import Turtle, TurtleManager

class CommandTests(unittest.TestCase):
	""" Each command against a single turtle. """

	def setUp(self) -> None:
		self.turtle = Turtle(1)

	def test_forward_along_heading_zero(self):
		self.assertIsNone(commands.Forward(10).update(self.turtle))
		self.assertAlmostEqual(10, self.turtle.x)
		self.assertAlmostEqual(0, self.turtle.y)
		self.assertTrue(self.turtle.moved)

	def test_forward_along_heading_quarter_turn(self):
		self.turtle.heading = pi/2
		commands.Forward(10).update(self.turtle)
		self.assertAlmostEqual(0, self.turtle.x)
		self.assertAlmostEqual(10, self.turtle.y)

	def test_zero_length_move_still_counts_as_motion(self):
		commands.Forward(0).update(self.turtle)
		self.assertTrue(self.turtle.moved)
		other = Turtle(2)
		commands.Left(90).update(other)
		self.assertFalse(other.moved)

	def test_backward(self):
		commands.Backward(10).update(self.turtle)
		self.assertAlmostEqual(-10, self.turtle.x)

	def test_turns_are_degrees_in_radians_out(self):
		commands.Left(90).update(self.turtle)
		self.assertAlmostEqual(pi/2, self.turtle.heading)
		commands.Right(180).update(self.turtle)
		self.assertAlmostEqual(-pi/2, self.turtle.heading)
		self.assertAlmostEqual(-90, commands.Heading().update(self.turtle))

	def test_queries_do_not_mutate(self):
		commands.SetPosition(3, 4).update(self.turtle)
		before = self.turtle.pose()
		self.assertEqual(3, commands.XCoordinate().update(self.turtle))
		self.assertEqual(4, commands.YCoordinate().update(self.turtle))
		self.assertEqual(1, commands.IsPenDown().update(self.turtle))
		self.assertEqual(1, commands.IsShowing().update(self.turtle))
		self.assertEqual(1, commands.ID().update(self.turtle))
		self.assertEqual(before, self.turtle.pose())

	def test_query_and_mutation_modes(self):
		self.assertEqual(EITHER_MODE, commands.XCoordinate.modes)
		self.assertEqual(EFFECTFUL_ONLY, commands.Forward.modes)

	def test_outcomes(self):
		before = self.turtle.pose()
		move = commands.SetPosition(3, 4)
		move.update(self.turtle)
		self.assertAlmostEqual(5, move.outcome(before, self.turtle.pose()))
		self.assertEqual(50, commands.Forward(50).outcome(before, before))
		self.assertEqual(1, commands.PenDown().outcome(before, before))
		self.assertEqual(0, commands.PenUp().outcome(before, before))

	def test_towards(self):
		turn = commands.SetTowards(0, 10)
		before = self.turtle.pose()
		turn.update(self.turtle)
		self.assertAlmostEqual(pi/2, self.turtle.heading)
		self.assertAlmostEqual(90, turn.outcome(before, self.turtle.pose()))

	def test_pen_leaves_a_trail_only_when_down(self):
		commands.Forward(10).update(self.turtle)
		commands.PenUp().update(self.turtle)
		commands.Forward(10).update(self.turtle)
		self.assertEqual(1, len(self.turtle.trail))
		self.assertEqual(((0, 0), (10, 0)), self.turtle.trail[0][:2])

	def test_clear_screen_goes_home_and_erases(self):
		commands.Left(30).update(self.turtle)
		commands.Forward(10).update(self.turtle)
		commands.ClearScreen().update(self.turtle)
		self.assertEqual((0, 0, 0), tuple(self.turtle.pose()))
		self.assertEqual([], self.turtle.trail)

	def test_bad_indices(self):
		with self.assertRaises(RuntimeEvaluationError):
			commands.SetPenColor(-1).update(self.turtle)
		with self.assertRaises(RuntimeEvaluationError):
			commands.SetShape(1.5).update(self.turtle)
		with self.assertRaises(RuntimeEvaluationError):
			commands.SetPenSize(-3).update(self.turtle)

	def test_stamp(self):
		commands.Stamp().update(self.turtle)
		self.assertEqual([self.turtle.pose()], self.turtle.stamps)

class TurtleManagerTests(unittest.TestCase):

	def setUp(self) -> None:
		self.manager = TurtleManager()

	def test_starts_with_turtle_one_listening(self):
		self.assertEqual(1, len(self.manager))
		self.assertEqual([1], [t.ident for t in self.manager.active])

	def test_tell_creates_turtles(self):
		self.manager.tell([2, 3])
		self.assertEqual(3, len(self.manager))
		self.assertEqual([2, 3], [t.ident for t in self.manager.active])
		self.assertEqual(3, commands.Turtles().update(self.manager))

	def test_focus_restores_selection_even_after_failure(self):
		with self.assertRaises(RuntimeEvaluationError):
			with self.manager.focus([4]):
				self.assertEqual([4], [t.ident for t in self.manager.active])
				raise RuntimeEvaluationError("boom")
		self.assertEqual([1], [t.ident for t in self.manager.active])

	def test_bad_turtle_numbers(self):
		for ident in [0, -1, 1.5]:
			with self.subTest(ident):
				with self.assertRaises(RuntimeEvaluationError):
					self.manager.turtle(ident)

	def test_palette(self):
		self.assertEqual((255, 0, 0), tuple(self.manager.color(2))[:3])
		size = len(self.manager.palette)
		commands.SetPalette(size, 10, 20, 30).update(self.manager)
		self.assertEqual((10, 20, 30), tuple(self.manager.color(size))[:3])
		with self.assertRaises(RuntimeEvaluationError):
			self.manager.set_palette(size + 5, 0, 0, 0)
		with self.assertRaises(RuntimeEvaluationError):
			self.manager.set_palette(0, 300, 0, 0)
		with self.assertRaises(RuntimeEvaluationError):
			self.manager.color(99)

	def test_background(self):
		commands.SetBackground(3).update(self.manager)
		self.assertEqual(3, self.manager.background)
		with self.assertRaises(RuntimeEvaluationError):
			self.manager.set_background(99)

	def test_clear_stamps(self):
		for t in self.manager.tell([1, 2]): commands.Stamp().update(self.manager.turtle(t))
		commands.ClearStamps().update(self.manager)
		self.assertTrue(all(not t.stamps for t in self.manager))

	def test_clear_motion(self):
		commands.Forward(1).update(self.manager.turtle(1))
		self.manager.clear_motion()
		self.assertFalse(self.manager.turtle(1).moved)

if __name__ == '__main__':
	unittest.main()
