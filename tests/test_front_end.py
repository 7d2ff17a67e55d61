import unittest

from slogo import syntax, commands
from slogo.classifier import Lexicon, UnrecognizedKeyword
from slogo.front_end import parse_text, scan, SlogoParseError
from slogo.location import lookup_token

LEXICON = Lexicon("English")

def _parse(text, procedures=()) -> syntax.Program:
	return parse_text(text, LEXICON, procedures)

class ScanTests(unittest.TestCase):

	def test_words_and_offsets(self):
		tokens = scan("fd 50\n  rt 90", LEXICON)
		self.assertEqual(["fd", "50", "rt", "90"], [t.text for t in tokens])
		self.assertEqual(["Command", "Constant", "Command", "Constant"], [t.kind for t in tokens])
		self.assertEqual([0, 3, 8, 11], [t.offset for t in tokens])

	def test_comments_run_to_end_of_line(self):
		tokens = scan("# a square\nfd 50 # forward!\nrt 90", LEXICON)
		self.assertEqual(["fd", "50", "rt", "90"], [t.text for t in tokens])

	def test_earlier_texts_stay_addressable(self):
		first = scan("fd 10", LEXICON)
		second = scan("rt 20\nrt 30", LEXICON)
		span = lookup_token(first[0].spot)
		self.assertEqual(slice(0, 2), span.slice)
		self.assertIsNot(span.source, lookup_token(second[0].spot).source)
		self.assertEqual(slice(9, 11), lookup_token(second[-1].spot).slice)

	def test_unclassifiable_word(self):
		with self.assertRaises(UnrecognizedKeyword) as cm:
			scan("fd @@", LEXICON)
		self.assertEqual("@@", cm.exception.text)
		self.assertEqual(3, cm.exception.token.offset)

class BuilderTests(unittest.TestCase):

	def test_simple_command(self):
		program = _parse("Forward 50")
		self.assertEqual(1, len(program))
		call = program.body[0]
		self.assertIsInstance(call, syntax.CommandCall)
		self.assertIs(commands.Forward, call.command)
		self.assertEqual(50, call.args[0].value)

	def test_nested_operands(self):
		call = _parse("fd sum 10 product 2 3").body[0]
		self.assertIsInstance(call.args[0], syntax.Operation)
		self.assertIsInstance(call.args[0].args[1], syntax.Operation)

	def test_literal_types(self):
		a, b = _parse("fd 5 fd 2.5").body
		self.assertIsInstance(a.args[0].value, int)
		self.assertIsInstance(b.args[0].value, float)

	def test_special_forms(self):
		program = _parse("""
			make :x 5
			repeat 4 [ fd :x rt 90 ]
			dotimes [ :i 3 ] [ fd :i ]
			for [ :i 1 10 2 ] [ fd :i ]
			if less? :x 3 [ pu ]
			ifelse 1 [ pd ] [ pu ]
			tell [ 1 2 ]
			ask [ 2 ] [ fd 1 ]
			askwith [ equal? id 2 ] [ fd 1 ]
		""")
		self.assertEqual(
			[syntax.MakeVariable, syntax.Repeat, syntax.DoTimes, syntax.For, syntax.If,
			 syntax.IfElse, syntax.Tell, syntax.Ask, syntax.AskWith],
			[type(node) for node in program.body],
		)
		self.assertEqual("x", program.body[0].target.name)
		self.assertEqual(2, len(program.body[1].body))

	def test_procedure_arity_is_learned_from_its_definition(self):
		program = _parse("to square [ :side ] [ repeat 4 [ fd :side rt 90 ] ] square 10 fd 5")
		define, call, move = program.body
		self.assertIsInstance(define, syntax.DefineProcedure)
		self.assertEqual(["side"], [p.name for p in define.params])
		self.assertIsInstance(call, syntax.ProcedureCall)
		self.assertEqual(1, len(call.args))
		self.assertIsInstance(move, syntax.CommandCall)

	def test_recursive_procedure(self):
		program = _parse("to down [ :n ] [ if :n [ down difference :n 1 ] ]")
		inner = program.body[0].body.body[0].then_part.body[0]
		self.assertIsInstance(inner, syntax.ProcedureCall)

	def test_known_procedures_from_earlier(self):
		call = _parse("Square 5", {"square": 1}).body[0]
		self.assertIsInstance(call, syntax.ProcedureCall)
		self.assertEqual("square", call.name)

	def test_groups_fold_reducible_operators(self):
		node = _parse("( sum 1 2 3 4 )").body[0]
		self.assertIsInstance(node, syntax.Operation)
		self.assertEqual(4, len(node.args))

	def test_groups_repeat_other_instructions(self):
		node = _parse("( fd 10 20 30 )").body[0]
		self.assertIsInstance(node, syntax.Block)
		self.assertEqual(3, len(node.body))
		single = _parse("( fd 10 )").body[0]
		self.assertIsInstance(single, syntax.CommandCall)

	def test_other_language(self):
		lexicon = Lexicon("French")
		call = parse_text("av 50", lexicon).body[0]
		self.assertIs(commands.Forward, call.command)

class MalformedProgramTests(unittest.TestCase):

	def _malformed(self, text) -> SlogoParseError:
		with self.assertRaises(SlogoParseError) as cm:
			_parse(text)
		return cm.exception

	def test_too_few_inputs_names_the_instruction(self):
		ex = self._malformed("repeat 4 [ fd ]")
		self.assertEqual("fd", ex.token.text)
		self.assertEqual(11, ex.token.offset)
		self.assertIn("fd", str(ex))

	def test_running_out_of_words(self):
		ex = self._malformed("fd 10 rt")
		self.assertEqual("rt", ex.token.text)

	def test_stray_closer(self):
		ex = self._malformed("fd 10 ]")
		self.assertEqual("]", ex.token.text)

	def test_list_where_a_value_belongs(self):
		ex = self._malformed("fd [ 10 ]")
		self.assertEqual("[", ex.token.text)

	def test_missing_list(self):
		ex = self._malformed("repeat 4 fd 10")
		self.assertEqual("fd", ex.token.text)

	def test_cannot_redefine_builtins(self):
		ex = self._malformed("to fd [ ] [ ]")
		self.assertEqual("fd", ex.token.text)

	def test_uneven_group(self):
		ex = self._malformed("( setxy 1 2 3 )")
		self.assertEqual("setxy", ex.token.text)
		self._malformed("( sum 1 )")
		self._malformed("( make :x 1 )")

	def test_unknown_instruction(self):
		with self.assertRaises(UnrecognizedKeyword) as cm:
			_parse("fd 10 jump 5")
		self.assertEqual("jump", cm.exception.token.text)

	def test_empty_program(self):
		self.assertEqual(0, len(_parse("  # nothing here\n")))

if __name__ == '__main__':
	unittest.main()
