"""
Simple classifier based on regular expressions that matches program words to
kinds of language features.

A rule-set is an ordered list of (symbol, pattern) pairs. Order matters:
some patterns are more generic than others, so the specific ones go first
and the first full match wins. That is how one table can say both that
"fd" means Forward and that anything made of letters is some kind of Command.
"""
import re
from pathlib import Path
from typing import Callable, Iterable, NamedTuple

from .ontology import SlogoError

RULE_SET_FOLDER = Path(__file__).parent/"languages"

class UnrecognizedKeyword(SlogoError):
	def __init__(self, text:str, token=None):
		super().__init__('"%s" is not defined in the syntax file.'%text)
		self.text = text
		self.phrase = self.token = token

class Rule(NamedTuple):
	symbol: str
	pattern: re.Pattern

	@staticmethod
	def compile(symbol:str, regex:str) -> "Rule":
		return Rule(symbol, re.compile(regex, re.IGNORECASE))

	def matches(self, text:str) -> bool:
		return self.pattern.fullmatch(text) is not None

def read_rule_set(rule_set_id:str) -> list[tuple[str, str]]:
	"""
	Read "Symbol = regex" lines from the named rule-set, in file order.
	Lines starting with # or ! are comments. An absent rule-set reads as empty.
	"""
	if not rule_set_id: return []
	path = RULE_SET_FOLDER/(rule_set_id+".properties")
	if not path.is_file(): return []
	pairs = []
	with open(path, "r", encoding="utf-8") as fh:
		for line in fh:
			line = line.strip()
			if not line or line[0] in "#!": continue
			key, _, regex = line.partition("=")
			pairs.append((key.strip(), regex.strip()))
	return pairs

def available_rule_sets() -> list[str]:
	return sorted(p.stem for p in RULE_SET_FOLDER.glob("*.properties"))

class Classifier:
	""" The one and only matching engine. """
	_rules: list[Rule]

	def __init__(self, loader:Callable[[str], Iterable[tuple[str, str]]]=read_rule_set):
		self._loader = loader
		self._rules = []

	def __len__(self): return len(self._rules)

	def add_rules(self, pairs:Iterable[tuple[str, str]]):
		self._rules.extend(Rule.compile(symbol, regex) for symbol, regex in pairs)

	def add_patterns(self, rule_set_id:str):
		""" Adds the given rule-set to this table's recognized symbols """
		self.add_rules(self._loader(rule_set_id))

	def set_patterns(self, rule_set_id:str):
		""" Like add_patterns, but forget the old rules first. """
		self._rules.clear()
		self.add_patterns(rule_set_id)

	def get_symbol(self, text:str) -> str:
		for rule in self._rules:
			if rule.matches(text):
				return rule.symbol
		raise UnrecognizedKeyword(text)

	def contains_string(self, text:str) -> bool:
		try: self.get_symbol(text)
		except UnrecognizedKeyword: return False
		else: return True

class Lexicon:
	"""
	Two call sites over the same engine:
	One tells what sort of word something is (a number? a variable? a command?)
	and the other translates a natural-language command word into its canonical instruction.
	"""
	def __init__(self, language:str="English", syntax:str="Syntax"):
		self.syntax = Classifier()
		self.syntax.set_patterns(syntax)
		self.language = Classifier()
		self.language_name = None
		self.set_language(language)

	def set_language(self, language:str):
		self.language.set_patterns(language)
		self.language_name = language

	def kind(self, text:str) -> str: return self.syntax.get_symbol(text)
	def translate(self, text:str) -> str: return self.language.get_symbol(text)
	def knows(self, text:str) -> bool: return self.language.contains_string(text)
