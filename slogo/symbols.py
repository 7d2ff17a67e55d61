"""
The symbol table records the variables and user-defined procedures a program creates.
For example, it records that "x" is the Integer 3.

Each name maps to exactly one tagged Entry, so a name can never be
retrievable under one type while it is tagged with another.
Local variables push a restore-frame per name; removing the local
variable pops that frame and puts back exactly what was there before,
including the absence of anything at all.

Observers are zero-argument callables. Every mutating operation ends
by notifying them exactly once.
"""
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, NamedTuple, Optional

from .ontology import SlogoError

class VariableType(Enum):
	INTEGER = "Integer"
	DOUBLE = "Double"
	STRING = "String"
	FUNCTION = "Function"

	def coerce(self, value):
		return _COERCE[self](value)

_COERCE = {
	VariableType.INTEGER: int,
	VariableType.DOUBLE: float,
	VariableType.STRING: str,
	VariableType.FUNCTION: lambda node: node,
}

def type_of(value) -> VariableType:
	""" The natural type for a value a program computes. """
	if isinstance(value, bool): return VariableType.INTEGER
	if isinstance(value, int): return VariableType.INTEGER
	if isinstance(value, float): return VariableType.DOUBLE
	if isinstance(value, str): return VariableType.STRING
	return VariableType.FUNCTION

class Entry(NamedTuple):
	type: VariableType
	value: Any

class SymbolTableError(SlogoError):
	def __init__(self, message:str, name:str):
		super().__init__(message)
		self.message = message
		self.name = name

class UndefinedVariable(SymbolTableError):
	def __init__(self, name:str, message:str="The variable %s is not defined."):
		super().__init__(message%name, name)

class NoLocalScope(SymbolTableError):
	def __init__(self, name:str):
		super().__init__("There is no local variable %s to remove."%name, name)

class IllTypedValue(SymbolTableError):
	def __init__(self, name:str, value, type:VariableType):
		super().__init__("%r will not do as the %s %s."%(value, type.value, name), name)
		self.value, self.type = value, type

def _tagged(name:str, value, type:VariableType) -> Entry:
	try: return Entry(type, type.coerce(value))
	except (TypeError, ValueError, OverflowError): raise IllTypedValue(name, value, type) from None

Observer = Callable[[], None]

class SymbolTable:
	_entries: dict[str, Entry]
	_frames: dict[str, list[Optional[Entry]]]
	_observers: list[Observer]

	def __init__(self):
		self._entries = {}
		self._frames = {}
		self._observers = []

	def register(self, observer:Observer):
		self._observers.append(observer)

	def push_alarm(self):
		for observer in self._observers:
			observer()

	# Setters. Installing a fresh Entry replaces whatever type was there.

	def _install(self, name:str, entry:Entry):
		self._entries[name] = entry
		self.push_alarm()

	def set_double(self, name:str, value:float):
		self._install(name, _tagged(name, value, VariableType.DOUBLE))

	def set_integer(self, name:str, value:int):
		self._install(name, _tagged(name, value, VariableType.INTEGER))

	def set_string(self, name:str, value:str):
		self._install(name, Entry(VariableType.STRING, str(value)))

	def set_expression(self, name:str, node):
		self._install(name, Entry(VariableType.FUNCTION, node))

	def set_value(self, name:str, value, type:VariableType):
		self._install(name, _tagged(name, value, type))

	def set_local_variable(self, name:str, value, type:VariableType):
		"""
		Overwrite the (possibly absent) global meaning of a name
		until the matching call to remove_local_variable.
		"""
		entry = _tagged(name, value, type)
		self._frames.setdefault(name, []).append(self._entries.get(name))
		self._install(name, entry)

	def remove_local_variable(self, name:str):
		try: prior = self._frames[name].pop()
		except (KeyError, IndexError): raise NoLocalScope(name) from None
		if not self._frames[name]: del self._frames[name]
		if prior is None: self._entries.pop(name, None)
		else: self._entries[name] = prior
		self.push_alarm()

	# Queries

	def _entry(self, name:str) -> Entry:
		try: return self._entries[name]
		except KeyError: raise UndefinedVariable(name) from None

	def get_variable_type(self, name:str) -> VariableType:
		return self._entry(name).type

	def get_value_in_general_form(self, name:str):
		return self._entry(name).value

	def contains_variable(self, name:str) -> bool:
		return name in self._entries

	__contains__ = contains_variable

	def local_depth(self, name:str) -> int:
		""" How many restore-frames are pending for this name """
		return len(self._frames.get(name, ()))

	def list_of_variables(self) -> Mapping[str, Any]:
		return MappingProxyType({name: entry.value for name, entry in self._entries.items()})

	def procedures(self) -> dict[str, Any]:
		return {
			name: entry.value for name, entry in self._entries.items()
			if entry.type is VariableType.FUNCTION
		}

	# Removal

	def remove_variable(self, name:str):
		if name not in self._entries:
			raise UndefinedVariable(name, "The variable %s is not defined, therefore cannot be removed.")
		del self._entries[name]
		self.push_alarm()

	def reset_state(self):
		self._entries.clear()
		self._frames.clear()
		self.push_alarm()

	def __str__(self):
		return ''.join("%s = %s\n"%(name, entry.value) for name, entry in self._entries.items())
