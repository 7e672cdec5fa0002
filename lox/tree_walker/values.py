"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves, but special things like closures need more help.
"""
import math
from abc import abstractmethod
from typing import Callable, Optional, TYPE_CHECKING
from .. import syntax
from ..ontology import Nom, THIS, INIT
from ..environment import Environment
from ..diagnostics import LoxRuntimeError
from .types import ARGS, LOX_VALUE, LoxValue

if TYPE_CHECKING:
	from .evaluator import Interpreter

class LoxCallable(LoxValue):
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def call(self, interpreter:"Interpreter", args:ARGS) -> LOX_VALUE: pass

class NativeFunction(LoxCallable):
	""" Supplied by the host, with a fixed arity. """
	def __init__(self, name:str, arity:int, fn:Callable[..., LOX_VALUE]):
		self.name = name
		self._arity = arity
		self._fn = fn

	def arity(self): return self._arity
	def call(self, interpreter, args): return self._fn(*args)
	def display(self): return "<native fn>"

class Closure(LoxCallable):
	""" The run-time manifestation of a function: a callable value tied to its natal environment. """
	# The same Closure type serves for both functions and methods.

	def __init__(self, declaration:syntax.Function, env:Environment, is_initializer:bool=False):
		self.declaration = declaration
		self._env = env
		self.is_initializer = is_initializer

	def __repr__(self): return "<Closure %s>" % self.declaration.nom.text

	def bind(self, instance:"LoxInstance") -> "Closure":
		""" Same declaration, with 'this' in one more scope wrapped around the captured environment. """
		env = Environment(self._env)
		env.define(THIS, instance)
		return Closure(self.declaration, env, self.is_initializer)

	def arity(self): return len(self.declaration.params)

	def call(self, interpreter, args):
		env = Environment(self._env)
		for param, arg in zip(self.declaration.params, args):
			env.define(param.text, arg)
		completion = interpreter.execute_body(self.declaration.body, env)
		if self.is_initializer:
			return self._env.get_at(0, THIS)
		if completion is not None:
			return completion.value

	def display(self): return "<fn %s>" % self.declaration.nom.text

class LoxClass(LoxCallable):
	def __init__(self, name:str, superclass:Optional["LoxClass"], methods:dict[str, Closure]):
		self.name = name
		self.superclass = superclass
		self._methods = methods

	def __repr__(self): return "<LoxClass %s>" % self.name

	def find_method(self, name:str) -> Optional[Closure]:
		""" Walk the method-resolution chain, nearest first. """
		klass = self
		while klass is not None:
			try: return klass._methods[name]
			except KeyError: klass = klass.superclass

	def arity(self):
		initializer = self.find_method(INIT)
		return 0 if initializer is None else initializer.arity()

	def call(self, interpreter, args):
		instance = LoxInstance(self)
		initializer = self.find_method(INIT)
		if initializer is not None:
			initializer.bind(instance).call(interpreter, args)
		return instance

	def display(self): return self.name

class LoxInstance(LoxValue):
	def __init__(self, klass:LoxClass):
		self.klass = klass
		self._fields = {}

	def __repr__(self): return "<LoxInstance of %s>" % self.klass.name

	def get(self, field_name:Nom) -> LOX_VALUE:
		# Fields shadow methods.
		try: return self._fields[field_name.text]
		except KeyError: pass
		method = self.klass.find_method(field_name.text)
		if method is None:
			raise undefined_property(field_name)
		return method.bind(self)

	def set(self, field_name:Nom, value:LOX_VALUE):
		self._fields[field_name.text] = value

	def display(self): return "<%s instance>" % self.klass.name

def undefined_property(field_name:Nom) -> LoxRuntimeError:
	return LoxRuntimeError(field_name, "Undefined property '%s'." % field_name.text)

###############################################################################

def is_truthy(value:LOX_VALUE) -> bool:
	return not (value is None or value is False)

def is_equal(a:LOX_VALUE, b:LOX_VALUE) -> bool:
	# Python would happily call 1.0 == True; Lox does not.
	if type(a) is not type(b):
		return False
	if isinstance(a, LoxValue):
		return a is b
	return a == b

def type_name(value:LOX_VALUE) -> str:
	""" For error messages. """
	if value is None: return "nil"
	if isinstance(value, bool): return "boolean"
	if isinstance(value, float): return "number"
	if isinstance(value, str): return "string"
	if isinstance(value, LoxClass): return "class"
	if isinstance(value, LoxCallable): return "function"
	if isinstance(value, LoxInstance): return "instance"
	return type(value).__name__

def stringify(value:LOX_VALUE) -> str:
	if value is None: return "nil"
	if value is True: return "true"
	if value is False: return "false"
	if isinstance(value, float): return _number_text(value)
	if isinstance(value, LoxValue): return value.display()
	return str(value)

def _number_text(x:float) -> str:
	if math.isnan(x): return "NaN"
	if math.isinf(x): return "Infinity" if x > 0 else "-Infinity"
	if x.is_integer() and abs(x) < 1e21:
		return str(int(x))
	# Shortest digits from repr, laid out the way JavaScript prints numbers.
	mantissa, _, exponent = repr(x).partition("e")
	if not exponent:
		return mantissa
	power = int(exponent)
	if power < -6 or power >= 21:
		return "%se%s%d" % (mantissa, "-" if power < 0 else "+", abs(power))
	sign = "-" if mantissa.startswith("-") else ""
	digits = mantissa.lstrip("-").replace(".", "")
	return sign + "0." + "0" * (-power - 1) + digits
