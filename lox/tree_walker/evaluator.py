"""
The tree-walking evaluator proper.

Expressions evaluate to values. Statements execute to a completion:
None when control falls off the end as usual, or a Returned(value)
which every enclosing statement passes straight back up until a call
boundary absorbs it. Runtime faults take the separate exception channel.

The current environment travels as an argument. Leaving a block
therefore needs no clean-up, however the block ends.
"""
import math
import operator
import sys
from typing import Optional, Sequence, TextIO
from boozetools.support.foundation import Visitor
from .. import syntax
from ..ontology import Nom, THIS, SUPER, INIT
from ..environment import Environment
from ..diagnostics import Report, LoxRuntimeError, StackOverflow, TooManyIssues
from ..resolution import SideTable
from ..primitive import NATIVES
from ..printer import show
from .types import LOX_VALUE, COMPLETION, Returned
from .values import (
	LoxCallable, LoxClass, LoxInstance, Closure,
	is_truthy, is_equal, stringify, type_name, undefined_property,
)

DEFAULT_MAX_DEPTH = 200

# Python frames spent per nested Lox call, with room for deeply nested statements.
FRAMES_PER_CALL = 30
HEADROOM = 500
HOST_RECURSION_CEILING = 10_000

def _complain(report:Report, ex:LoxRuntimeError):
	try: report.runtime_error(ex)
	except TooManyIssues: pass

def _divide(a:float, b:float) -> float:
	# IEEE-754 rules, which Python declines to follow for division by zero.
	try: return a / b
	except ZeroDivisionError:
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)

NUMERIC = {
	"-" : operator.sub,
	"*" : operator.mul,
	"/" : _divide,
	">" : operator.gt,
	">=": operator.ge,
	"<" : operator.lt,
	"<=": operator.le,
}

def _is_number(x) -> bool: return type(x) is float

class Interpreter(Visitor):
	globals: Environment
	distances: SideTable
	out: Optional[TextIO]
	max_depth: int

	def __init__(self, *, out:Optional[TextIO]=None, max_depth:int=DEFAULT_MAX_DEPTH):
		self.globals = Environment()
		for name, native in NATIVES.items():
			self.globals.define(name, native)
		self.distances = {}
		self.out = out
		self.max_depth = max_depth
		self._depth = 0

	def interpret(self, statements:Sequence[syntax.Statement], distances:SideTable, report:Report) -> bool:
		"""
		Run top-level statements in order until done or until a runtime error.
		Globals and distances accumulate, so a REPL can keep feeding the same interpreter.
		"""
		self.distances.update(distances)
		saved_limit = sys.getrecursionlimit()
		sys.setrecursionlimit(max(saved_limit, self._host_limit()))
		try:
			for stmt in statements:
				report.info(show(stmt), level=2)
				try: completion = self.execute(stmt, self.globals)
				except LoxRuntimeError as ex:
					_complain(report, ex)
					break
				except RecursionError:
					self._depth = 0
					_complain(report, StackOverflow(stmt))
					break
				if completion is not None:
					raise AssertionError("A return escaped to the top level at line %d" % stmt.line())
		finally:
			sys.setrecursionlimit(saved_limit)
		return report.ok()

	def _host_limit(self) -> int:
		""" Enough Python stack for max_depth nested Lox calls, within reason. """
		return min(self.max_depth * FRAMES_PER_CALL + HEADROOM, HOST_RECURSION_CEILING)

	def execute(self, stmt:syntax.Statement, env:Environment) -> COMPLETION:
		return self.visit(stmt, env)

	def execute_body(self, statements:Sequence[syntax.Statement], env:Environment) -> COMPLETION:
		for stmt in statements:
			completion = self.visit(stmt, env)
			if completion is not None:
				return completion

	def evaluate(self, expr:syntax.ValueExpression, env:Environment) -> LOX_VALUE:
		return self.visit(expr, env)

	def _write(self, text:str):
		print(text, file=self.out or sys.stdout)

	def _look_up(self, nom:Nom, expr:syntax.ValueExpression, env:Environment) -> LOX_VALUE:
		distance = self.distances.get(expr.ident)
		if distance is None:
			return self.globals.get(nom)
		return env.get_at(distance, nom.text)

	###########################################################################
	# Statements

	def visit_Expression(self, stmt:syntax.Expression, env:Environment):
		self.evaluate(stmt.expr, env)

	def visit_Print(self, stmt:syntax.Print, env:Environment):
		self._write(stringify(self.evaluate(stmt.expr, env)))

	def visit_Var(self, stmt:syntax.Var, env:Environment):
		value = None
		if stmt.initializer is not None:
			value = self.evaluate(stmt.initializer, env)
		env.define(stmt.nom.text, value)

	def visit_Block(self, stmt:syntax.Block, env:Environment) -> COMPLETION:
		return self.execute_body(stmt.statements, Environment(env))

	def visit_If(self, stmt:syntax.If, env:Environment) -> COMPLETION:
		if is_truthy(self.evaluate(stmt.condition, env)):
			return self.execute(stmt.then_branch, env)
		elif stmt.else_branch is not None:
			return self.execute(stmt.else_branch, env)

	def visit_While(self, stmt:syntax.While, env:Environment) -> COMPLETION:
		while is_truthy(self.evaluate(stmt.condition, env)):
			completion = self.execute(stmt.body, env)
			if completion is not None:
				return completion

	def visit_Function(self, stmt:syntax.Function, env:Environment):
		env.define(stmt.nom.text, Closure(stmt, env))

	def visit_Return(self, stmt:syntax.Return, env:Environment) -> Returned:
		value = None
		if stmt.value is not None:
			value = self.evaluate(stmt.value, env)
		return Returned(value)

	def visit_Class(self, stmt:syntax.Class, env:Environment):
		superclass = None
		if stmt.superclass is not None:
			superclass = self.evaluate(stmt.superclass, env)
			if not isinstance(superclass, LoxClass):
				raise LoxRuntimeError(stmt.superclass.nom, "Superclass must be a class.")
		env.define(stmt.nom.text, None)
		method_env = env
		if superclass is not None:
			method_env = Environment(env)
			method_env.define(SUPER, superclass)
		methods = {
			m.nom.text: Closure(m, method_env, m.nom.text == INIT)
			for m in stmt.methods
		}
		env.define(stmt.nom.text, LoxClass(stmt.nom.text, superclass, methods))

	###########################################################################
	# Expressions

	def visit_Literal(self, expr:syntax.Literal, env:Environment):
		return expr.value

	def visit_Grouping(self, expr:syntax.Grouping, env:Environment):
		return self.evaluate(expr.expr, env)

	def visit_Variable(self, expr:syntax.Variable, env:Environment):
		return self._look_up(expr.nom, expr, env)

	def visit_Assign(self, expr:syntax.Assign, env:Environment):
		value = self.evaluate(expr.value, env)
		distance = self.distances.get(expr.ident)
		if distance is None:
			self.globals.assign(expr.nom, value)
		else:
			env.assign_at(distance, expr.nom.text, value)
		return value

	def visit_Unary(self, expr:syntax.Unary, env:Environment):
		arg = self.evaluate(expr.arg, env)
		glyph = expr.op.text
		if glyph == "!":
			return not is_truthy(arg)
		assert glyph == "-", glyph
		if not _is_number(arg):
			raise LoxRuntimeError(expr.op, "Operand of '-' must be a number, not %s." % type_name(arg))
		return -arg

	def visit_Binary(self, expr:syntax.Binary, env:Environment):
		a = self.evaluate(expr.lhs, env)
		b = self.evaluate(expr.rhs, env)
		glyph = expr.op.text
		if glyph == "==": return is_equal(a, b)
		if glyph == "!=": return not is_equal(a, b)
		if glyph == "+":
			if _is_number(a) and _is_number(b): return a + b
			if isinstance(a, str) and isinstance(b, str): return a + b
			pattern = "Operands of '+' must be two numbers or two strings, not %s and %s."
			raise LoxRuntimeError(expr.op, pattern % (type_name(a), type_name(b)))
		if not (_is_number(a) and _is_number(b)):
			pattern = "Operands of '%s' must be numbers, not %s and %s."
			raise LoxRuntimeError(expr.op, pattern % (glyph, type_name(a), type_name(b)))
		return NUMERIC[glyph](a, b)

	def visit_Logical(self, expr:syntax.Logical, env:Environment):
		lhs = self.evaluate(expr.lhs, env)
		if expr.op.text == "or":
			if is_truthy(lhs): return lhs
		elif not is_truthy(lhs):
			return lhs
		return self.evaluate(expr.rhs, env)

	def visit_Call(self, expr:syntax.Call, env:Environment):
		callee = self.evaluate(expr.callee, env)
		args = [self.evaluate(a, env) for a in expr.args]
		if not isinstance(callee, LoxCallable):
			raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")
		if len(args) != callee.arity():
			pattern = "Expected %d arguments but got %d."
			raise LoxRuntimeError(expr.paren, pattern % (callee.arity(), len(args)))
		if self._depth >= self.max_depth:
			raise StackOverflow(expr.paren)
		self._depth += 1
		try: return callee.call(self, args)
		finally: self._depth -= 1

	def visit_Get(self, expr:syntax.Get, env:Environment):
		lhs = self.evaluate(expr.lhs, env)
		if not isinstance(lhs, LoxInstance):
			raise LoxRuntimeError(expr.field_name, "Only instances have properties.")
		return lhs.get(expr.field_name)

	def visit_Set(self, expr:syntax.Set, env:Environment):
		lhs = self.evaluate(expr.lhs, env)
		if not isinstance(lhs, LoxInstance):
			raise LoxRuntimeError(expr.field_name, "Only instances have fields.")
		value = self.evaluate(expr.value, env)
		lhs.set(expr.field_name, value)
		return value

	def visit_This(self, expr:syntax.This, env:Environment):
		return self._look_up(expr.keyword, expr, env)

	def visit_Super(self, expr:syntax.Super, env:Environment):
		# The 'this' scope sits immediately inside the 'super' scope.
		distance = self.distances[expr.ident]
		superclass = env.get_at(distance, SUPER)
		instance = env.get_at(distance - 1, THIS)
		method = superclass.find_method(expr.method.text)
		if method is None:
			raise undefined_property(expr.method)
		return method.bind(instance)
