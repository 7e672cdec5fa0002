"""
All the lexical-binding stuff goes here.
By the time this pass is finished, every local variable-reference
knows how many scopes out its definition lives. References to globals
stay out of the side-table on purpose: they get looked up by name.
"""
from enum import Enum
from typing import NamedTuple, Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report, TooManyIssues
from .ontology import Nom, Phrase, THIS, SUPER, INIT
from .space import ScopeStack, AlreadyExists

class FunctionKind(Enum):
	NONE = "none"
	FUNCTION = "function"
	METHOD = "method"
	INITIALIZER = "initializer"

class ClassKind(Enum):
	NONE = "none"
	CLASS = "class"
	SUBCLASS = "subclass"

SideTable = dict[int, int]

class Resolution(NamedTuple):
	distances: SideTable
	report: Report

def resolve(statements:Sequence[syntax.Statement], report:Optional[Report]=None) -> Resolution:
	"""
	Run the resolver over a program.
	Diagnostics pile up in the report; if it's sick afterwards, do not interpret.
	"""
	if report is None: report = Report()
	resolver = Resolver(report)
	try: resolver.tour(statements)
	except TooManyIssues: pass
	return Resolution(resolver.distances, report)

class TopDown(Visitor):
	"""
	Convenience base-class to handle the dreary bits of a
	perfectly ordinary top-down walk through a syntax tree.
	"""

	def tour(self, items):
		for i in items:
			self.visit(i)

	def visit_Literal(self, expr:syntax.Literal): pass

	def visit_Grouping(self, expr:syntax.Grouping):
		self.visit(expr.expr)

	def visit_Unary(self, expr:syntax.Unary):
		self.visit(expr.arg)

	def visit_Binary(self, expr:syntax.Binary):
		self.visit(expr.lhs)
		self.visit(expr.rhs)

	def visit_Logical(self, expr:syntax.Logical):
		self.visit(expr.lhs)
		self.visit(expr.rhs)

	def visit_Call(self, expr:syntax.Call):
		self.visit(expr.callee)
		self.tour(expr.args)

	def visit_Get(self, expr:syntax.Get):
		# Properties are looked up dynamically, so only the object matters here.
		self.visit(expr.lhs)

	def visit_Set(self, expr:syntax.Set):
		self.visit(expr.value)
		self.visit(expr.lhs)

	def visit_Expression(self, stmt:syntax.Expression):
		self.visit(stmt.expr)

	def visit_Print(self, stmt:syntax.Print):
		self.visit(stmt.expr)

	def visit_If(self, stmt:syntax.If):
		self.visit(stmt.condition)
		self.visit(stmt.then_branch)
		if stmt.else_branch is not None:
			self.visit(stmt.else_branch)

	def visit_While(self, stmt:syntax.While):
		self.visit(stmt.condition)
		self.visit(stmt.body)

class Resolver(TopDown):
	"""
	This single top-down tree-walk does a few things.

	* Work out the scope-distance of every local variable reference.
	* Complain about names declared twice in the same local scope.
	* Complain about reading a local variable in its own initializer.
	* Complain about 'return', 'this', and 'super' where they make no sense.

	Diagnostics do not stop the walk; the report collects them all.
	"""
	distances: SideTable
	report: Report

	_scopes: ScopeStack
	_function: FunctionKind
	_class: ClassKind

	def __init__(self, report:Report):
		self.report = report
		self.distances = {}
		self._scopes = ScopeStack()
		self._function = FunctionKind.NONE
		self._class = ClassKind.NONE

	def _declare(self, nom:Nom):
		if not self._scopes: return
		try: self._scopes.top().declare(nom)
		except AlreadyExists: self.report.redefined(nom)

	def _define(self, nom:Nom):
		if self._scopes: self._scopes.top().define(nom)

	def _resolve_local(self, expr:Phrase, key:str):
		distance = self._scopes.distance(key)
		if distance is not None:
			self.distances[expr.ident] = distance

	def visit_Block(self, stmt:syntax.Block):
		self._scopes.push()
		self.tour(stmt.statements)
		self._scopes.pop()

	def visit_Var(self, stmt:syntax.Var):
		self._declare(stmt.nom)
		if stmt.initializer is not None:
			self.visit(stmt.initializer)
		self._define(stmt.nom)

	def visit_Variable(self, expr:syntax.Variable):
		key = expr.nom.key()
		if self._scopes:
			scope = self._scopes.top()
			if key in scope and not scope.is_defined(key):
				self.report.read_in_own_initializer(expr.nom)
		self._resolve_local(expr, key)

	def visit_Assign(self, expr:syntax.Assign):
		self.visit(expr.value)
		self._resolve_local(expr, expr.nom.key())

	def visit_Function(self, stmt:syntax.Function):
		# Declare and define before the body, so the function can call itself.
		self._declare(stmt.nom)
		self._define(stmt.nom)
		self._resolve_function(stmt, FunctionKind.FUNCTION)

	def _resolve_function(self, fn:syntax.Function, kind:FunctionKind):
		enclosing = self._function
		self._function = kind
		self._scopes.push()
		for param in fn.params:
			self._declare(param)
			self._define(param)
		self.tour(fn.body)
		self._scopes.pop()
		self._function = enclosing

	def visit_Return(self, stmt:syntax.Return):
		if self._function is FunctionKind.NONE:
			self.report.return_outside_function(stmt.keyword)
		if stmt.value is not None:
			if self._function is FunctionKind.INITIALIZER:
				self.report.return_value_from_initializer(stmt.keyword)
			self.visit(stmt.value)

	def visit_Class(self, stmt:syntax.Class):
		enclosing = self._class
		self._class = ClassKind.CLASS
		self._declare(stmt.nom)
		self._define(stmt.nom)

		if stmt.superclass is not None:
			if stmt.superclass.nom.key() == stmt.nom.key():
				self.report.inherits_from_itself(stmt.superclass.nom)
			self._class = ClassKind.SUBCLASS
			self.visit(stmt.superclass)
			self._scopes.push().mount(SUPER, True)

		self._scopes.push().mount(THIS, True)
		for method in stmt.methods:
			kind = FunctionKind.INITIALIZER if method.nom.key() == INIT else FunctionKind.METHOD
			self._resolve_function(method, kind)
		self._scopes.pop()

		if stmt.superclass is not None:
			self._scopes.pop()
		self._class = enclosing

	def visit_This(self, expr:syntax.This):
		if self._class is ClassKind.NONE:
			self.report.this_outside_class(expr.keyword)
			return
		self._resolve_local(expr, THIS)

	def visit_Super(self, expr:syntax.Super):
		if self._class is ClassKind.NONE:
			self.report.super_outside_class(expr.keyword)
			return
		if self._class is not ClassKind.SUBCLASS:
			self.report.super_without_superclass(expr.keyword)
			return
		self._resolve_local(expr, SUPER)
