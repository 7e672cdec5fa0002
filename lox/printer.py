"""
Render syntax trees as fully-parenthesized prefix notation.
Handy for debugging, for verbose traces, and for tests that
want to say what a tree looks like without building one by hand.

    (* (- 123) (group 45.67))
"""
from boozetools.support.foundation import Visitor
from . import syntax
from .ontology import Phrase
from .tree_walker.values import stringify

def show(node:Phrase) -> str:
	return _PRINTER.visit(node)

class AstPrinter(Visitor):

	def _paren(self, name:str, *parts) -> str:
		words = [name]
		for p in parts:
			words.append(p if isinstance(p, str) else self.visit(p))
		return "(%s)" % " ".join(words)

	def visit_Literal(self, expr:syntax.Literal):
		if isinstance(expr.value, str):
			return '"%s"' % expr.value
		return stringify(expr.value)

	def visit_Variable(self, expr:syntax.Variable): return expr.nom.text
	def visit_This(self, expr:syntax.This): return "this"
	def visit_Super(self, expr:syntax.Super): return "super.%s" % expr.method.text
	def visit_Grouping(self, expr:syntax.Grouping): return self._paren("group", expr.expr)
	def visit_Unary(self, expr:syntax.Unary): return self._paren(expr.op.text, expr.arg)
	def visit_Binary(self, expr:syntax.Binary): return self._paren(expr.op.text, expr.lhs, expr.rhs)
	def visit_Logical(self, expr:syntax.Logical): return self._paren(expr.op.text, expr.lhs, expr.rhs)
	def visit_Assign(self, expr:syntax.Assign): return self._paren("=", expr.nom.text, expr.value)
	def visit_Call(self, expr:syntax.Call): return self._paren("call", expr.callee, *expr.args)
	def visit_Get(self, expr:syntax.Get): return self._paren(".", expr.lhs, expr.field_name.text)

	def visit_Set(self, expr:syntax.Set):
		return self._paren("=", self._paren(".", expr.lhs, expr.field_name.text), expr.value)

	def visit_Expression(self, stmt:syntax.Expression): return self._paren(";", stmt.expr)
	def visit_Print(self, stmt:syntax.Print): return self._paren("print", stmt.expr)
	def visit_Block(self, stmt:syntax.Block): return self._paren("block", *stmt.statements)

	def visit_Var(self, stmt:syntax.Var):
		if stmt.initializer is None:
			return self._paren("var", stmt.nom.text)
		return self._paren("var", stmt.nom.text, "=", stmt.initializer)

	def visit_If(self, stmt:syntax.If):
		if stmt.else_branch is None:
			return self._paren("if", stmt.condition, stmt.then_branch)
		return self._paren("if-else", stmt.condition, stmt.then_branch, stmt.else_branch)

	def visit_While(self, stmt:syntax.While): return self._paren("while", stmt.condition, stmt.body)

	def visit_Function(self, stmt:syntax.Function):
		params = "(%s)" % " ".join(p.text for p in stmt.params)
		return self._paren("fun", stmt.nom.text, params, *stmt.body)

	def visit_Return(self, stmt:syntax.Return):
		if stmt.value is None:
			return "(return)"
		return self._paren("return", stmt.value)

	def visit_Class(self, stmt:syntax.Class):
		head = [stmt.nom.text]
		if stmt.superclass is not None:
			head += ["<", stmt.superclass.nom.text]
		return self._paren("class", *head, *stmt.methods)

_PRINTER = AstPrinter()
