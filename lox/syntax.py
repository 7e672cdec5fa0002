"""
The set of parse-nodes in simple form.
The parser (not part of this package) calls these constructors
bottom-up with subordinate semantic-values, then hands the resulting
list of statements to the resolver and the evaluator.
Nothing in here changes after construction.
"""
from typing import Optional, Sequence, Union
from .ontology import ValueExpression, Statement, Nom

NUMBER = float
LITERAL = Union[None, bool, NUMBER, str]

###############################################################################
# Expressions

class Literal(ValueExpression):
	def __init__(self, value:LITERAL, line:int=0):
		if isinstance(value, int) and not isinstance(value, bool):
			value = NUMBER(value)
		assert value is None or isinstance(value, (bool, NUMBER, str)), type(value)
		self.value = value
		self._line = line
	def __repr__(self): return "<Literal %r>" % (self.value,)
	def line(self): return self._line

class Variable(ValueExpression):
	def __init__(self, nom:Nom): self.nom = nom
	def __repr__(self): return "<var:%s>" % self.nom.text
	def line(self): return self.nom.line()

class Assign(ValueExpression):
	def __init__(self, nom:Nom, value:ValueExpression):
		self.nom, self.value = nom, value
	def line(self): return self.nom.line()

class Unary(ValueExpression):
	def __init__(self, op:Nom, arg:ValueExpression):
		self.op, self.arg = op, arg
	def line(self): return self.op.line()

class Binary(ValueExpression):
	def __init__(self, lhs:ValueExpression, op:Nom, rhs:ValueExpression):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def line(self): return self.op.line()

class Logical(ValueExpression):
	""" The short-cut operators 'and' and 'or'. """
	def __init__(self, lhs:ValueExpression, op:Nom, rhs:ValueExpression):
		assert op.text in ("and", "or"), op
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def line(self): return self.op.line()

class Grouping(ValueExpression):
	def __init__(self, expr:ValueExpression): self.expr = expr
	def line(self): return self.expr.line()

class Call(ValueExpression):
	def __init__(self, callee:ValueExpression, paren:Nom, args:Sequence[ValueExpression]):
		self.callee, self.paren, self.args = callee, paren, tuple(args)
	def line(self): return self.paren.line()

class Get(ValueExpression):
	def __init__(self, lhs:ValueExpression, field_name:Nom):
		self.lhs, self.field_name = lhs, field_name
	def line(self): return self.field_name.line()

class Set(ValueExpression):
	def __init__(self, lhs:ValueExpression, field_name:Nom, value:ValueExpression):
		self.lhs, self.field_name, self.value = lhs, field_name, value
	def line(self): return self.field_name.line()

class This(ValueExpression):
	def __init__(self, keyword:Nom): self.keyword = keyword
	def __repr__(self): return "<THIS>"
	def line(self): return self.keyword.line()

class Super(ValueExpression):
	def __init__(self, keyword:Nom, method:Nom):
		self.keyword, self.method = keyword, method
	def __repr__(self): return "<super.%s>" % self.method.text
	def line(self): return self.method.line()

###############################################################################
# Statements

class Expression(Statement):
	def __init__(self, expr:ValueExpression): self.expr = expr
	def line(self): return self.expr.line()

class Print(Statement):
	def __init__(self, expr:ValueExpression): self.expr = expr
	def line(self): return self.expr.line()

class Var(Statement):
	def __init__(self, nom:Nom, initializer:Optional[ValueExpression]=None):
		self.nom, self.initializer = nom, initializer
	def line(self): return self.nom.line()

class Block(Statement):
	def __init__(self, statements:Sequence[Statement]):
		self.statements = tuple(statements)
	def line(self): return self.statements[0].line() if self.statements else 0

class If(Statement):
	def __init__(self, condition:ValueExpression, then_branch:Statement, else_branch:Optional[Statement]=None):
		self.condition = condition
		self.then_branch = then_branch
		self.else_branch = else_branch
	def line(self): return self.condition.line()

class While(Statement):
	def __init__(self, condition:ValueExpression, body:Statement):
		self.condition, self.body = condition, body
	def line(self): return self.condition.line()

class Function(Statement):
	"""
	Serves for both free-standing functions and the methods of a class.
	The body is a plain sequence of statements, not a Block:
	parameters and body-locals share one scope.
	"""
	def __init__(self, nom:Nom, params:Sequence[Nom], body:Sequence[Statement]):
		self.nom = nom
		self.params = tuple(params)
		self.body = tuple(body)
	def __repr__(self): return "<fun %s/%d>" % (self.nom.text, len(self.params))
	def line(self): return self.nom.line()

class Return(Statement):
	def __init__(self, keyword:Nom, value:Optional[ValueExpression]=None):
		self.keyword, self.value = keyword, value
	def line(self): return self.keyword.line()

class Class(Statement):
	def __init__(self, nom:Nom, superclass:Optional[Variable], methods:Sequence[Function]):
		assert superclass is None or isinstance(superclass, Variable), superclass
		self.nom = nom
		self.superclass = superclass
		self.methods = tuple(methods)
	def __repr__(self): return "<class %s>" % self.nom.text
	def line(self): return self.nom.line()
