"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. Every phrase gets a serial number the moment it is
constructed. The resolver keys its side-table on that number,
so it must never change after the parser hands the tree over.
"""
from itertools import count

_serial = count(1)

class Phrase:
	ident: int  # Assigned at construction; see above.

	def __new__(cls, *args, **kwargs):
		it = super().__new__(cls)
		it.ident = next(_serial)
		return it

	def line(self) -> int:
		""" Return the source line most worth blaming for this phrase """
		raise NotImplementedError(type(self))

class Nom(Phrase):
	""" Representing the occurrence of a name (or operator, or keyword) anywhere. """
	def __init__(self, text:str, line:int):
		assert isinstance(text, str)
		assert isinstance(line, int), type(line)
		self.text, self._line = text, line
	def __repr__(self): return "<Name %r>" % self.text
	def key(self): return self.text
	def line(self): return self._line

class ValueExpression(Phrase): pass

class Statement(Phrase): pass

THIS = "this"
SUPER = "super"
INIT = "init"
