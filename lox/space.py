"""
The resolver's notion of name-spaces with support for nested scopes.
The global scope is deliberately absent: an empty stack means global.
"""

from typing import Iterator, Optional
from .ontology import Nom

class AlreadyExists(KeyError): pass

class Layer:
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	_defined: dict[str, bool]

	def __init__(self):
		self._defined = {}

	def __contains__(self, key: str) -> bool:
		return key in self._defined

	def is_defined(self, key: str) -> bool:
		return self._defined[key]

	def declare(self, nom: Nom):
		""" Present, but not yet fit to read. """
		self.mount(nom.key(), False)

	def define(self, nom: Nom):
		self._defined[nom.key()] = True

	def mount(self, key: str, defined: bool):
		if key in self._defined:
			raise AlreadyExists(key)
		self._defined[key] = defined


class ScopeStack:
	""" Innermost scope last. """
	def __init__(self):
		self._layers: list[Layer] = []

	def __bool__(self): return bool(self._layers)
	def __iter__(self) -> Iterator[Layer]: return reversed(self._layers)

	def push(self) -> Layer:
		layer = Layer()
		self._layers.append(layer)
		return layer

	def pop(self) -> Layer: return self._layers.pop()

	def top(self) -> Layer: return self._layers[-1]

	def distance(self, key: str) -> Optional[int]:
		"""
		How many scopes out from the innermost one holds this key?
		None means it must be global (or else nowhere at all).
		"""
		for depth, layer in enumerate(self):
			if key in layer:
				return depth
