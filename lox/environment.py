"""
Simplest possible environment concept: the canonical list-structured search.

Environments get shared by reference. Every closure made during one
activation holds the very same Environment, so an update through any
one of them is visible through all the others. That's how closures work.
"""
from typing import Any, Optional
from .ontology import Nom
from .diagnostics import LoxRuntimeError

class Environment:
	_bindings: dict[str, Any]
	enclosing: Optional["Environment"]

	def __init__(self, enclosing:Optional["Environment"]=None):
		self._bindings = {}
		self.enclosing = enclosing

	def __repr__(self):
		return "<Environment %r>" % sorted(self._bindings)

	def __contains__(self, name:str) -> bool: return name in self._bindings

	def define(self, name:str, value:Any):
		""" This frame only, and never mind what was there before. """
		self._bindings[name] = value

	def get(self, nom:Nom) -> Any:
		env = self
		while env is not None:
			try: return env._bindings[nom.text]
			except KeyError: env = env.enclosing
		raise _undefined(nom)

	def assign(self, nom:Nom, value:Any):
		env = self
		while env is not None:
			if nom.text in env._bindings:
				env._bindings[nom.text] = value
				return
			env = env.enclosing
		raise _undefined(nom)

	def ancestor(self, distance:int) -> "Environment":
		env = self
		for _ in range(distance):
			env = env.enclosing
		return env

	# The resolver guarantees the name is present at that distance.
	def get_at(self, distance:int, name:str) -> Any:
		return self.ancestor(distance)._bindings[name]

	def assign_at(self, distance:int, name:str, value:Any):
		self.ancestor(distance)._bindings[name] = value

def _undefined(nom:Nom):
	return LoxRuntimeError(nom, "Undefined variable '%s'." % nom.text)
