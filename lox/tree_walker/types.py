"""
This module aims to express an interface agreement
between the evaluator and various kinds of data.
"""

from abc import ABC
from typing import NamedTuple, Optional, Sequence, Union


NATIVE_DATA = Union[None, bool, float, str]

class LoxValue(ABC):
	""" Root for classes that implement specialized run-time data structures """
	def display(self) -> str: raise NotImplementedError(type(self))

LOX_VALUE = Union[NATIVE_DATA, LoxValue]
ARGS = Sequence[LOX_VALUE]

class Returned(NamedTuple):
	""" The completion of a statement that executed 'return'. Normal completion is None. """
	value: LOX_VALUE

COMPLETION = Optional[Returned]
