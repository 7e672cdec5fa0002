import sys, random
from typing import NamedTuple, Optional, Union
from .ontology import Phrase, Nom

class TooManyIssues(Exception):
	pass

class LoxRuntimeError(Exception):
	"""
	Fatal to the current run of a script, but not to the interpreter.
	The first argument says where: a phrase (usually the offending token) or a bare line number.
	"""
	def __init__(self, where:Union[Phrase, int], message:str):
		super().__init__(message)
		self.line = where if isinstance(where, int) else where.line()
		self.message = message

class StackOverflow(LoxRuntimeError):
	def __init__(self, where:Union[Phrase, int]):
		super().__init__(where, "Stack overflow.")

class Issue(NamedTuple):
	message: str
	line: int
	def __str__(self): return "[line %d] Error: %s" % (self.line, self.message)

def _outburst():
	interjection = ['Oops', 'Drat', 'Rats', 'Bother', 'Curses', 'Fiddlesticks', 'Good Grief']
	resignation = [
		'This script will not run.',
		'I cannot continue.',
		'Something needs fixing first.',
	]
	return "%s! %s" % tuple(map(random.choice, (interjection, resignation)))

class Report:
	""" Owned by whoever asked for the work. Reset it between REPL inputs. """
	_issues: list[Issue]

	def __init__(self, *, verbose:int=0, max_issues:Optional[int]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> tuple[Issue, ...]: return tuple(self._issues)

	def issue(self, it:Issue):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args, level:int=1):
		if self._verbose >= level:
			print(*args, file=sys.stderr)

	def error(self, guilty:Phrase, msg:str):
		""" Actually make an entry of an issue """
		assert isinstance(guilty, Phrase), guilty
		self.issue(Issue(msg, guilty.line()))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		if self._issues:
			print(_outburst(), file=sys.stderr)
		for i in self._issues:
			print(str(i), file=sys.stderr)
		sys.stderr.flush()

	# Methods the resolver calls:

	def redefined(self, nom:Nom):
		self.error(nom, "Already a variable named '%s' in this scope." % nom.text)

	def read_in_own_initializer(self, nom:Nom):
		self.error(nom, "Can't read local variable '%s' in its own initializer." % nom.text)

	def this_outside_class(self, keyword:Nom):
		self.error(keyword, "Can't use 'this' outside of a class.")

	def super_outside_class(self, keyword:Nom):
		self.error(keyword, "Can't use 'super' outside of a class.")

	def super_without_superclass(self, keyword:Nom):
		self.error(keyword, "Can't use 'super' in a class with no superclass.")

	def inherits_from_itself(self, nom:Nom):
		self.error(nom, "A class can't inherit from itself.")

	def return_outside_function(self, keyword:Nom):
		self.error(keyword, "Can't return from top-level code.")

	def return_value_from_initializer(self, keyword:Nom):
		self.error(keyword, "Can't return a value from an initializer.")

	# The evaluator calls this:

	def runtime_error(self, ex:LoxRuntimeError):
		self.issue(Issue(ex.message, ex.line))
