"""
This is the overall control for the run-time:
resolve first, and interpret only if resolution found nothing wrong.
A driver (command-line, REPL, test) owns the report and the interpreter.
"""
from typing import Optional, Sequence, TextIO
from .. import syntax
from ..diagnostics import Report
from ..resolution import resolve
from .evaluator import Interpreter

def run_program(
		statements:Sequence[syntax.Statement],
		*,
		report:Optional[Report]=None,
		interpreter:Optional[Interpreter]=None,
		out:Optional[TextIO]=None,
) -> Report:
	"""
	Pass the same interpreter again to carry globals over from one input to the next.
	The out stream only configures an interpreter made here: a supplied interpreter
	keeps writing to its own.
	The report is returned either way; check report.ok() or report.issues.
	"""
	if report is None: report = Report()
	if interpreter is None: interpreter = Interpreter(out=out)
	resolution = resolve(statements, report)
	if report.sick():
		report.info("Resolution found %d issue(s); not running." % len(report.issues))
		return report
	interpreter.interpret(statements, resolution.distances, report)
	return report
