import unittest

from lox.printer import show as render
from sketch import (
	NIL, TRUE, num, text, var, assign, binary, unary, logical, group, call, get, set_, this, super_,
	expr, show, let, block, if_, while_, fun, ret, klass,
)

class PrinterTests(unittest.TestCase):

	def test_expressions(self):
		for tree, expect in [
			(binary(unary("-", num(123)), "*", group(num(45.67))), "(* (- 123) (group 45.67))"),
			(logical(NIL, "or", TRUE), "(or nil true)"),
			(text("hi"), '"hi"'),
			(assign("a", num(1)), "(= a 1)"),
			(call(var("f"), num(1), var("x")), "(call f 1 x)"),
			(call(var("f")), "(call f)"),
			(get(this(), "x"), "(. this x)"),
			(set_(var("o"), "x", num(2)), "(= (. o x) 2)"),
			(call(super_("cook")), "(call super.cook)"),
		]:
			with self.subTest(expect):
				self.assertEqual(expect, render(tree))

	def test_statements(self):
		for tree, expect in [
			(expr(var("a")), "(; a)"),
			(show(num(1)), "(print 1)"),
			(let("a"), "(var a)"),
			(let("a", num(1)), "(var a = 1)"),
			(block(show(num(1)), let("b")), "(block (print 1) (var b))"),
			(if_(TRUE, show(num(1))), "(if true (print 1))"),
			(if_(TRUE, show(num(1)), show(num(2))), "(if-else true (print 1) (print 2))"),
			(while_(TRUE, block()), "(while true (block))"),
			(ret(), "(return)"),
			(ret(num(0)), "(return 0)"),
			(fun("add", ["a", "b"], ret(binary(var("a"), "+", var("b")))), "(fun add (a b) (return (+ a b)))"),
			(klass("B", fun("m", []), superclass="A"), "(class B < A (fun m ()))"),
		]:
			with self.subTest(expect):
				self.assertEqual(expect, render(tree))


if __name__ == '__main__':
	unittest.main()
