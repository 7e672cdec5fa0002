import unittest

from sketch import (
	num, text, var, call, get, set_, this, super_, binary,
	expr, show, let, fun, ret, klass, run, messages,
)

def _field(name, value):
	return expr(set_(this(), name, value))

class InstanceTests(unittest.TestCase):

	def test_display(self):
		lines, _ = run(
			klass("Bagel", fun("eat", [])),
			show(var("Bagel")),
			show(call(var("Bagel"))),
			show(get(call(var("Bagel")), "eat")),
		)
		self.assertEqual(["Bagel", "<Bagel instance>", "<fn eat>"], lines)

	def test_fields(self):
		lines, _ = run(
			klass("Box"),
			let("b", call(var("Box"))),
			expr(set_(var("b"), "x", num(1))),
			show(set_(var("b"), "y", binary(get(var("b"), "x"), "+", num(1)))),
			show(get(var("b"), "x")),
		)
		self.assertEqual(["2", "1"], lines)

	def test_fields_shadow_methods(self):
		lines, _ = run(
			klass("A", fun("m", [], ret(text("method")))),
			let("a", call(var("A"))),
			show(call(get(var("a"), "m"))),
			expr(set_(var("a"), "m", text("field"))),
			show(get(var("a"), "m")),
		)
		self.assertEqual(["method", "field"], lines)

	def test_instances_are_distinct(self):
		lines, _ = run(
			klass("A"),
			let("a", call(var("A"))),
			show(binary(var("a"), "==", var("a"))),
			show(binary(var("a"), "==", call(var("A")))),
		)
		self.assertEqual(["true", "false"], lines)

	def test_undefined_property(self):
		_, report = run(klass("A"), show(get(call(var("A")), "nope", line=3)))
		self.assertEqual(["Undefined property 'nope'."], messages(report))
		self.assertEqual(3, report.issues[0].line)

	def test_only_instances_have_properties(self):
		_, report = run(show(get(num(1), "x")))
		self.assertEqual(["Only instances have properties."], messages(report))
		_, report = run(expr(set_(text("s"), "x", num(1))))
		self.assertEqual(["Only instances have fields."], messages(report))


class MethodTests(unittest.TestCase):

	def test_bound_method_remembers_this(self):
		lines, _ = run(
			klass("A",
				fun("init", ["n"], _field("n", var("n"))),
				fun("peek", [], ret(get(this(), "n"))),
			),
			let("p", get(call(var("A"), num(7)), "peek")),
			show(call(var("p"))),
		)
		self.assertEqual(["7"], lines)

	def test_method_stored_in_a_field_keeps_its_owner(self):
		lines, _ = run(
			klass("A",
				fun("init", ["name"], _field("name", var("name"))),
				fun("who", [], ret(get(this(), "name"))),
			),
			let("a", call(var("A"), text("a"))),
			let("b", call(var("A"), text("b"))),
			expr(set_(var("b"), "borrowed", get(var("a"), "who"))),
			show(call(get(var("b"), "borrowed"))),
		)
		self.assertEqual(["a"], lines)

	def test_initializer_and_arity(self):
		point = klass("Point", fun("init", ["x", "y"], _field("x", var("x")), _field("y", var("y"))))
		lines, _ = run(point, show(get(call(var("Point"), num(1), num(2)), "y")))
		self.assertEqual(["2"], lines)
		_, report = run(point, show(call(var("Point"), num(1))))
		self.assertEqual(["Expected 2 arguments but got 1."], messages(report))

	def test_no_initializer_means_no_arguments(self):
		_, report = run(klass("A"), show(call(var("A"), num(1))))
		self.assertEqual(["Expected 0 arguments but got 1."], messages(report))

	def test_initializer_yields_the_instance(self):
		lines, _ = run(
			klass("Foo", fun("init", [], ret())),
			let("f", call(var("Foo"))),
			show(call(get(var("f"), "init"))),
		)
		self.assertEqual(["<Foo instance>"], lines)

	def test_early_return_from_initializer(self):
		lines, _ = run(
			klass("Foo", fun("init", [], _field("x", num(1)), ret(), _field("x", num(2)))),
			show(get(call(var("Foo")), "x")),
		)
		self.assertEqual(["1"], lines)


class InheritanceTests(unittest.TestCase):

	def test_inherited_methods_and_initializer(self):
		lines, _ = run(
			klass("A",
				fun("init", ["x"], _field("x", var("x"))),
				fun("twice", [], ret(binary(get(this(), "x"), "*", num(2)))),
			),
			klass("B", superclass="A"),
			let("b", call(var("B"), num(3))),
			show(call(get(var("b"), "twice"))),
		)
		self.assertEqual(["6"], lines)

	def test_override_and_super(self):
		lines, _ = run(
			klass("Doughnut", fun("cook", [], show(text("Fry until golden brown.")))),
			klass("BostonCream",
				fun("cook", [], expr(call(super_("cook"))), show(text("Pipe full of custard."))),
				superclass="Doughnut",
			),
			expr(call(get(call(var("BostonCream")), "cook"))),
		)
		self.assertEqual(["Fry until golden brown.", "Pipe full of custard."], lines)

	def test_super_is_bound_where_written(self):
		# C inherits test() from B; super inside it still means A, not B.
		lines, _ = run(
			klass("A", fun("method", [], show(text("A method")))),
			klass("B",
				fun("method", [], show(text("B method"))),
				fun("test", [], expr(call(super_("method")))),
				superclass="A",
			),
			klass("C", superclass="B"),
			expr(call(get(call(var("C")), "test"))),
		)
		self.assertEqual(["A method"], lines)

	def test_super_method_missing(self):
		_, report = run(
			klass("A"),
			klass("B", fun("m", [], expr(call(super_("gone")))), superclass="A"),
			expr(call(get(call(var("B")), "m"))),
		)
		self.assertEqual(["Undefined property 'gone'."], messages(report))

	def test_superclass_must_be_a_class(self):
		_, report = run(let("NotAClass", text("so not a class")), klass("B", superclass="NotAClass", line=4))
		self.assertEqual(["Superclass must be a class."], messages(report))
		self.assertEqual(4, report.issues[0].line)


if __name__ == '__main__':
	unittest.main()
