import io

import pytest

from loxi.errors import (
    LoxRuntimeError, RuntimeNameError, RuntimeTypeError,
)
from loxi.interpreter import Interpreter, LoxFunction, run_program
from loxi.parser import parse_program


def run(source, stdin=''):
    out = io.StringIO()
    run_program(source, writer=out, reader=io.StringIO(stdin))
    return out.getvalue()


def test_arithmetic_and_printing():
    assert run("print(1 + 2 * 3);") == "7\n"
    assert run("print(7 / 2, 10, 2.50);") == "3.5 10 2.5\n"
    assert run('print("lo" + "x");') == "lox\n"
    assert run('print(1, "a", nil, true);') == "1 a nil true\n"
    assert run("print();") == "\n"


def test_truthiness():
    source = """
    if (0) print("zero");
    if ("") print("empty");
    if (nil) print("nil"); else print("nil is falsy");
    print(!nil, !0, !false);
    """
    assert run(source) == "zero\nempty\nnil is falsy\ntrue false true\n"


def test_logical_operators_return_operands():
    assert run('print(nil or "x", 1 and 2, false and 1, "a" or missing);') == "x 2 false a\n"


def test_equality():
    assert run('print(1 == 1, "a" == "a", nil == nil, true == 1, nil == false, 1 != 2);') == \
        "true true true false false true\n"
    assert run("fun f() {} var g = f; print(f == g, f == fun () {}, clock == clock);") == \
        "true false true\n"


def test_division_by_zero_follows_ieee():
    assert run("print(1 / 0, -1 / 0, 0 / 0);") == "inf -inf nan\n"


def test_post_increment_and_decrement():
    assert run("var i = 1; print(i++); print(i); print(i--);") == "2\n2\n1\n"
    assert run("{ var j = 5; j++; print(j); }") == "6\n"


def test_uninitialized_variable_is_nil():
    assert run("var a; print(a);") == "nil\n"


@pytest.mark.parametrize('source, message', [
    ('-"a";', 'operand must be a number'),
    ('1 + "a";', 'operands must be two numbers or two strings'),
    ('"a" < "b";', 'operands must be numbers'),
    ('print(1 - nil);', 'operands must be numbers'),
    ('"x"();', 'can only call functions'),
    ('fun f(a) {} f(1, 2);', 'expected 1 arguments but got 2'),
    ('clock(1);', 'expected 0 arguments but got 1'),
    ('var s = "a"; s++;', "operand of '++' must be a number"),
])
def test_type_errors(source, message):
    with pytest.raises(RuntimeTypeError) as exc:
        run(source)
    assert message in str(exc.value)


def test_post_increment_needs_variable():
    with pytest.raises(LoxRuntimeError) as exc:
        run("(1)++;")
    assert 'must be a variable' in str(exc.value)


def test_undefined_variable():
    with pytest.raises(RuntimeNameError) as exc:
        run("var a = 1;\nprint(missing);")
    assert str(exc.value) == "[line 2] NameError: undefined variable 'missing'"
    with pytest.raises(RuntimeNameError):
        run("missing = 1;")


def test_variable_declared_in_skipped_branch():
    with pytest.raises(RuntimeNameError) as exc:
        run("{ if (false) var x = 1; print(x); }")
    assert str(exc.value) == "[line 1] NameError: uninitialized variable 'x'"

    with pytest.raises(RuntimeNameError) as exc:
        run("fun f() { if (false) var x = 1; return x; }\nf();")
    assert "uninitialized variable 'x'" in str(exc.value)
    assert exc.value.context == ["line 2", "calling f defined on line 1"]

    with pytest.raises(RuntimeNameError) as exc:
        run("{ while (false) var y; y = 2; }")
    assert "uninitialized variable 'y'" in str(exc.value)


def test_errors_carry_call_context():
    source = "fun boom() {\n  return 1 + nil;\n}\nboom();"
    with pytest.raises(RuntimeTypeError) as exc:
        run(source)
    assert exc.value.context == ["line 4", "calling boom defined on line 1"]
    assert str(exc.value).startswith("line 4: calling boom defined on line 1: [line 2] TypeError")


def test_execution_stops_at_first_error():
    out = io.StringIO()
    with pytest.raises(RuntimeTypeError):
        run_program("print(1); print(nil + 1); print(2);", writer=out)
    assert out.getvalue() == "1\n"


def test_closure_sees_updates_after_return():
    source = """
    var setter;
    fun make() {
      var x = "before";
      setter = fun () { x = "after"; };
      return fun () { return x; };
    }
    var getter = make();
    print(getter());
    setter();
    print(getter());
    """
    assert run(source) == "before\nafter\n"


def test_closure_ignores_later_caller_declarations():
    source = """
    fun make() {
      var x = "captured";
      return fun () { return x; };
    }
    {
      var get = make();
      var x = "caller";
      print(get());
      print(x);
    }
    """
    assert run(source) == "captured\ncaller\n"


def test_return_values():
    source = """
    fun first() {
      var i = 0;
      while (true) {
        i = i + 1;
        if (i == 3) return i;
      }
    }
    fun nothing() { return; }
    fun falls_off() {}
    print(first(), nothing(), falls_off());
    """
    assert run(source) == "3 nil nil\n"


def test_nested_loops_break_and_continue():
    source = """
    var log = "";
    var i = 0;
    while (i < 3) {
      i = i + 1;
      var j = 0;
      while (true) {
        j = j + 1;
        if (j == 2) continue;
        if (j > 3) break;
        log = log + "x";
      }
      log = log + "|";
    }
    print(log);
    """
    assert run(source) == "xx|xx|xx|\n"


def test_continue_in_for_still_increments():
    assert run("for (var i = 0; i < 5; i++) { if (i < 4) continue; print(i); }") == "4\n"


def test_input_reads_lines():
    assert run("print(input()); print(input()); print(input());", stdin="alice\r\nbob\n") == \
        "alice\nbob\nnil\n"


def test_clock_is_a_number():
    assert run("var t = clock(); print(t >= 0, t - t);") == "true 0\n"


def test_callable_display():
    assert run("fun f() {} print(f); print(clock); print(fun () {});") == \
        "<fn f>\n<native fn clock>\n<fn lambda>\n"


def test_globals_persist_between_interpret_calls():
    out = io.StringIO()
    interp = Interpreter(writer=out)
    interp.interpret(parse_program("var a = 41;"))
    interp.interpret(parse_program("a = a + 1; print(a);"))
    assert out.getvalue() == "42\n"
    assert interp.globals.get('a') == 42.0


def test_unresolved_signal_escaping():
    interp = Interpreter(writer=io.StringIO())
    with pytest.raises(LoxRuntimeError):
        interp.interpret(parse_program("break;"))


def test_function_value():
    interp = run_program("fun add(a, b) { return a + b; }", writer=io.StringIO())
    add = interp.globals.get('add')
    assert isinstance(add, LoxFunction)
    assert add.arity == 2
    assert add.call(interp, [1.0, 2.0]) == 3.0


def test_debug_output():
    debug = io.StringIO()
    interp = Interpreter(writer=io.StringIO(), debug_level=3, debug_fp=debug)
    interp.interpret(parse_program('var a = 1; fun f() {} if (a) f();'))
    text = debug.getvalue()
    assert "declare a: number = 1" in text
    assert "define function f" in text
    assert "if condition 1 -> True" in text
    assert "call <fn f> with 0 argument(s)" in text
