import json

from lox.ast_json import ast_from_obj, ast_to_obj
from lox.interpreter import Interpreter
from lox.parser import parse_program
from lox.printer import print_ast, print_program

SOURCE = '''
class A { greet() { return "hi " + this.name; } }
class B < A { init(name) { this.name = name; } greet() { return super.greet() + "!"; } }
var shout = B("lox").greet();
print shout;
'''


def test_json_tree_runs_like_the_parsed_tree(capsys):
    obj = json.loads(json.dumps(ast_to_obj(parse_program(SOURCE))))
    assert obj['type'] == 'Program'
    Interpreter().run(ast_from_obj(obj))
    assert capsys.readouterr().out == 'hi lox!\n'


def test_printer():
    program = parse_program('print -1 + 2 * (3 - x);\nvar y = a or b;')
    assert print_program(program) == (
        '(print (+ (- 1) (* 2 (group (- 3 x)))))\n'
        '(var y (or a b))'
    )
    loop = parse_program('for (var i = 0; i < 2; i = i + 1) print i;').body[0]
    assert print_ast(loop) == (
        '(block (var i 0) (while (< i 2) (block (print i) (; (= i (+ i 1))))))'
    )
