"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [script]
    python -m lox [-v...] --emit-ast <script>
    python -m lox [-v...] --ast <ast_json_file>
    python -m lox --print-ast <script>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .lox file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --print-ast   Parse the given .lox file and print its syntax tree

Without a script the interpreter starts an interactive prompt. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit codes follow sysexits: 64 usage, 65 bad program (syntax or
resolution errors), 66 missing input file, 70 runtime error.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .errors import LoxResolveError, LoxRuntimeError, LoxSyntaxError
from .interpreter import Interpreter
from .parser import parse_program
from .printer import print_program

EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def read_source(path_arg: str) -> str:
    program_file = Path(path_arg)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(EX_NOINPUT)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str) -> Program:
    try:
        return parse_program(source)
    except LoxSyntaxError as e:
        print(e, file=sys.stderr)
        sys.exit(EX_DATAERR)


def execute(ast_program: Program, debug_level: int) -> int:
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.run(ast_program)
    except LoxResolveError as e:
        for diagnostic in e.diagnostics:
            print(diagnostic, file=sys.stderr)
        return EX_DATAERR
    except LoxRuntimeError as e:
        print(e, file=sys.stderr)
        return EX_SOFTWARE
    finally:
        interpreter.close()
    return 0


def repl(debug_level: int) -> int:
    interpreter = Interpreter(debug_level=debug_level)
    try:
        while True:
            try:
                line = input('> ')
            except EOFError:
                break
            if not line:
                break
            try:
                interpreter.run(parse_program(line))
            except LoxResolveError as e:
                for diagnostic in e.diagnostics:
                    print(diagnostic, file=sys.stderr)
            except (LoxSyntaxError, LoxRuntimeError) as e:
                print(e, file=sys.stderr)
    finally:
        interpreter.close()
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--print-ast', metavar='LOX_FILE', help='print the syntax tree of the given .lox file')
    parser.add_argument('program', nargs='?', help='Lox script (.lox) to execute')
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        if e.code:
            sys.exit(EX_USAGE)
        raise

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_or_exit(read_source(args.emit_ast))
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    if args.print_ast:
        print(print_program(parse_or_exit(read_source(args.print_ast))))
        return

    # Execute from AST JSON
    if args.ast:
        ast_program = ast_from_obj(json.loads(read_source(args.ast)))
        sys.exit(execute(ast_program, args.v))

    if not args.program:
        sys.exit(repl(args.v))

    sys.exit(execute(parse_or_exit(read_source(args.program)), args.v))


if __name__ == '__main__':
    main()
