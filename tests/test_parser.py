from fnscript.ast import (
    Binary, ExprStmt, FunctionDef, If, Import, ImportStmt, Lit,
    Literal, Return, Run, Var,
)
from fnscript.lexer import tokenize
from fnscript.parser import Parser, parse


def parse_source(source, strict=False):
    return parse(tokenize(source), strict=strict)


def only_function(source):
    program = parse_source(source)
    assert len(program) == 1
    assert isinstance(program[0], FunctionDef)
    return program[0].function


def body_expr(source, index=0):
    stmt = only_function(source).body[index]
    assert isinstance(stmt, ExprStmt)
    return stmt.expr


def test_import_without_alias():
    program = parse_source('import request from http_request')
    assert program == (ImportStmt(Import('request', None, 'http_request')),)
    assert program[0].import_.bound_name == 'request'


def test_import_with_alias():
    program = parse_source('import request -> req from http_request')
    assert program == (ImportStmt(Import('request', 'req', 'http_request')),)
    assert program[0].import_.bound_name == 'req'


def test_import_from_string_module():
    program = parse_source('import lib from "some module"')
    assert program[0].import_.module == 'some module'


def test_function_params_and_types():
    fn = only_function('__fn = (a, b):<a is string, b is number> __')
    assert fn.params == ('a', 'b')
    assert fn.types == (('a', 'string'), ('b', 'number'))
    assert fn.body == ()


def test_function_without_equals_or_types():
    fn = only_function('__fn (x) ret x __')
    assert fn.params == ('x',)
    assert fn.types == ()
    assert fn.body == (ExprStmt(Return(Var('x'))),)


def test_unannotated_params_have_no_type():
    fn = only_function('__fn = (a, b):<b is number> __')
    assert fn.types == (('b', 'number'),)


def test_type_clause_keeps_one_type_word():
    fn = only_function('__fn = (a, b):<a is string, b is string Array> ret b __')
    assert fn.types == (('a', 'string'), ('b', 'string'))
    assert fn.body == (ExprStmt(Return(Var('b'))),)


def test_explicit_function_name():
    program = parse_source('__fn choose = (x) ret x __')
    assert program[0].name == 'choose'
    assert parse_source('__fn = (x) ret x __')[0].name is None


def test_run_and_ret_statements():
    fn = only_function('__fn = (a) run a ret "done" __')
    assert fn.body == (
        ExprStmt(Run(Var('a'))),
        ExprStmt(Return(Lit(Literal.string('done')))),
    )


def test_conditional_with_otherwise():
    expr = body_expr('__fn = (x) if (x same 1) then ret "yes" otherwise ret "no" __')
    assert expr == If(
        Binary(Var('x'), 'same', Lit(Literal.number(1))),
        (ExprStmt(Return(Lit(Literal.string('yes')))),),
        (ExprStmt(Return(Lit(Literal.string('no')))),),
    )


def test_conditional_without_otherwise():
    expr = body_expr('__fn = (x) if x - then, ret x __')
    assert isinstance(expr, If)
    assert expr.condition == Var('x')
    assert expr.else_body is None
    assert len(expr.then_body) == 1


def test_block_end_closes_function_after_conditional():
    program = parse_source('__fn = (x) if x then ret 1 __ __fn = (y) ret y __')
    assert len(program) == 2
    assert program[1].function.params == ('y',)


def test_not_equal_is_one_operator():
    expr = body_expr('__fn = (a) ret a not equal 0 __')
    assert expr == Return(Binary(Var('a'), 'not_equal', Lit(Literal.number(0))))


def test_only_one_operator_pair_per_expression():
    fn = only_function('__fn = (a, b, c) ret a plus b plus c __')
    assert fn.body == (ExprStmt(Return(Binary(Var('a'), 'plus', Var('b')))),)


def test_parenthesized_identifier():
    expr = body_expr('__fn = (a) ret (a) __')
    assert expr == Return(Var('a'))


def test_boolean_operand():
    expr = body_expr('__fn = () ret true and false __')
    assert expr == Return(Binary(Lit(Literal.boolean(True)), 'and', Lit(Literal.boolean(False))))


def test_call_arguments_are_not_parsed():
    fn = only_function('__fn = (a) run add(a plus 3) __')
    assert fn.body == (ExprStmt(Run(Var('add'))),)


def test_unknown_operand_reads_as_false():
    expr = body_expr('__fn = () ret , __')
    assert expr == Return(Lit(Literal.boolean(False)))


def test_unknown_top_level_tokens_are_skipped():
    program = parse_source('hello ( ret "x" ) import a from b')
    assert program == (ImportStmt(Import('a', None, 'b')),)


def test_unclosed_function_stops_at_eof():
    fn = only_function('__fn = (a) ret a')
    assert fn.body == (ExprStmt(Return(Var('a'))),)


def test_garbage_never_raises():
    program = parse_source(') ( __ otherwise if then , : < > = -> __fn __fn ( if ret')
    assert all(isinstance(stmt, FunctionDef) for stmt in program)


def test_strict_mode_collects_diagnostics_without_changing_the_tree():
    source = 'junk import a from b __fn = (x) stray ret x __'
    parser = Parser(tokenize(source), strict=True)
    strict_program = parser.parse_program()
    assert strict_program == parse_source(source)
    assert len(parser.diagnostics) == 2
    assert 'junk' in parser.diagnostics[0].message
    assert 'stray' in parser.diagnostics[1].message


def test_best_effort_mode_collects_nothing():
    parser = Parser(tokenize('junk __fn = (x) stray __'))
    parser.parse_program()
    assert parser.diagnostics == []


def test_parser_appends_missing_eof():
    tokens = tokenize('import a from b')[:-1]
    assert Parser(tokens).parse_program() == (ImportStmt(Import('a', None, 'b')),)

