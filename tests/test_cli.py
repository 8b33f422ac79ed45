import json
from pathlib import Path

import pytest

from fnscript.__main__ import main

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_runs_sample_program_without_arguments(caplog):
    caplog.set_level('INFO', logger='fnscript.interpreter')
    main([])
    assert 'Registered function __fn_0' in caplog.text
    assert 'Registered function __fn_1' in caplog.text


def test_runs_program_file(caplog):
    caplog.set_level('INFO', logger='fnscript.interpreter')
    main([str(EXAMPLES / 'program_2.fns')])
    assert 'Registered function choose' in caplog.text


def test_emit_ast(capsys):
    main(['--emit-ast', str(EXAMPLES / 'program_1.fns')])
    obj = json.loads(capsys.readouterr().out)
    assert [stmt['import']['module'] for stmt in obj] == ['http_request', 'http_request', 'no_such_module']


def test_strict_reports_warnings(capsys):
    main(['--strict', str(EXAMPLES / 'program_4.fns')])
    err = capsys.readouterr().err
    assert 'warning:' in err
    assert "'@'" in err


def test_missing_file_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / 'nope.fns')])
    assert info.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_lexer_error_exits(tmp_path, capsys):
    program = tmp_path / 'bad.fns'
    program.write_text('__fn = (a) ret 1.2.3 __', encoding='utf-8')
    with pytest.raises(SystemExit) as info:
        main([str(program)])
    assert info.value.code == 1
    assert 'malformed number' in capsys.readouterr().err
