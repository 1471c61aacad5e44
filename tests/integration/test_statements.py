import pytest
from begend_test import parse, shape, names

from begend import ast


def only_stmt(src):
    program = parse(src)
    assert len(program.statements) == 1
    return program.statements[0]

# ---------------------------
# statement forms
# ---------------------------

stmt_cases = [
("int x;", ast.VarDecl),
("real a, b, c;", ast.VarDecl),
("bool[3][4] grid;", ast.VarDecl),
("print(1 + 2);", ast.Print),
("read(x);", ast.Read),
("read(v[2]);", ast.Read),
("5 -> a;", ast.Assignment),
("f(1, 2);", ast.ExpressionStatement),
("x;", ast.ExpressionStatement),
("begin print(1); print(2); end", ast.Block),
("begin end", ast.Block),
("if (a) print(1);", ast.If),
("begin if (a) print(1); end", ast.If),
("for (i goes from 1 to 10) print(i);", ast.For),
("begin for (i goes from 1 to 10) print(i); end for", ast.For),
("return;", ast.Return),
("return 1;", ast.Return),
]

@pytest.mark.parametrize("src,cls", stmt_cases)
def test_statement_kinds(src, cls):
    assert isinstance(only_stmt(src), cls)


def test_var_decl_items_and_dimensions():
    decl = only_stmt("int[2][3] m, n;")
    assert decl.type_token.lexeme == "int"
    assert [d.token.lexeme for d in decl.dimensions] == ["2", "3"]
    assert all(isinstance(d, ast.Literal) for d in decl.dimensions)
    assert [i.name_token.lexeme for i in decl.items] == ["m", "n"]
    assert [c.name for c in decl.children] == ["Type", "Dimensions", "Variables"]


def test_scalar_var_decl_keeps_empty_dimensions_list():
    decl = only_stmt("bool ok;")
    dims = decl.children[1]
    assert dims.name == "Dimensions"
    assert dims.children == ()


def test_assignment_direction():
    stmt = only_stmt("5 -> a;")
    src, target = stmt.children
    assert isinstance(src, ast.Literal) and src.token.lexeme == "5"
    assert isinstance(target, ast.Variable) and target.name_token.lexeme == "a"
    assert target.indices == ()


def test_assignment_to_array_element():
    stmt = only_stmt("x + 1 -> v[i][j + 1];")
    assert isinstance(stmt.expr, ast.BinaryExpr)
    assert len(stmt.target.indices) == 2
    assert [c.name for c in stmt.target.children] == ["VarName", "Indices"]


def test_block_statements_in_source_order():
    block = only_stmt("""
    begin
        print(1);
        read(x);
        2 -> x;
    end
    """)
    assert [type(s) for s in block.statements] == [ast.Print, ast.Read, ast.Assignment]


def test_nested_blocks():
    block = only_stmt("begin begin print(1); end end")
    assert isinstance(block.statements[0], ast.Block)

# ---------------------------
# return
# ---------------------------

def test_bare_return_has_no_children():
    ret = only_stmt("return;")
    assert ret.expr is None
    assert ret.children == ()


def test_return_without_semicolon_before_end():
    block = only_stmt("begin print(1); return x end")
    ret = block.statements[-1]
    assert isinstance(ret, ast.Return)
    assert isinstance(ret.expr, ast.Variable)


def test_bare_return_before_end():
    block = only_stmt("begin return end")
    assert block.statements[0].expr is None


def test_return_at_end_of_input_without_semicolon():
    ret = only_stmt("return 1 + 2")
    assert isinstance(ret.expr, ast.BinaryExpr)


def test_bare_return_before_else():
    stmt = only_stmt("if (a) return; else return;")
    assert stmt.then_branch.expr is None
    assert stmt.else_branch.expr is None

# ---------------------------
# if
# ---------------------------

def test_if_optional_end_gives_same_shape():
    with_end = only_stmt("if (a < 10) print(1); end")
    without_end = only_stmt("if (a < 10) print(1);")
    assert shape(with_end) == shape(without_end)


def test_if_children_order():
    stmt = only_stmt("""
    if (a) print(1);
    or if (b) print(2);
    or if (c) print(3);
    else print(4);
    """)
    assert [c.name for c in stmt.children] == ["Variable", "Print", "OrIf", "OrIf", "Print"]
    assert [b.cond.name_token.lexeme for b in stmt.or_ifs] == ["b", "c"]
    assert isinstance(stmt.else_branch, ast.Print)


def test_if_without_else_has_no_else_child():
    stmt = only_stmt("if (a) print(1); or if (b) print(2);")
    assert stmt.else_branch is None
    assert [c.name for c in stmt.children] == ["Variable", "Print", "OrIf"]


def test_if_with_block_branches():
    stmt = only_stmt("""
    if (x = 1) begin print(1); print(2); end
    else begin print(3); end
    end
    """)
    assert isinstance(stmt.then_branch, ast.Block)
    assert isinstance(stmt.else_branch, ast.Block)


def test_begin_if_routes_to_if_not_block():
    program = parse("begin if (a) print(1); end print(2);")
    assert [type(s) for s in program.statements] == [ast.If, ast.Print]


def test_trailing_end_is_taken_by_if_inside_block():
    # the inner if consumes the first `end`; the block needs its own
    block = only_stmt("begin print(0); if (a) print(1); end end")
    assert isinstance(block, ast.Block)
    assert [type(s) for s in block.statements] == [ast.Print, ast.If]

# ---------------------------
# for
# ---------------------------

def test_for_children():
    stmt = only_stmt("for (i goes from 1 to n + 1) print(i); end for")
    assert [c.name for c in stmt.children] == ["VarName", "Literal", "BinaryExpr", "Print"]
    assert stmt.var_token.lexeme == "i"


def test_for_end_for_is_optional():
    with_end = only_stmt("for (i goes from 0 to 3) print(i); end for")
    without_end = only_stmt("for (i goes from 0 to 3) print(i);")
    assert shape(with_end) == shape(without_end)


def test_nested_for_with_block_body():
    stmt = only_stmt("""
    for (i goes from 0 to 3)
    begin
        print(i);
        for (j goes from 0 to i) print(i * j); end for
    end
    end for
    """)
    assert isinstance(stmt.body, ast.Block)
    assert [type(s) for s in stmt.body.statements] == [ast.Print, ast.For]


def test_begin_for_inside_for_body_routes_to_for_not_block():
    # `begin for` is the inner loop itself, so its `end for` closes it
    # and the outer loop takes the second one
    stmt = only_stmt("""
    for (i goes from 0 to 3)
    begin for (j goes from 0 to i) print(i * j); end for
    end for
    """)
    assert isinstance(stmt.body, ast.For)
    assert stmt.body.var_token.lexeme == "j"
    assert isinstance(stmt.body.body, ast.Print)


def test_top_level_statements_in_order():
    program = parse("int a; 1 -> a; print(a); read(a);")
    assert names(program)[0] == "Program"
    assert [type(s) for s in program.statements] == [
        ast.VarDecl, ast.Assignment, ast.Print, ast.Read,
    ]
