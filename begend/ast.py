import itertools


class NodeIds:
    """
    Source of node identifiers for one parse run.

    Ids start at `start` and only ever go up. Share one instance between
    several parses to keep ids unique across all of them.
    """

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def next(self) -> int:
        return next(self._counter)


class Node:
    def __init__(self, name, ids, pos=None):
        self.id = ids.next()
        self.name = name
        self.pos = pos
        self.children = ()

    def accept(self, visitor):
        raise NotImplementedError

    def walk(self):
        yield self
        for child in self.children:
            yield from child.walk()

    def __str__(self):
        return f"{self.name} (ID: {self.id})"

    def __repr__(self):
        return f"<{type(self).__name__} {self}>"


def _pos(tok):
    return (tok.line, tok.col)


# helper nodes

class Terminal(Node):
    def __init__(self, token, label, *, ids):
        super().__init__(label, ids, pos=_pos(token))
        self.token = token
        self.label = label

    def accept(self, visitor):
        return visitor.visit_terminal(self)


class NodeList(Node):
    def __init__(self, nodes, label, *, ids, pos=None):
        super().__init__(label, ids, pos)
        self.nodes = tuple(nodes)
        self.label = label
        self.children = self.nodes

    def accept(self, visitor):
        return visitor.visit_node_list(self)


# top level

class Program(Node):
    def __init__(self, functions, enums, statements, *, ids):
        super().__init__("Program", ids, pos=(1, 1))
        self.functions = tuple(functions)
        self.enums = tuple(enums)
        self.statements = tuple(statements)
        self.children = self.functions + self.enums + self.statements

    def accept(self, visitor):
        return visitor.visit_program(self)


class Enum(Node):
    def __init__(self, name_token, values, *, ids, pos=None):
        super().__init__("Enum", ids, pos)
        self.name_token = name_token
        self.values = tuple(values)
        self.children = (
            Terminal(name_token, "EnumName", ids=ids),
            NodeList(self.values, "Values", ids=ids),
        )

    def accept(self, visitor):
        return visitor.visit_enum(self)


class EnumValue(Node):
    def __init__(self, name_token, *, ids):
        super().__init__("EnumValue", ids, pos=_pos(name_token))
        self.name_token = name_token
        self.children = (Terminal(name_token, "ValueName", ids=ids),)

    def accept(self, visitor):
        return visitor.visit_enum_value(self)


class Function(Node):
    def __init__(self, name_token, params, return_type, body, *, ids, pos=None):
        super().__init__("Function", ids, pos)
        self.name_token = name_token
        self.params = tuple(params)
        self.return_type = return_type     # INT / REAL / BOOL token
        self.body = body                   # a single statement, usually a Block
        self.children = (
            Terminal(name_token, "FunctionName", ids=ids),
            NodeList(self.params, "Params", ids=ids),
            Terminal(return_type, "ReturnType", ids=ids),
            body,
        )

    def accept(self, visitor):
        return visitor.visit_function(self)


class Param(Node):
    def __init__(self, name_token, type_token, *, ids):
        super().__init__("Param", ids, pos=_pos(name_token))
        self.name_token = name_token
        self.type_token = type_token
        self.children = (
            Terminal(name_token, "ParamName", ids=ids),
            Terminal(type_token, "ParamType", ids=ids),
        )

    def accept(self, visitor):
        return visitor.visit_param(self)


# statements

class VarDecl(Node):
    def __init__(self, type_token, dimensions, items, *, ids):
        super().__init__("VarDecl", ids, pos=_pos(type_token))
        self.type_token = type_token
        self.dimensions = tuple(dimensions)   # Literal nodes, one per [N]
        self.items = tuple(items)
        self.children = (
            Terminal(type_token, "Type", ids=ids),
            NodeList(self.dimensions, "Dimensions", ids=ids),
            NodeList(self.items, "Variables", ids=ids),
        )

    def accept(self, visitor):
        return visitor.visit_var_decl(self)


class VarDeclItem(Node):
    def __init__(self, name_token, *, ids):
        super().__init__("VarDeclItem", ids, pos=_pos(name_token))
        self.name_token = name_token
        self.children = (Terminal(name_token, "VarName", ids=ids),)

    def accept(self, visitor):
        return visitor.visit_var_decl_item(self)


class Assignment(Node):
    # `expr -> target`: the value comes first, the destination second
    def __init__(self, expr, target, *, ids, pos=None):
        super().__init__("Assignment", ids, pos)
        self.expr = expr
        self.target = target
        self.children = (expr, target)

    def accept(self, visitor):
        return visitor.visit_assignment(self)


class Print(Node):
    def __init__(self, expr, *, ids, pos=None):
        super().__init__("Print", ids, pos)
        self.expr = expr
        self.children = (expr,)

    def accept(self, visitor):
        return visitor.visit_print(self)


class Read(Node):
    def __init__(self, target, *, ids, pos=None):
        super().__init__("Read", ids, pos)
        self.target = target
        self.children = (target,)

    def accept(self, visitor):
        return visitor.visit_read(self)


class If(Node):
    def __init__(self, cond, then_branch, or_ifs, else_branch=None, *, ids, pos=None):
        super().__init__("If", ids, pos)
        self.cond = cond
        self.then_branch = then_branch
        self.or_ifs = tuple(or_ifs)
        self.else_branch = else_branch     # statement or None
        children = [cond, then_branch, *self.or_ifs]
        if else_branch is not None:
            children.append(else_branch)
        self.children = tuple(children)

    def accept(self, visitor):
        return visitor.visit_if(self)


class OrIfBranch(Node):
    def __init__(self, cond, body, *, ids, pos=None):
        super().__init__("OrIf", ids, pos)
        self.cond = cond
        self.body = body
        self.children = (cond, body)

    def accept(self, visitor):
        return visitor.visit_or_if(self)


class For(Node):
    def __init__(self, var_token, from_expr, to_expr, body, *, ids, pos=None):
        super().__init__("For", ids, pos)
        self.var_token = var_token
        self.from_expr = from_expr
        self.to_expr = to_expr
        self.body = body
        self.children = (
            Terminal(var_token, "VarName", ids=ids),
            from_expr,
            to_expr,
            body,
        )

    def accept(self, visitor):
        return visitor.visit_for(self)


class Return(Node):
    def __init__(self, expr=None, *, ids, pos=None):
        super().__init__("Return", ids, pos)
        self.expr = expr
        self.children = (expr,) if expr is not None else ()

    def accept(self, visitor):
        return visitor.visit_return(self)


class Block(Node):
    def __init__(self, statements, *, ids, pos=None):
        super().__init__("Block", ids, pos)
        self.statements = tuple(statements)
        self.children = self.statements

    def accept(self, visitor):
        return visitor.visit_block(self)


class ExpressionStatement(Node):
    def __init__(self, expr, *, ids):
        super().__init__("ExpressionStatement", ids, pos=expr.pos)
        self.expr = expr
        self.children = (expr,)

    def accept(self, visitor):
        return visitor.visit_expression_statement(self)


# expressions

class BinaryExpr(Node):
    def __init__(self, left, op, right, *, ids):
        super().__init__("BinaryExpr", ids, pos=left.pos)
        self.left = left
        self.op = op                       # operator token
        self.right = right
        self.children = (left, Terminal(op, "Operator", ids=ids), right)

    def accept(self, visitor):
        return visitor.visit_binary_expr(self)


class UnaryExpr(Node):
    def __init__(self, op, operand, *, ids):
        super().__init__("UnaryExpr", ids, pos=_pos(op))
        self.op = op
        self.operand = operand
        self.children = (Terminal(op, "Operator", ids=ids), operand)

    def accept(self, visitor):
        return visitor.visit_unary_expr(self)


class Literal(Node):
    def __init__(self, token, *, ids):
        super().__init__("Literal", ids, pos=_pos(token))
        self.token = token
        self.children = (Terminal(token, "Value", ids=ids),)

    def accept(self, visitor):
        return visitor.visit_literal(self)


class Variable(Node):
    def __init__(self, name_token, indices=(), *, ids):
        super().__init__("Variable", ids, pos=_pos(name_token))
        self.name_token = name_token
        self.indices = tuple(indices)      # empty for a scalar reference
        children = [Terminal(name_token, "VarName", ids=ids)]
        if self.indices:
            children.append(NodeList(self.indices, "Indices", ids=ids))
        self.children = tuple(children)

    def accept(self, visitor):
        return visitor.visit_variable(self)


class Call(Node):
    def __init__(self, name_token, args, *, ids):
        super().__init__("Call", ids, pos=_pos(name_token))
        self.name_token = name_token
        self.args = tuple(args)
        children = [Terminal(name_token, "FunctionName", ids=ids)]
        if self.args:
            children.append(NodeList(self.args, "Arguments", ids=ids))
        self.children = tuple(children)

    def accept(self, visitor):
        return visitor.visit_call(self)
