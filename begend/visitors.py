"""
visitors.py

Read-only traversals over the syntax tree. Every node's `accept` calls
exactly one `visit_*` method here; by default they all fall through to
`generic_visit`.
"""
import json


class NodeVisitor:
    def generic_visit(self, node):
        raise NotImplementedError(f"{type(self).__name__} cannot visit {node.name}")

    def visit_program(self, node):             return self.generic_visit(node)
    def visit_enum(self, node):                return self.generic_visit(node)
    def visit_enum_value(self, node):          return self.generic_visit(node)
    def visit_function(self, node):            return self.generic_visit(node)
    def visit_param(self, node):               return self.generic_visit(node)
    def visit_var_decl(self, node):            return self.generic_visit(node)
    def visit_var_decl_item(self, node):       return self.generic_visit(node)
    def visit_assignment(self, node):          return self.generic_visit(node)
    def visit_print(self, node):               return self.generic_visit(node)
    def visit_read(self, node):                return self.generic_visit(node)
    def visit_if(self, node):                  return self.generic_visit(node)
    def visit_or_if(self, node):               return self.generic_visit(node)
    def visit_for(self, node):                 return self.generic_visit(node)
    def visit_return(self, node):              return self.generic_visit(node)
    def visit_block(self, node):               return self.generic_visit(node)
    def visit_expression_statement(self, node): return self.generic_visit(node)
    def visit_binary_expr(self, node):         return self.generic_visit(node)
    def visit_unary_expr(self, node):          return self.generic_visit(node)
    def visit_literal(self, node):             return self.generic_visit(node)
    def visit_variable(self, node):            return self.generic_visit(node)
    def visit_call(self, node):                return self.generic_visit(node)
    def visit_terminal(self, node):            return self.generic_visit(node)
    def visit_node_list(self, node):           return self.generic_visit(node)


class TreePrinter(NodeVisitor):
    """Renders `Name (ID: n)` lines, two spaces of indent per depth."""

    INDENT = "  "

    def __init__(self):
        self.depth = 0

    def line(self, node):
        return f"{self.INDENT * self.depth}{node.name} (ID: {node.id})"

    def generic_visit(self, node):
        lines = [self.line(node)]
        self.depth += 1
        try:
            for child in node.children:
                lines.append(child.accept(self))
        finally:
            self.depth -= 1
        return "\n".join(lines)

    def visit_terminal(self, node):
        return self.line(node)


class JsonEmitter(NodeVisitor):
    def generic_visit(self, node):
        out = {"id": node.id, "name": node.name}
        if node.children:
            out["children"] = [child.accept(self) for child in node.children]
        return out

    def visit_terminal(self, node):
        tok = node.token
        return {
            "id": node.id,
            "name": node.name,
            "token": {
                "type": tok.kind,
                "lexeme": tok.lexeme,
                "line": tok.line,
                "col": tok.col,
            },
        }


def print_tree(node) -> str:
    return node.accept(TreePrinter())


def to_json(node) -> dict:
    return node.accept(JsonEmitter())


def dump_json(node, indent: int | None = 2) -> str:
    return json.dumps(to_json(node), indent=indent, ensure_ascii=False)
