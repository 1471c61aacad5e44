from . import ast
from .lexer import Token


class ParseError(Exception):
    def __init__(self, message, last_token: Token, error_token: Token):
        super().__init__(message)
        self.message = message
        self.last_token = last_token      # last token successfully consumed
        self.error_token = error_token    # token at the failure site

    @property
    def pos(self):
        return (self.error_token.line, self.error_token.col)

    def __str__(self):
        return f"{self.error_token.line}:{self.error_token.col}: {self.message}"


class Parser:
    # precedence table: higher number = higher priority, all left-associative
    OP_PRECEDENCE = {
        "OR":      1,
        "AND":     2,
        "EQ":      3,
        "NE":      3,
        "LT":      4,
        "LE":      4,
        "GT":      4,
        "GE":      4,
        "PLUS":    5,
        "MINUS":   5,
        "STAR":    6,
        "SLASH":   6,
        "PERCENT": 6,
    }

    TYPE_KINDS = ("INT", "REAL", "BOOL")
    LITERAL_KINDS = ("INT_LITERAL", "REAL_LITERAL", "BOOL_LITERAL")

    # tokens after which `return` carries no expression
    RETURN_STOP = ("SEMICOLON", "END", "ELSE", "OR")

    def __init__(self, tokens, ids=None):
        if not tokens or tokens[-1].kind != "EOF":
            raise ValueError("token stream must end with an EOF token")
        self.tokens = tokens
        self.pos = 0
        self.last = None
        self.ids = ids if ids is not None else ast.NodeIds()

    # cursor

    def peek(self, offset=0):
        i = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[i].kind

    def peek_token(self):
        return self.tokens[self.pos]

    def at_end(self):
        return self.peek() == "EOF"

    def check(self, *kinds):
        return not self.at_end() and self.peek() in kinds

    def next(self):
        tok = self.tokens[self.pos]
        if not self.at_end():
            self.last = tok
            self.pos += 1
        return tok

    def match(self, *kinds):
        if self.check(*kinds):
            return self.next()
        return None

    def expect(self, kind, message):
        if self.check(kind):
            return self.next()
        raise self.error(message)

    def error(self, message):
        if self.at_end() and self.pos > 0:
            error_token = self.tokens[self.pos - 1]
        else:
            error_token = self.peek_token()
        last_token = self.last or self.tokens[0]
        return ParseError(message, last_token, error_token)

    # declarations

    def parse(self):
        # nesting depth is bounded by the interpreter's recursion limit
        try:
            return self.parse_program()
        except RecursionError:
            raise self.error("Program is nested too deeply") from None

    def parse_program(self):
        functions, enums, statements = [], [], []
        while not self.at_end():
            if self.check("BEGIN") and self.peek(1) == "FUNCTION":
                begin_tok = self.next()
                self.next()
                functions.append(self.parse_function(begin_tok, had_begin=True))
            elif self.check("FUNCTION"):
                functions.append(self.parse_function(self.next(), had_begin=False))
            elif self.check("ENUM"):
                enums.append(self.parse_enum(self.next()))
            else:
                statements.append(self.parse_stmt())
        return ast.Program(functions, enums, statements, ids=self.ids)

    def parse_function(self, start_tok, had_begin):
        # `function` (and `begin`) already consumed
        name_tok = self.expect("IDENT", "Expected function name")
        self.expect("LPAREN", "Expected '(' after function name")
        params = []
        if not self.check("RPAREN"):
            while True:
                p_name = self.expect("IDENT", "Expected parameter name")
                self.expect("COLON", "Expected ':' after parameter name")
                p_type = self.parse_type()
                params.append(ast.Param(p_name, p_type, ids=self.ids))
                if self.match("COMMA"):
                    continue
                break
        self.expect("RPAREN", "Expected ')' after parameters")
        self.expect("COLON", "Expected ':' after parameters")
        return_type = self.parse_type()
        body = self.parse_stmt()

        if had_begin:
            # a Block body has already eaten its `end`
            if not isinstance(body, ast.Block):
                self.expect("END", "Expected 'end' after function body")
            self.expect("FUNCTION", "Expected 'function' after 'end'")
        elif self.match("END"):
            self.expect("FUNCTION", "Expected 'function' after 'end'")

        return ast.Function(
            name_tok, params, return_type, body,
            ids=self.ids, pos=(start_tok.line, start_tok.col)
        )

    def parse_enum(self, kw):
        name_tok = self.expect("IDENT", "Expected enum name")
        self.expect("LBRACE", "Expected '{' after enum name")
        values = []
        if not self.check("RBRACE"):
            while True:
                value_tok = self.expect("IDENT", "Expected enum value name")
                values.append(ast.EnumValue(value_tok, ids=self.ids))
                if self.match("COMMA"):
                    continue
                break
        self.expect("RBRACE", "Expected '}' after enum values")

        if not self.at_top_level_start():
            self.expect("SEMICOLON", "Expected ';' after enum declaration")

        return ast.Enum(name_tok, values, ids=self.ids, pos=(kw.line, kw.col))

    def at_top_level_start(self):
        if self.at_end():
            return True
        if self.check("FUNCTION", "ENUM", *self.TYPE_KINDS):
            return True
        return self.check("BEGIN") and self.peek(1) == "FUNCTION"

    def parse_type(self):
        tok = self.match(*self.TYPE_KINDS)
        if tok is None:
            raise self.error("Expected type (int, real or bool)")
        return tok

    # statements

    def parse_stmt(self):
        tok = self.peek_token()
        pos = (tok.line, tok.col)

        if self.check("BEGIN"):
            self.next()
            if self.match("IF"):
                return self.parse_if(pos)
            if self.match("FOR"):
                return self.parse_for(pos)
            return self.parse_block(pos)

        if self.check(*self.TYPE_KINDS):
            return self.parse_var_decl(self.next())

        if self.match("PRINT"):
            expr = self.parse_call_arg("print")
            self.expect("SEMICOLON", "Expected ';' after 'print' statement")
            return ast.Print(expr, ids=self.ids, pos=pos)

        if self.match("READ"):
            target = self.parse_call_arg("read")
            self.expect("SEMICOLON", "Expected ';' after 'read' statement")
            return ast.Read(target, ids=self.ids, pos=pos)

        if self.match("RETURN"):
            expr = None
            if not self.at_end() and not self.check(*self.RETURN_STOP):
                expr = self.parse_expr()
            # the last statement before `end` may drop its ';'
            if not self.at_end() and not self.check("END"):
                self.expect("SEMICOLON", "Expected ';' after 'return' statement")
            return ast.Return(expr, ids=self.ids, pos=pos)

        if self.match("IF"):
            return self.parse_if(pos)
        if self.match("FOR"):
            return self.parse_for(pos)

        # assignment or plain expression
        expr = self.parse_expr()
        if self.match("ASSIGN_ARROW"):
            target = self.parse_expr()
            self.expect("SEMICOLON", "Expected ';' after assignment")
            return ast.Assignment(expr, target, ids=self.ids, pos=pos)
        self.expect("SEMICOLON", "Expected ';' after expression")
        return ast.ExpressionStatement(expr, ids=self.ids)

    def parse_var_decl(self, type_tok):
        dimensions = []
        while self.match("LBRACKET"):
            size = self.match("INT_LITERAL")
            if size is None:
                raise self.error("Expected integer literal as array dimension")
            dimensions.append(ast.Literal(size, ids=self.ids))
            self.expect("RBRACKET", "Expected ']' after array dimension")

        items = []
        while True:
            name_tok = self.expect("IDENT", "Expected variable name")
            items.append(ast.VarDeclItem(name_tok, ids=self.ids))
            if self.match("COMMA"):
                continue
            break
        self.expect("SEMICOLON", "Expected ';' after variable declaration")
        return ast.VarDecl(type_tok, dimensions, items, ids=self.ids)

    def parse_call_arg(self, keyword):
        self.expect("LPAREN", f"Expected '(' after '{keyword}'")
        expr = self.parse_expr()
        self.expect("RPAREN", "Expected ')' after expression")
        return expr

    def parse_condition(self, keyword):
        self.expect("LPAREN", f"Expected '(' after '{keyword}'")
        cond = self.parse_expr()
        self.expect("RPAREN", "Expected ')' after condition")
        return cond

    def parse_if(self, pos):
        # `if` (and `begin`) already consumed
        cond = self.parse_condition("if")
        then_branch = self.parse_stmt()

        or_ifs = []
        while self.check("OR"):
            or_tok = self.next()
            self.expect("IF", "Expected 'if' after 'or'")
            or_cond = self.parse_condition("if")
            or_body = self.parse_stmt()
            or_ifs.append(ast.OrIfBranch(
                or_cond, or_body, ids=self.ids, pos=(or_tok.line, or_tok.col)
            ))

        else_branch = None
        if self.match("ELSE"):
            else_branch = self.parse_stmt()

        # bare, optional `end`
        self.match("END")

        return ast.If(cond, then_branch, or_ifs, else_branch, ids=self.ids, pos=pos)

    def parse_for(self, pos):
        # `for` (and `begin`) already consumed
        self.expect("LPAREN", "Expected '(' after 'for'")
        var_tok = self.expect("IDENT", "Expected loop variable name")
        self.expect("GOES", "Expected 'goes' after loop variable")
        self.expect("FROM", "Expected 'from' after 'goes'")
        from_expr = self.parse_expr()
        self.expect("TO", "Expected 'to' after start expression")
        to_expr = self.parse_expr()
        self.expect("RPAREN", "Expected ')' after loop range")
        body = self.parse_stmt()

        if self.match("END"):
            self.expect("FOR", "Expected 'for' after 'end'")

        return ast.For(var_tok, from_expr, to_expr, body, ids=self.ids, pos=pos)

    def parse_block(self, pos):
        # `begin` already consumed
        statements = []
        while not self.at_end() and not self.check("END"):
            statements.append(self.parse_stmt())
        self.expect("END", "Expected 'end' to close block")
        return ast.Block(statements, ids=self.ids, pos=pos)

    # expressions

    def parse_expr(self, min_prec=0):
        lhs = self.parse_unary()

        while self.peek() in self.OP_PRECEDENCE:
            prec = self.OP_PRECEDENCE[self.peek()]
            if prec < min_prec:
                break
            op = self.next()
            # left-associative: the right operand must bind strictly tighter
            rhs = self.parse_expr(prec + 1)
            lhs = ast.BinaryExpr(lhs, op, rhs, ids=self.ids)

        return lhs

    def parse_unary(self):
        op = self.match("MINUS", "NOT")
        if op is not None:
            operand = self.parse_unary()
            return ast.UnaryExpr(op, operand, ids=self.ids)
        return self.parse_primary()

    def parse_primary(self):
        lit = self.match(*self.LITERAL_KINDS)
        if lit is not None:
            return ast.Literal(lit, ids=self.ids)

        name_tok = self.match("IDENT")
        if name_tok is not None:
            # call-lookahead
            if self.match("LPAREN"):
                args = []
                if not self.check("RPAREN"):
                    while True:
                        args.append(self.parse_expr())
                        if self.match("COMMA"):
                            continue
                        break
                self.expect("RPAREN", "Expected ')' after arguments")
                return ast.Call(name_tok, args, ids=self.ids)

            indices = []
            while self.match("LBRACKET"):
                indices.append(self.parse_expr())
                self.expect("RBRACKET", "Expected ']' after index")
            return ast.Variable(name_tok, indices, ids=self.ids)

        if self.match("LPAREN"):
            expr = self.parse_expr()
            self.expect("RPAREN", "Expected ')' after expression")
            return expr

        raise self.error("Expected expression")
