KEYWORDS = {
    "begin":    "BEGIN",
    "end":      "END",
    "function": "FUNCTION",
    "return":   "RETURN",
    "if":       "IF",
    "or":       "OR",
    "else":     "ELSE",
    "for":      "FOR",
    "goes":     "GOES",
    "from":     "FROM",
    "to":       "TO",
    "print":    "PRINT",
    "read":     "READ",
    "int":      "INT",
    "real":     "REAL",
    "bool":     "BOOL",
    "enum":     "ENUM",
    "and":      "AND",
    "not":      "NOT",
    "true":     "BOOL_LITERAL",
    "false":    "BOOL_LITERAL",
}

SINGLE_CHAR = {
    "+": "PLUS",
    "*": "STAR",
    "/": "SLASH",
    "%": "PERCENT",
    "=": "EQ",
    "(": "LPAREN",
    ")": "RPAREN",
    "[": "LBRACKET",
    "]": "RBRACKET",
    "{": "LBRACE",
    "}": "RBRACE",
    ",": "COMMA",
    ":": "COLON",
    ";": "SEMICOLON",
}

# (first char, second char) -> kind for the two-character operators
DOUBLE_CHAR = {
    ("-", ">"): "ASSIGN_ARROW",
    ("<", "="): "LE",
    (">", "="): "GE",
    ("!", "="): "NE",
}

TOKEN_KINDS = frozenset(
    set(KEYWORDS.values())
    | set(SINGLE_CHAR.values())
    | set(DOUBLE_CHAR.values())
    | {"MINUS", "LT", "GT", "IDENT", "INT_LITERAL", "REAL_LITERAL", "EOF"}
)


class LexError(Exception):
    def __init__(self, message, line, col):
        super().__init__(message)
        self.message = message
        self.line = line
        self.col = col

    @property
    def pos(self):
        return (self.line, self.col)

    def __str__(self):
        return f"{self.line}:{self.col}: {self.message}"


class Token:
    def __init__(self, kind: str, lexeme: str, line: int, col: int):
        self.kind = kind
        self.lexeme = lexeme
        self.line = line
        self.col = col

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.lexeme, self.line, self.col) == \
               (other.kind, other.lexeme, other.line, other.col)

    def __hash__(self):
        return hash((self.kind, self.lexeme, self.line, self.col))

    def __repr__(self):
        return f"Token({self.kind}, {self.lexeme!r}, {self.line}:{self.col})"

    def __str__(self):
        return f"{self.kind} '{self.lexeme}' @{self.line}:{self.col}"


class Lexer:
    """
    Single pass over the source with two characters of lookahead.

    Positions are 1-based; a token's (line, col) is its first character.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        return self.source[i] if i < len(self.source) else "\0"

    def advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def skip_trivia(self):
        while not self.at_end():
            ch = self.peek()
            if ch in " \t\r\n":
                self.advance()
            elif ch == "/" and self.peek(1) == "/":
                while not self.at_end() and self.peek() != "\n":
                    self.advance()
            elif ch == "/" and self.peek(1) == "*":
                line, col = self.line, self.col
                self.advance(); self.advance()
                while True:
                    if self.at_end():
                        raise LexError("Unterminated block comment", line, col)
                    if self.peek() == "*" and self.peek(1) == "/":
                        self.advance(); self.advance()
                        break
                    self.advance()
            else:
                return

    def number(self, line, col) -> Token:
        start = self.pos
        while self.peek().isdecimal():
            self.advance()
        kind = "INT_LITERAL"
        if self.peek() == ".":
            kind = "REAL_LITERAL"
            self.advance()
            if not self.peek().isdecimal():
                raise LexError("Expected digit after '.'", line, col)
            while self.peek().isdecimal():
                self.advance()
        return Token(kind, self.source[start:self.pos], line, col)

    def word(self, line, col) -> Token:
        start = self.pos
        while self.peek() == "_" or self.peek().isalpha() or self.peek().isdecimal():
            self.advance()
        text = self.source[start:self.pos]
        return Token(KEYWORDS.get(text, "IDENT"), text, line, col)

    def next_token(self) -> Token:
        self.skip_trivia()
        line, col = self.line, self.col
        if self.at_end():
            return Token("EOF", "", line, col)

        ch = self.peek()
        if ch.isdecimal():
            return self.number(line, col)
        if ch == "_" or ch.isalpha():
            return self.word(line, col)

        pair = (ch, self.peek(1))
        if pair in DOUBLE_CHAR:
            self.advance(); self.advance()
            return Token(DOUBLE_CHAR[pair], ch + pair[1], line, col)
        if ch in SINGLE_CHAR:
            self.advance()
            return Token(SINGLE_CHAR[ch], ch, line, col)
        if ch == "-":
            self.advance()
            return Token("MINUS", ch, line, col)
        if ch == "<":
            self.advance()
            return Token("LT", ch, line, col)
        if ch == ">":
            self.advance()
            return Token("GT", ch, line, col)

        raise LexError(f"Unexpected character {ch!r}", line, col)

    def tokens(self) -> list[Token]:
        out = []
        while True:
            tok = self.next_token()
            out.append(tok)
            if tok.kind == "EOF":
                return out


def tokenize(source: str) -> list[Token]:
    return Lexer(source).tokens()
