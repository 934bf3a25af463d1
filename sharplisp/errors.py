
class SharpError(Exception):
    """ Base class for all SharpLisp errors"""
    pass

class SharpLexError(SharpError):
    """ Raised when the lexer meets a character it does not recognise"""

    def __init__(self, char: str, position: int):
        super().__init__(f"Unrecognised character {char!r} at position {position}")
        self.char = char
        self.position = position

class SharpParseError(SharpError):
    """ Raised when a token sequence cannot be turned into nodes"""

class SharpUnbalancedParenError(SharpParseError):
    """ Raised when the tokens run out while a list is still open, or a ')' has no opener"""

class SharpIntegerRangeError(SharpParseError):
    """ Raised when an integer literal does not fit a signed 32-bit integer"""

class SharpUnboundNameError(SharpError):
    """ Raised when an identifier has no binding in the scope chain"""

    def __init__(self, name: str):
        super().__init__(f"Could not resolve name {name}")
        self.name = name

class SharpNotCallableError(SharpError):
    """ Raised when the head of a call form is not a function"""

class SharpTypeError(SharpError):
    """ Raised when a built-in receives a value of the wrong tag"""

class SharpArityError(SharpError):
    """ Raised when a built-in receives the wrong number of arguments"""

class SharpEmptyListError(SharpError):
    """ Raised when car or cdr is applied to an empty list"""

class SharpImmutableScopeError(SharpError):
    """ Raised when a binding is written into a read-only scope"""

class SharpRecursionError(SharpError):
    """ Raised when parsing or evaluation exhausts the recursion limit"""
