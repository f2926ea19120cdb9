class PebbleError(Exception):
    """ Base class for all Pebble errors"""
    pass

class PebbleSyntaxError(PebbleError):
    """ Raised when source text cannot be parsed"""

    def __init__(self, message: str, incomplete: bool = False):
        super().__init__(message)
        # True when the input simply ended too early (more lines may fix it)
        self.incomplete = incomplete

class PebbleUnboundSymbol(PebbleError):
    """ Raised when a symbol is used before it is bound"""

class PebbleTypeError(PebbleError):
    """ Raised when the types of arguments passed to a function are incorrect"""

class PebbleArityError(PebbleError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class PebbleArithmeticError(PebbleError):
    """ Raised on arithmetic faults such as a number too large for a float"""

class PebbleRecursionError(PebbleError):
    """ Raised when evaluation nests deeper than the configured limit"""
