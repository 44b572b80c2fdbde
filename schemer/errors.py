class SchemeError(Exception):
    """ Base class for all schemer errors"""
    pass

class SchemeSyntaxError(SchemeError):
    """ Raised when source text or a special form is malformed"""

class UnboundVariableError(SchemeError):
    """ Raised when a symbol is looked up before it is bound"""

    def __init__(self, name):
        super().__init__(f"Unbound variable: {name}")
        self.name = name

class ArityError(SchemeError):
    """ Raised when the number of arguments passed to a procedure is incorrect"""

class NotApplicableError(SchemeError):
    """ Raised when the head of an application is not callable"""

class MacroMatchError(SchemeError):
    """ Raised when no syntax rule of a macro matches its use"""

class ForeignCallError(SchemeError):
    """ Raised when a host function cannot be resolved or fails"""

class SchemeTypeError(SchemeError):
    """ Raised when the types of arguments passed to a form are incorrect"""
