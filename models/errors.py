class ValidationError(Exception):
    """Raised when the lookup form input is missing or inconsistent"""
    pass


class FetchError(Exception):
    """Raised when any fetch in a lookup batch fails"""
    pass


class InvalidTransitionError(Exception):
    """Raised on a wizard state change that the transition table forbids"""
    pass
