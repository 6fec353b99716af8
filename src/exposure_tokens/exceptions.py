"""Exceptions raised by token generation"""


class TokenHashingError(RuntimeError):
    """The key-derivation function could not produce a token.

    Unlike rejected input, this is not something to skip: the batch item
    failed and the cause is chained.
    """
