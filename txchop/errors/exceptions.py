"""
This module contains the definitions of all exceptions which may be publicly raised by txchop
"""
from typing import Optional


class TxChopError(Exception):
    """
    Error during analysis
    """
    pass


class ParseFailure(TxChopError):
    """
    Error while loading the syntax tree produced by the external parser.

    No tree exists when this is raised, so the whole analysis is aborted.
    """
    pass


class MalformedTree(TxChopError):
    """
    A node does not have the shape the analysis expects (e.g. an assignment without two expression lists).

    Reported per function: the offending function is omitted from the output, the rest of the program is analyzed.
    """

    def __init__(self, msg: str, node=None, function: Optional[str] = None):
        super().__init__(msg)
        self.node = node
        self.function = function

    def __str__(self):
        msg = super().__str__()
        if self.node is not None and getattr(self.node, 'line', -1) >= 0:
            msg = f'line {self.node.line}: {msg}'
        if self.function is not None:
            msg = f'in function "{self.function}", {msg}'
        return msg
