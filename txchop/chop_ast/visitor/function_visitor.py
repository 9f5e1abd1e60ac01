from typing import List

from txchop.chop_ast.ast import AST, FunctionDeclaration, ParameterList
from txchop.chop_ast.visitor.visitor import AstVisitor


class FunctionVisitor(AstVisitor):
    """
    Visits every function declaration anywhere in the tree.

    Subclasses implement visitFunctionDeclaration; descent stops at the first function declaration
    on every path, all other nodes only forward to their children.
    """

    def __init__(self):
        super().__init__('node-or-children')

    def visitParameterList(self, ast: ParameterList):
        pass

    def visitFunctionDeclaration(self, ast: FunctionDeclaration):
        pass


class FunctionCollector(FunctionVisitor):

    def __init__(self):
        super().__init__()
        self.functions: List[FunctionDeclaration] = []

    def visitFunctionDeclaration(self, ast: FunctionDeclaration):
        self.functions.append(ast)


def collect_functions(ast: AST) -> List[FunctionDeclaration]:
    """All function declarations of ast in source order."""
    v = FunctionCollector()
    v.visit(ast)
    return v.functions
