class AstVisitor:
    """
    Calls visit<ClassName> for the most specific class in the node's hierarchy that has one.

    traversal 'pre': the node's visit function (if any) runs, then all children are visited.
    traversal 'node-or-children': children are only visited if the node has no visit function.
    """

    def __init__(self, traversal='pre'):
        self.traversal = traversal

    def visit(self, ast):
        return self._visit_internal(ast)

    def _visit_internal(self, ast):
        ret = None
        ret_children = None

        f = self.get_visit_function(ast.__class__)
        if f:
            ret = f(ast)
        if self.traversal == 'pre' or not f:
            ret_children = self.visitChildren(ast)
        if ret:
            return ret
        return ret_children

    def get_visit_function(self, c):
        visitor_function = 'visit' + c.__name__
        if hasattr(self, visitor_function):
            return getattr(self, visitor_function)
        else:
            for base in c.__bases__:
                f = self.get_visit_function(base)
                if f:
                    return f
        return None

    def visitChildren(self, ast):
        for c in ast.children:
            self.visit(c)
