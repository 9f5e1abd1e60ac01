from typing import Dict, List, Optional, Set, Iterable

from txchop.chop_ast.ast import FunctionDeclaration, FunctionCallExpr, IdentifierExpr, MemberAccessExpr
from txchop.chop_ast.visitor.visitor import AstVisitor


def call_graph_analysis(functions: List[FunctionDeclaration], ledger_apis: Iterable[str]) -> 'CallGraph':
    """
    determines the call sites of every function, which of them call analyzed functions,
    the (indirectly) called functions of every function and concludes from that which functions are recursive
    """
    graph = CallGraph(functions, ledger_apis)
    for fct in functions:
        graph.detect_direct_calls(fct)
    graph.compute_indirect_calls()
    return graph


class CallGraph:
    def __init__(self, functions: List[FunctionDeclaration], ledger_apis: Iterable[str]):
        self.ledger_apis = set(ledger_apis)

        # analyzed functions by name, methods with the same name on different receivers share an entry
        self.functions: Dict[str, List[FunctionDeclaration]] = {}
        for fct in functions:
            self.functions.setdefault(fct.name, []).append(fct)

        # all call expressions of a function, in source order
        self.call_sites: Dict[FunctionDeclaration, List[FunctionCallExpr]] = {fct: [] for fct in functions}
        # names of the (transitively) called analyzed functions
        self.called_functions: Dict[str, Set[str]] = {name: set() for name in self.functions}

    def resolve(self, call: FunctionCallExpr) -> Optional[str]:
        """
        Name of the analyzed function called by call, None for ledger api calls and calls of unknown functions.
        """
        func = call.func
        if isinstance(func, IdentifierExpr):
            name = func.name
        elif isinstance(func, MemberAccessExpr) and func.member.name not in self.ledger_apis:
            name = func.member.name
        else:
            return None
        return name if name in self.functions else None

    def detect_direct_calls(self, fct: FunctionDeclaration):
        """
        :raise MalformedTree: if a call of fct does not have the expected shape
        """
        self.call_sites[fct] = []
        v = DirectCalledFunctionDetector(fct, self)
        v.visit(fct)

    def compute_indirect_calls(self):
        for name, called in self.called_functions.items():
            # Fixed point iteration
            size = -1
            leaves = set(called)
            while len(called) > size:
                size = len(called)
                leaves = {fct for leaf in leaves for fct in self.called_functions[leaf] if fct not in called}
                called.update(leaves)

    def is_recursive(self, name: str) -> bool:
        return name in self.called_functions[name]

    @property
    def recursive_functions(self) -> List[str]:
        return [name for name in self.functions if self.is_recursive(name)]


class DirectCalledFunctionDetector(AstVisitor):
    def __init__(self, fct: FunctionDeclaration, graph: CallGraph):
        super().__init__('node-or-children')
        self.fct = fct
        self.graph = graph

    def visitFunctionDeclaration(self, ast: FunctionDeclaration):
        if ast is self.fct:
            self.visit(ast.body)

    def visitFunctionCallExpr(self, ast: FunctionCallExpr):
        self.graph.call_sites[self.fct].append(ast)
        callee = self.graph.resolve(ast)
        if callee is not None:
            self.graph.called_functions[self.fct.name].add(callee)
        self.visitChildren(ast)
