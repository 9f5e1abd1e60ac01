from typing import List, Dict, Tuple

from txchop import my_logging
from txchop.config import cfg
from txchop.errors.exceptions import MalformedTree, ParseFailure
from txchop.utils.progress_printer import print_step
from txchop.chop_ast.analysis.chain_expander import DependencyChain, dependency_chains
from txchop.chop_ast.analysis.ledger_access import LedgerAccessAnalysis
from txchop.chop_ast.ast import AST, SourceFile, FunctionDeclaration
from txchop.chop_ast.build_ast import build_ast
from txchop.chop_ast.pointers.parent_setter import set_parents
from txchop.chop_ast.visitor.function_visitor import collect_functions


class AnalysisResult:
    """
    Output of both analysis phases for one program.

    Phase 1: the dependency chains of every analyzed function, in source order.
    Phase 2: function name -> ascending parameter positions flowing into ledger reads (get_state) and writes (put_state).
    """

    def __init__(self, name: str = ''):
        self.name = name
        self.chains: List[Tuple[FunctionDeclaration, List[DependencyChain]]] = []
        self.get_state: Dict[str, List[int]] = {}
        self.put_state: Dict[str, List[int]] = {}
        self.errors: List[MalformedTree] = []

    @property
    def phase1(self) -> List[Tuple[str, List[List[int]]]]:
        return [(fct.name, [chain.lines for chain in chains]) for fct, chains in self.chains]

    @property
    def omitted_functions(self) -> List[str]:
        return [e.function for e in self.errors]


def get_processed_ast(code: str, parents=True) -> SourceFile:
    """
    :raise ParseFailure: if code is not a valid tree document
    """
    with print_step("Parsing"):
        ast = build_ast(code)

    process_ast(ast, parents)
    return ast


def process_ast(ast: AST, parents=True):
    with print_step("Preprocessing AST"):
        if parents:
            try:
                set_parents(ast)
            except RecursionError:
                raise ParseFailure('Tree document is nested too deeply')


def analyze_ast(ast: AST) -> AnalysisResult:
    """
    Run both analysis phases on a processed tree.

    Malformed functions do not abort the analysis: they are omitted from both phases and reported in the result's errors.
    """
    result = AnalysisResult(ast.name if isinstance(ast, SourceFile) else '')
    functions = collect_functions(ast)
    my_logging.data('functions', len(functions))

    with print_step("Expanding dependency chains"):
        ok = []
        for fct in functions:
            try:
                fct.name  # raises if the declaration is unnamed
                chains = dependency_chains(fct, cfg.analyze_nested_scopes)
            except MalformedTree as e:
                _omit(result, fct, e)
            else:
                ok.append(fct)
                result.chains.append((fct, chains))

    with print_step("Propagating ledger read/write positions"):
        ledger = LedgerAccessAnalysis(ok, cfg.ledger_read_api_names, cfg.ledger_write_api_names, cfg.max_sweeps)
        access = ledger.run()
        result.errors += ledger.errors
        result.chains = [(fct, chains) for fct, chains in result.chains if fct not in ledger.failed]
        result.get_state = access.positions(read=True)
        result.put_state = access.positions(read=False)

    my_logging.data('chains', sum(len(chains) for _, chains in result.chains))
    my_logging.data('omittedFunctions', result.omitted_functions)
    return result


def _omit(result: AnalysisResult, fct: FunctionDeclaration, e: MalformedTree):
    e.function = fct.attrs.get('name', '<unnamed>')
    my_logging.warning(f'Omitting function {e.function}: {e}')
    result.errors.append(e)
