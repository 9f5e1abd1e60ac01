"""
Determine which parameters of each function flow into a ledger read (GetState) or ledger write (PutState).

A parameter position is recorded if the key argument of a ledger api call, or an argument passed at a recorded
position of another analyzed function, is (transitively) derived from the parameter. Positions are propagated
through the call graph until a fixed point is reached.
"""
from typing import Dict, List, Set, Iterable, Tuple

from txchop import my_logging
from txchop.config import chop_print
from txchop.errors.exceptions import MalformedTree
from txchop.chop_ast.ast import AST, FunctionDeclaration, FunctionCallExpr, MemberAccessExpr, IndexExpr
from txchop.chop_ast.analysis.call_graph import CallGraph
from txchop.chop_ast.analysis.dependency_walker import enclosing_scopes, walk_back_through_scopes
from txchop.chop_ast.analysis.equivalence import LabelSet, collect_labels, is_trackable, root_identifier

PositionMap = Dict[str, Set[int]]


class LedgerAccess:
    def __init__(self, get_state: PositionMap, put_state: PositionMap, sweeps: int):
        self.get_state = get_state
        self.put_state = put_state
        self.sweeps = sweeps

    def positions(self, read: bool) -> Dict[str, List[int]]:
        m = self.get_state if read else self.put_state
        return {name: sorted(pos) for name, pos in m.items()}


def seed_nodes(arg: AST) -> List[AST]:
    """Labels to resolve for a tracked call argument."""
    if is_trackable(arg) or isinstance(arg, IndexExpr):
        return [arg]
    return collect_labels(arg)


class LedgerAccessAnalysis:
    """
    Fixed point computation of the ledger read and write positions of all functions.

    Every sweep recomputes the positions of all functions from the previous sweep's positions
    (new = previous | computed), so position sets only grow. Functions which turn out to be malformed
    are excluded and reported in errors.
    """

    def __init__(self, functions: List[FunctionDeclaration], read_apis: Iterable[str], write_apis: Iterable[str],
                 max_sweeps: int = 0):
        self.read_apis = set(read_apis)
        self.write_apis = set(write_apis)
        self.errors: List[MalformedTree] = []
        self.failed: List[FunctionDeclaration] = []

        self.call_graph = CallGraph(functions, self.read_apis | self.write_apis)
        self.functions: List[FunctionDeclaration] = []
        for fct in functions:
            try:
                self.call_graph.detect_direct_calls(fct)
                # raises for malformed parameter lists
                fct.parameters
            except MalformedTree as e:
                self.fail(fct, e)
            else:
                self.functions.append(fct)
        self.call_graph.compute_indirect_calls()

        if max_sweeps <= 0:
            max_sweeps = sum(len(fct.parameters) for fct in self.functions) + 1
        self.max_sweeps = max_sweeps

    def fail(self, fct: FunctionDeclaration, e: MalformedTree):
        e.function = fct.name
        self.failed.append(fct)
        my_logging.warning(f'Omitting function {fct.name}: {e}')
        self.errors.append(e)

    def run(self) -> LedgerAccess:
        reads: PositionMap = {fct.name: set() for fct in self.functions}
        writes: PositionMap = {fct.name: set() for fct in self.functions}
        my_logging.data('recursiveFunctions', self.call_graph.recursive_functions)

        sweep = 0
        while True:
            sweep += 1
            new_reads, new_writes = self.sweep(reads, writes)
            changed = new_reads != reads or new_writes != writes
            reads, writes = new_reads, new_writes
            chop_print(f'Sweep {sweep}: {sum(map(len, reads.values()))} read and '
                       f'{sum(map(len, writes.values()))} write positions', verbosity_level=2)
            if not changed:
                break
            if sweep >= self.max_sweeps:
                my_logging.warning(f'Ledger position propagation stopped after {sweep} sweeps without reaching a fixed point')
                break

        my_logging.data('ledgerSweeps', sweep)
        # entries of omitted functions, unless another function with the same name survived
        names = {fct.name for fct in self.functions}
        reads = {name: pos for name, pos in reads.items() if name in names}
        writes = {name: pos for name, pos in writes.items() if name in names}
        return LedgerAccess(reads, writes, sweep)

    def sweep(self, reads: PositionMap, writes: PositionMap) -> Tuple[PositionMap, PositionMap]:
        new_reads = {name: set(pos) for name, pos in reads.items()}
        new_writes = {name: set(pos) for name, pos in writes.items()}
        for fct in list(self.functions):
            try:
                r = self.compute_positions(fct, self.read_apis, reads)
                w = self.compute_positions(fct, self.write_apis, writes)
            except MalformedTree as e:
                self.fail(fct, e)
                self.functions.remove(fct)
            else:
                new_reads[fct.name] |= r
                new_writes[fct.name] |= w
        return new_reads, new_writes

    def compute_positions(self, fct: FunctionDeclaration, apis: Set[str], known: PositionMap) -> Set[int]:
        """Positions of fct's parameters flowing into a call of apis or into a known position of an analyzed function."""
        wanted = LabelSet()
        for call in self.call_graph.call_sites[fct]:
            tracked = self.tracked_arguments(call, apis, known)
            if not tracked:
                continue
            seeds = LabelSet()
            for arg in tracked:
                seeds.update(seed_nodes(arg))
            walk_back_through_scopes(enclosing_scopes(call.statement), seeds)
            wanted.update(root_identifier(l) for l in seeds)
        return {idx for idx, param in enumerate(fct.parameters) if param in wanted}

    def tracked_arguments(self, call: FunctionCallExpr, apis: Set[str], known: PositionMap) -> List[AST]:
        func = call.func
        if isinstance(func, MemberAccessExpr) and func.member.name in apis:
            return call.args[:1]
        callee = self.call_graph.resolve(call)
        if callee is None:
            return []
        args = call.args
        # positions beyond the actual arguments (variadic calls) are ignored
        return [args[idx] for idx in sorted(known.get(callee, ())) if idx < len(args)]


def ledger_access_analysis(functions: List[FunctionDeclaration], read_apis: Iterable[str] = ('GetState',),
                           write_apis: Iterable[str] = ('PutState',), max_sweeps: int = 0) -> LedgerAccess:
    """
    :raise MalformedTree: if any function is malformed
    """
    a = LedgerAccessAnalysis(functions, read_apis, write_apis, max_sweeps)
    if a.errors:
        raise a.errors[0]
    result = a.run()
    if a.errors:
        raise a.errors[0]
    return result
