from typing import List

from txchop.chop_ast.ast import AST, AssignmentStatement, IncDecStatement, FunctionDeclaration
from txchop.chop_ast.analysis.candidate_detector import Candidate, detect_candidates
from txchop.chop_ast.analysis.dependency_walker import enclosing_scopes, walk_back_through_scopes
from txchop.chop_ast.analysis.equivalence import LabelSet, collect_labels


class DependencyChain:
    """
    A candidate followed by the statements it derives its values from, nearest first.

    The statements of a chain must keep their relative order.
    """

    def __init__(self, candidate: Candidate, statements: List[AST]):
        self.candidate = candidate
        self.statements = statements

    @property
    def function(self) -> FunctionDeclaration:
        return self.candidate.function

    @property
    def lines(self) -> List[int]:
        return [s.line for s in self.statements]

    def __len__(self):
        return len(self.statements)

    def __str__(self):
        return f'[{"; ".join(map(str, self.statements))}]'


def read_labels(stmt: AST) -> List[AST]:
    """
    Labels a candidate reads, used to seed its backward walk.

    Assignments read their right-hand side. Increments and decrements read their own target, so
    `n := a; n++` chains both statements. Seeding only right-hand labels would make every such chain a
    singleton, since these statements have no right-hand side.
    """
    if isinstance(stmt, AssignmentStatement):
        return collect_labels(stmt.rhs_list)
    elif isinstance(stmt, IncDecStatement):
        # x++ reads the previous value of x
        return collect_labels(stmt.target)
    return []


def expand_chain(candidate: Candidate) -> DependencyChain:
    wanted = LabelSet(read_labels(candidate.statement))
    scopes = [(candidate.scope, candidate.index)] + enclosing_scopes(candidate.scope)
    walk = walk_back_through_scopes(scopes, wanted)
    return DependencyChain(candidate, [candidate.statement] + walk.collected)


def dependency_chains(fct: FunctionDeclaration, nested_scopes: bool = True) -> List[DependencyChain]:
    """
    One chain per candidate of fct, in candidate order.

    :raise MalformedTree: if a statement of fct does not have the expected shape
    """
    return [expand_chain(c) for c in detect_candidates(fct, nested_scopes)]
