from typing import List, Tuple

from txchop.chop_ast.ast import AST, AssignmentStatement, StatementList, FunctionDeclaration
from txchop.chop_ast.analysis.equivalence import LabelSet, collect_labels

Scope = Tuple[StatementList, int]


class WalkResult:
    def __init__(self, collected: List[AssignmentStatement], remaining: LabelSet):
        # defining statements, nearest first
        self.collected = collected
        # wanted labels without a definition in the walked statements
        self.remaining = remaining


def walk_back(statements: List[AST], start: int, wanted: LabelSet) -> WalkResult:
    """
    Resolve the labels in wanted by walking backward over statements[:start].

    Every assignment which (re)defines a wanted label is collected, the defined labels are
    removed from wanted and the labels read by the assignment's right-hand side are added.
    Other statements are skipped. The walk ends at the first statement or when nothing is wanted anymore.

    wanted is updated in place.
    """
    collected = []
    idx = start - 1
    while wanted and idx >= 0:
        stmt = statements[idx]
        if isinstance(stmt, AssignmentStatement) and _resolve(stmt, wanted):
            collected.append(stmt)
        idx -= 1
    return WalkResult(collected, wanted)


def _resolve(stmt: AssignmentStatement, wanted: LabelSet) -> bool:
    defines = False
    for target in stmt.lhs:
        if wanted.discard(target):
            defines = True
    if defines:
        wanted.update(collect_labels(stmt.rhs_list))
    return defines


def enclosing_scopes(stmt: AST) -> List[Scope]:
    """
    (statement sequence, index) pairs locating stmt, from the innermost sequence outwards up to the function body.

    Requires parent links.
    """
    scopes = []
    node = stmt
    while node.parent is not None and not isinstance(node, FunctionDeclaration):
        if isinstance(node.parent, StatementList):
            scopes.append((node.parent, node.index_in_parent()))
        node = node.parent
    return scopes


def walk_back_through_scopes(scopes: List[Scope], wanted: LabelSet) -> WalkResult:
    """
    Walk backward from each scope position in turn, i.e. through the enclosing sequences of a nested statement.
    """
    collected = []
    for statements, idx in scopes:
        if not wanted:
            break
        collected += walk_back(statements.statements, idx, wanted).collected
    return WalkResult(collected, wanted)
