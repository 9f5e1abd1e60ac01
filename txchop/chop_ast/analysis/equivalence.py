"""
Structural (lexical) equivalence of tree nodes and the label sets built on top of it.

Labels are references to identifier and field-access nodes. Two labels denote the same value iff they are
structurally equal, no alias analysis is performed.
"""
from typing import Iterable, Iterator, List, Optional

from txchop.chop_ast.ast import AST, IdentifierExpr, MemberAccessExpr, IndexExpr, FunctionCallExpr, KeyValueExpr, \
    TypeName, FunctionDeclaration

_compared_attrs = ('name', 'op', 'value')


def equal(n1: AST, n2: AST) -> bool:
    """
    Identifiers are equal iff their names match.
    Any other pair is equal iff kinds, name/operator/literal attributes and arities match and all children are
    pairwise equal.
    """
    if n1 is n2:
        return True
    if type(n1) is not type(n2):
        return False
    if isinstance(n1, IdentifierExpr):
        return n1.name == n2.name
    if any(n1.attrs.get(a) != n2.attrs.get(a) for a in _compared_attrs):
        return False
    if len(n1.children) != len(n2.children):
        return False
    return all(equal(c1, c2) for c1, c2 in zip(n1.children, n2.children))


def is_trackable(ast: AST) -> bool:
    return isinstance(ast, (IdentifierExpr, MemberAccessExpr))


def collect_labels(ast: AST) -> List[AST]:
    """
    Trackable nodes below ast (ast itself if it is trackable), in source order.

    Calls contribute only their arguments, key/value elements only their value, types nothing.
    """
    labels = []
    _collect(ast, labels)
    return labels


def _collect(ast: AST, labels: List[AST]):
    if is_trackable(ast):
        labels.append(ast)
    elif isinstance(ast, FunctionCallExpr):
        for arg in ast.args:
            _collect(arg, labels)
    elif isinstance(ast, KeyValueExpr):
        _collect(ast.value, labels)
    elif isinstance(ast, (TypeName, FunctionDeclaration)):
        pass
    else:
        for c in ast.children:
            _collect(c, labels)


def root_identifier(ast: AST) -> AST:
    """Strip field accesses and index expressions: a.b[c].d -> a"""
    while isinstance(ast, (MemberAccessExpr, IndexExpr)):
        ast = ast.expr if isinstance(ast, MemberAccessExpr) else ast.arr
    return ast


def contains(labels: Iterable[AST], ast: AST) -> bool:
    return any(equal(l, ast) for l in labels)


class LabelSet:
    """
    Ordered list of labels which never contains two structurally equal entries.
    """

    def __init__(self, labels: Optional[Iterable[AST]] = None):
        self._labels: List[AST] = []
        if labels is not None:
            self.update(labels)

    def add(self, label: AST) -> bool:
        """Append label unless an equal label is present. Returns whether the set grew."""
        if label in self:
            return False
        self._labels.append(label)
        return True

    def update(self, labels: Iterable[AST]):
        for l in labels:
            self.add(l)

    def discard(self, label: AST) -> bool:
        """Remove the entry equal to label (if any). Returns whether an entry was removed."""
        for idx, l in enumerate(self._labels):
            if equal(l, label):
                del self._labels[idx]
                return True
        return False

    def copy(self) -> 'LabelSet':
        c = LabelSet()
        c._labels = list(self._labels)
        return c

    def __contains__(self, label: AST) -> bool:
        return contains(self._labels, label)

    def __iter__(self) -> Iterator[AST]:
        return iter(list(self._labels))

    def __len__(self) -> int:
        return len(self._labels)

    def __bool__(self) -> bool:
        return bool(self._labels)

    def __str__(self):
        return f'{{{", ".join(map(str, self._labels))}}}'
