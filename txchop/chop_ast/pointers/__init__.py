"""
This package contains functionality for linking nodes of the tree.

==========
Submodules
==========
* :py:mod:`.parent_setter`: Sets parent, enclosing statement and enclosing function of every node
"""
