"""
This package contains several basic AST visitors.

==========
Submodules
==========
* :py:mod:`.function_visitor`: Only visits function declarations (mode node-or-children).
* :py:mod:`.visitor`: AST visitor base class
"""
