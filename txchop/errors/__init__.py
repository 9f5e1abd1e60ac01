"""
This package contains the exceptions which may be publicly raised by txchop.

==========
Submodules
==========
* :py:mod:`.exceptions`: Exception hierarchy
"""
