"""
This package contains modules implementing static analysis.

==========
Submodules
==========
* :py:mod:`.call_graph`: Compute call sites and sets of transitively called functions for each function.
* :py:mod:`.candidate_detector`: Determine which statements of a scope do not depend on earlier control flow.
* :py:mod:`.chain_expander`: Expand every candidate into the chain of statements it derives its values from.
* :py:mod:`.dependency_walker`: Resolve labels by walking backward over statement sequences.
* :py:mod:`.equivalence`: Structural equivalence of nodes and label sets.
* :py:mod:`.ledger_access`: Determine which parameters flow into ledger reads and writes (fixed point over the call graph).
"""
