"""
Example tree documents (in :py:mod:`.code`) and their expected analysis results, used by the tests.
"""
