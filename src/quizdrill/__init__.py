"""
quizdrill

Self-study quiz tool: author question/answer pairs, run timed test
sessions and get local, similarity-based answer evaluation.
"""

__version__ = "1.0.0"
