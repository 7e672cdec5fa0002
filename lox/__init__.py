"""
A tree-walking interpreter for Lox: resolver, environments, and evaluator.
"""
