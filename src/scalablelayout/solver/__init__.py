"""
The SOLVER layer turns formula text into Expression trees and numbers.

parse() runs once per formula; evaluate() runs on every render pass.
"""
from scalablelayout.solver.evaluator import evaluate
from scalablelayout.solver.parser import parse

__all__ = ["parse", "evaluate"]
