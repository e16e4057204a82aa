"""
AI module for tetrisai.
Contains the board evaluation heuristic, the placement search and autoplay.
"""

from .evaluation import BoardEvaluator, HeuristicWeights
from .search import PlacementSearch, SearchResult, plan_moves
from .autoplay import AutoPlayer

__all__ = ['BoardEvaluator', 'HeuristicWeights', 'PlacementSearch', 'SearchResult',
           'plan_moves', 'AutoPlayer']
