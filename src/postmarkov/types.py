"""
Core types for the Markov chain.
"""

from .token import Token

type Count = int
type Transitions = dict[Token, Count]
type TransitionTable = dict[Token, Transitions]
