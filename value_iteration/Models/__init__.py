"""Model interface, distributions and tabular MDP/POMDP structures."""

from .distributions import Categorical, SparseCategorical, Deterministic
from .model import MDPModel, check_requirements, ordered_states, ordered_actions
from .mdp import MDP
from .pomdp import POMDP

__all__ = [
    'Categorical', 'SparseCategorical', 'Deterministic',
    'MDPModel', 'check_requirements', 'ordered_states', 'ordered_actions',
    'MDP',
    'POMDP',
]
