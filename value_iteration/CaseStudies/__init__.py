"""Example models for the value iteration solvers."""

from .chain import two_state_chain
from .GridWorld import SimpleGridWorld
from .Taxinet import taxinet_dynamics, taxinet_dynamics_prob

__all__ = ['two_state_chain', 'SimpleGridWorld', 'taxinet_dynamics', 'taxinet_dynamics_prob']
