"""Grid world navigation MDP."""

from .gridworld import SimpleGridWorld, TERMINAL, ACTIONS, gridworld_cells

__all__ = ['SimpleGridWorld', 'TERMINAL', 'ACTIONS', 'gridworld_cells']
