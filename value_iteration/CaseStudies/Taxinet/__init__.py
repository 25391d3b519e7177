"""TaxiNet runway dynamics as an MDP."""

from .taxinet import (
    taxinet_states,
    taxinet_actions,
    taxinet_next_state,
    taxinet_safe,
    taxinet_dynamics,
    taxinet_dynamics_prob,
    FAIL,
)

__all__ = [
    'taxinet_states',
    'taxinet_actions',
    'taxinet_next_state',
    'taxinet_safe',
    'taxinet_dynamics',
    'taxinet_dynamics_prob',
    'FAIL',
]
