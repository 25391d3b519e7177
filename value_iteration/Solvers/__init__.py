"""Value iteration solvers and the policy container they fill."""

from typing import Optional

from .policy import ValueIterationPolicy, action, value
from .vanilla import ValueIterationSolver, create_policy
from .vanilla import solve as solve_dense
from .sparse import SparseValueIterationSolver, TransitionTable
from .sparse import solve as solve_sparse


def solve(
    solver: ValueIterationSolver,
    mdp,
    policy: Optional[ValueIterationPolicy] = None,
    verbose: Optional[bool] = None,
) -> ValueIterationPolicy:
    """Dispatch to the dense or sparse solver based on the configuration type."""
    if isinstance(solver, SparseValueIterationSolver):
        return solve_sparse(solver, mdp, policy, verbose=verbose)
    return solve_dense(solver, mdp, policy, verbose=verbose)


__all__ = [
    'ValueIterationPolicy', 'action', 'value',
    'ValueIterationSolver', 'create_policy', 'solve_dense',
    'SparseValueIterationSolver', 'TransitionTable', 'solve_sparse',
    'solve',
]
