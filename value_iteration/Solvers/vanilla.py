"""Dense value iteration.

Example
-------
    mdp = SimpleGridWorld(size=(10, 10))
    solver = ValueIterationSolver(max_iterations=40, belman_residual_tolerance=1e-3)
    policy = ValueIterationPolicy(mdp)
    solve(solver, mdp, policy, verbose=True)
"""

import time
from dataclasses import dataclass
from typing import Optional, Sequence

from ..errors import ConfigurationError
from ..Models.model import check_requirements, ordered_states
from .policy import ValueIterationPolicy


@dataclass
class ValueIterationSolver:
    """Configuration for value iteration.

    max_iterations            : hard cap on outer sweeps
    belman_residual_tolerance : stop once the largest per-state change in a
                                sweep falls below this
    include_q_matrix          : allocate and fill the Q-matrix
    initial_value             : warm-start utility, one entry per state
    verbose                   : print one progress line per sweep
    """
    max_iterations: int = 100
    belman_residual_tolerance: float = 1e-3
    include_q_matrix: bool = True
    initial_value: Optional[Sequence[float]] = None
    verbose: bool = False

    def __post_init__(self):
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
            raise ConfigurationError(
                f"max_iterations must be an integer, got {self.max_iterations!r}"
            )
        if self.max_iterations < 1:
            raise ConfigurationError(
                f"max_iterations must be positive, got {self.max_iterations}"
            )
        if not self.belman_residual_tolerance > 0:
            raise ConfigurationError(
                f"belman_residual_tolerance must be positive, got {self.belman_residual_tolerance}"
            )


def create_policy(solver: ValueIterationSolver, mdp) -> ValueIterationPolicy:
    """Return a fresh container for the model, honoring the solver options."""
    return ValueIterationPolicy(
        mdp,
        utility=solver.initial_value,
        include_Q=solver.include_q_matrix,
    )


def prepare_policy(solver, mdp, policy: Optional[ValueIterationPolicy]) -> ValueIterationPolicy:
    """Create a container, or validate and reset a supplied one for warm-starting."""
    if policy is None:
        return create_policy(solver, mdp)

    ns = len(mdp.states())
    if len(policy.util) != ns or len(policy.policy) != ns:
        raise ConfigurationError(
            f"Policy dimension mismatch: container has {len(policy.util)} states, model has {ns}"
        )
    na = len(mdp.actions())
    if len(policy.action_map) != na:
        raise ConfigurationError(
            f"Policy dimension mismatch: container has {len(policy.action_map)} actions, model has {na}"
        )
    if policy.include_Q and policy.qmat.shape != (ns, na):
        raise ConfigurationError(
            f"Q-matrix shape {policy.qmat.shape} does not match model ({ns}, {na})"
        )
    if policy.include_Q:
        policy.qmat[:] = 0.0
    return policy


def report_iteration(i: int, residual: float, iter_time: float, total_time: float):
    print(
        f"[Iteration {i}] residual: {residual:10.3G} | "
        f"iteration runtime: {iter_time * 1000.0:10.3f} ms, ({total_time:10.3G} s total)"
    )


def solve(
    solver: ValueIterationSolver,
    mdp,
    policy: Optional[ValueIterationPolicy] = None,
    verbose: Optional[bool] = None,
) -> ValueIterationPolicy:
    """Run value iteration, enumerating full transition distributions.

    Sweeps update the utility in place, so states later in the enumeration
    see values already refreshed earlier in the same sweep.

    Parameters
    ----------
    solver : ValueIterationSolver
        Solver configuration
    mdp : MDPModel
        Model exposing the capability set; transition distributions must
        support items()
    policy : ValueIterationPolicy, optional
        Pre-allocated container; its utility is used as the warm start
    verbose : bool, optional
        Overrides solver.verbose

    Returns
    -------
    ValueIterationPolicy
        The filled container. Running out of iterations is not an error;
        check policy.converged and policy.residual.
    """
    check_requirements(mdp, sparse=False)
    policy = prepare_policy(solver, mdp, policy)
    if verbose is None:
        verbose = solver.verbose

    max_iterations = solver.max_iterations
    belres = solver.belman_residual_tolerance
    discount_factor = mdp.discount()

    util = policy.util
    qmat = policy.qmat
    include_Q = policy.include_Q
    pol = policy.policy

    total_time = 0.0
    states = ordered_states(mdp)
    residual = float("inf")
    iterations = 0

    for i in range(1, max_iterations + 1):
        residual = 0.0
        start = time.perf_counter()

        for istate, s in enumerate(states):
            if mdp.is_terminal(s):
                util[istate] = 0.0
                pol[istate] = 0
                continue

            old_util = util[istate]
            max_util = -float("inf")
            for a in mdp.legal_actions(s):
                iaction = mdp.action_index(a)
                dist = mdp.transition(s, a)
                u = 0.0
                for sp, p in dist.items():
                    if p == 0.0:
                        continue
                    r = mdp.reward(s, a, sp)
                    u += p * (r + discount_factor * util[mdp.state_index(sp)])
                if u > max_util:
                    max_util = u
                    pol[istate] = iaction
                if include_Q:
                    qmat[istate, iaction] = u

            if max_util == -float("inf"):
                # No enabled actions
                max_util = 0.0
                pol[istate] = 0
            util[istate] = max_util
            diff = abs(max_util - old_util)
            if diff > residual:
                residual = diff

        iter_time = time.perf_counter() - start
        total_time += iter_time
        iterations = i
        if verbose:
            report_iteration(i, residual, iter_time, total_time)
        if residual < belres:
            break

    policy.iterations = iterations
    policy.residual = residual
    policy.converged = residual < belres
    return policy
