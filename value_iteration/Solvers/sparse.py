"""Sparse value iteration.

Same contract as the dense solver in vanilla.py, but transitions are
enumerated once through nonzero_items() into per-action CSR arrays and
every sweep only touches nonzero successor entries.
"""

import time
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import scipy.sparse as sp
from tqdm import trange

from ..Models.model import check_requirements, ordered_actions, ordered_states
from .policy import ValueIterationPolicy
from .vanilla import ValueIterationSolver, prepare_policy, report_iteration


@dataclass
class SparseValueIterationSolver(ValueIterationSolver):
    """Configuration for sparse value iteration (same options as the dense solver)."""


class TransitionTable:
    """
    Compressed transition representation of a model.

    indptr, indices, probs, rewards
             : per action index, CSR row pointers, successor indices,
               probabilities and per-entry rewards reward(s_i, a, s_j);
               entries of a row are ordered by successor index
    legal    : per state index, legal action indices in model order
    terminal : boolean mask of terminal states

    Rows of terminal states and of actions not legal at a state are empty.
    """

    def __init__(self, indptr, indices, probs, rewards, legal: List[List[int]], terminal: np.ndarray):
        self.indptr = indptr
        self.indices = indices
        self.probs = probs
        self.rewards = rewards
        self.legal = legal
        self.terminal = terminal

    @property
    def n_states(self) -> int:
        return len(self.terminal)

    @property
    def n_actions(self) -> int:
        return len(self.indptr)

    @property
    def T(self) -> List[sp.csr_matrix]:
        """Per-action (n_states x n_states) CSR matrices, T[a][i, j] = P(s_j | s_i, a)."""
        n = self.n_states
        return [
            sp.csr_matrix(
                (np.array(self.probs[a], dtype=float),
                 np.array(self.indices[a], dtype=int),
                 np.array(self.indptr[a], dtype=int)),
                shape=(n, n),
            )
            for a in range(self.n_actions)
        ]

    def nnz(self) -> int:
        """Total number of stored nonzero transition entries."""
        return sum(len(p) for p in self.probs)

    def expected_rewards(self) -> np.ndarray:
        """Return R[i, a] = sum_j P(s_j | s_i, a) * reward(s_i, a, s_j)."""
        R = np.zeros((self.n_states, self.n_actions))
        for a in range(self.n_actions):
            indptr, probs, rewards = self.indptr[a], self.probs[a], self.rewards[a]
            for i in range(self.n_states):
                for k in range(indptr[i], indptr[i + 1]):
                    R[i, a] += probs[k] * rewards[k]
        return R

    @classmethod
    def from_model(cls, mdp, verbose: bool = False) -> "TransitionTable":
        """Enumerate the nonzero transitions of every non-terminal (s, a) pair."""
        states = ordered_states(mdp)
        actions = ordered_actions(mdp)
        ns = len(states)
        na = len(actions)

        indptr = [[0] for _ in range(na)]
        indices = [[] for _ in range(na)]
        probs = [[] for _ in range(na)]
        rewards = [[] for _ in range(na)]
        legal: List[List[int]] = []
        terminal = np.zeros(ns, dtype=bool)

        for si in trange(ns, desc="Building transition table", disable=not verbose):
            s = states[si]
            if mdp.is_terminal(s):
                terminal[si] = True
                legal.append([])
            else:
                state_legal = []
                for a in mdp.legal_actions(s):
                    ai = mdp.action_index(a)
                    state_legal.append(ai)
                    entries = [
                        (mdp.state_index(sp_), float(p), float(mdp.reward(s, a, sp_)))
                        for sp_, p in mdp.transition(s, a).nonzero_items()
                        if p != 0.0
                    ]
                    # Successor-index order, the order a dense distribution enumerates
                    entries.sort(key=lambda e: e[0])
                    for j, p, r in entries:
                        indices[ai].append(j)
                        probs[ai].append(p)
                        rewards[ai].append(r)
                legal.append(state_legal)

            for ai in range(na):
                indptr[ai].append(len(indices[ai]))

        return cls(indptr, indices, probs, rewards, legal, terminal)


def solve(
    solver: SparseValueIterationSolver,
    mdp,
    policy: Optional[ValueIterationPolicy] = None,
    verbose: Optional[bool] = None,
) -> ValueIterationPolicy:
    """Run value iteration over nonzero transition entries only.

    Sweep order, in-place updates, first-seen tie-break and the stopping
    rule match vanilla.solve. Each entry contributes p * (r + discount * V)
    in successor-index order, so on a model whose dense distributions list
    states in index order both solvers perform the same floating-point
    operations and break exact ties identically.
    """
    check_requirements(mdp, sparse=True)
    policy = prepare_policy(solver, mdp, policy)
    if verbose is None:
        verbose = solver.verbose

    max_iterations = solver.max_iterations
    belres = solver.belman_residual_tolerance
    discount_factor = mdp.discount()

    table = TransitionTable.from_model(mdp, verbose=verbose)
    rows = list(zip(table.indptr, table.indices, table.probs, table.rewards))

    util = policy.util
    qmat = policy.qmat
    include_Q = policy.include_Q
    pol = policy.policy

    total_time = 0.0
    residual = float("inf")
    iterations = 0

    for i in range(1, max_iterations + 1):
        residual = 0.0
        start = time.perf_counter()

        for istate in range(table.n_states):
            if table.terminal[istate]:
                util[istate] = 0.0
                pol[istate] = 0
                continue

            old_util = util[istate]
            max_util = -float("inf")
            for iaction in table.legal[istate]:
                indptr, indices, probs, rewards = rows[iaction]
                u = 0.0
                for k in range(indptr[istate], indptr[istate + 1]):
                    u += probs[k] * (rewards[k] + discount_factor * util[indices[k]])
                if u > max_util:
                    max_util = u
                    pol[istate] = iaction
                if include_Q:
                    qmat[istate, iaction] = u

            if max_util == -float("inf"):
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
