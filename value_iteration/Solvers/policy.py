"""Policy/value container produced by the value iteration solvers."""

from typing import Hashable, Optional, Sequence, Tuple

import numpy as np

from ..errors import ConfigurationError
from ..Models.model import ordered_actions

State = Hashable
Action = Hashable


class ValueIterationPolicy:
    """
    Value function, optional Q-matrix and greedy policy of a model.

    Attributes
    ----------
    qmat : np.ndarray
        Q(s, a) values, shape (n_states, n_actions); shape (0, 0) when
        include_Q is False
    util : np.ndarray
        State values V(s), shape (n_states,)
    policy : np.ndarray
        Action index per state index; 0 (the first action) until solved
    action_map : list
        Maps an action index to the concrete action
    include_Q : bool
        Whether the Q-matrix is tracked
    mdp : object
        Model used to translate states into indices during queries
    iterations, residual, converged
        Statistics of the last solve that filled this container
    """

    def __init__(
        self,
        mdp,
        utility: Optional[Sequence[float]] = None,
        include_Q: bool = True,
    ):
        ns = len(mdp.states())
        na = len(mdp.actions())
        if utility is not None and len(utility) > 0:
            if len(utility) != ns:
                raise ConfigurationError(
                    f"Input utility dimension mismatch: got {len(utility)}, model has {ns} states"
                )
            self.util = np.array(utility, dtype=float)
        else:
            self.util = np.zeros(ns)
        self.action_map = ordered_actions(mdp)
        self.policy = np.zeros(ns, dtype=int)
        self.qmat = np.zeros((ns, na)) if include_Q else np.zeros((0, 0))
        self.include_Q = include_Q
        self.mdp = mdp
        self.iterations = 0
        self.residual = float("inf")
        self.converged = False

    @classmethod
    def from_solution(cls, mdp, qmat, util, policy) -> "ValueIterationPolicy":
        """Wrap already-solved Q, utility and policy arrays."""
        self = cls(mdp, include_Q=False)
        self.qmat = np.asarray(qmat, dtype=float)
        self.util = np.asarray(util, dtype=float)
        self.policy = np.asarray(policy, dtype=int)
        self.include_Q = True
        return self

    @classmethod
    def from_qmatrix(cls, mdp, qmat) -> "ValueIterationPolicy":
        """Derive utility and policy from a Q-matrix.

        np.argmax returns the first maximum, matching the solvers'
        first-seen tie-break.
        """
        q = np.asarray(qmat, dtype=float)
        return cls.from_solution(mdp, q, q.max(axis=1), np.argmax(q, axis=1))

    def components(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray, list]:
        """Return (qmat, util, policy, action_map)."""
        return self.qmat, self.util, self.policy, self.action_map

    def _state_index(self, s: State) -> int:
        try:
            i = self.mdp.state_index(s)
        except (KeyError, TypeError):
            raise IndexError(f"State not indexable by model: {s!r}") from None
        if not 0 <= i < len(self.util):
            raise IndexError(f"State index out of range: {i}")
        return i

    def action(self, s: State) -> Action:
        """Return the greedy action at state s."""
        return self.action_map[self.policy[self._state_index(s)]]

    def value(self, s: State) -> float:
        """Return V(s)."""
        return float(self.util[self._state_index(s)])

    def action_values(self, s: State) -> np.ndarray:
        """Return the Q-matrix row of state s."""
        if not self.include_Q:
            raise ValueError("Q-matrix not tracked (include_Q=False)")
        return self.qmat[self._state_index(s)]

    def __repr__(self) -> str:
        return (
            f"ValueIterationPolicy(n_states={len(self.util)}, "
            f"n_actions={len(self.action_map)}, include_Q={self.include_Q}, "
            f"iterations={self.iterations}, converged={self.converged})"
        )


def action(policy: ValueIterationPolicy, s: State) -> Action:
    return policy.action(s)


def value(policy: ValueIterationPolicy, s: State) -> float:
    return policy.value(s)
