"""Tabular Markov Decision Process model."""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Hashable, List, Optional, Tuple

from .distributions import Categorical, SparseCategorical

State = Hashable
Action = Hashable


@dataclass
class MDP:
    """
    Tabular Markov Decision Process.

    state_space      : list of all states (list order defines state indices)
    enabled_actions  : mapping from state -> list of enabled actions
    P                : mapping (s, a) -> {s' -> P(s' | s, a)}
    R                : mapping (s, a, s') -> reward, or (s, a) -> reward
    gamma            : discount factor in (0, 1]
    terminals        : absorbing states whose value is fixed at zero
    action_space     : ordered list of all actions; defaults to the enabled
                       actions in order of first appearance
    dense_transitions: if True, transition() returns a Categorical over the
                       whole state space instead of a SparseCategorical

    Missing P rows yield an empty distribution and missing R entries a
    reward of 0.
    """
    state_space: List[State]
    enabled_actions: Dict[State, List[Action]]
    P: Dict[Tuple[State, Action], Dict[State, float]]
    R: Dict[tuple, float] = field(default_factory=dict)
    gamma: float = 0.95
    terminals: FrozenSet[State] = frozenset()
    action_space: Optional[List[Action]] = None
    dense_transitions: bool = False

    def __post_init__(self):
        self.terminals = frozenset(self.terminals)
        if self.action_space is None:
            seen = {}
            for s in self.state_space:
                for a in self.enabled_actions.get(s, []):
                    seen.setdefault(a, None)
            self.action_space = list(seen)
        self._state_idx = {s: i for i, s in enumerate(self.state_space)}
        self._action_idx = {a: i for i, a in enumerate(self.action_space)}

    def discount(self) -> float:
        return self.gamma

    def states(self) -> List[State]:
        return self.state_space

    def actions(self) -> List[Action]:
        return self.action_space

    def state_index(self, s: State) -> int:
        try:
            return self._state_idx[s]
        except (KeyError, TypeError):
            raise IndexError(f"Unknown state: {s!r}") from None

    def action_index(self, a: Action) -> int:
        try:
            return self._action_idx[a]
        except (KeyError, TypeError):
            raise IndexError(f"Unknown action: {a!r}") from None

    def legal_actions(self, s: State) -> List[Action]:
        return self.enabled_actions.get(s, self.action_space)

    def is_terminal(self, s: State) -> bool:
        return s in self.terminals

    def transition(self, s: State, a: Action) -> Categorical:
        row = self.P.get((s, a), {})
        if self.dense_transitions:
            probs = [0.0] * len(self.state_space)
            for sp, p in row.items():
                probs[self.state_index(sp)] += p
            return Categorical(self.state_space, probs)
        return SparseCategorical.from_dict(row)

    def reward(self, s: State, a: Action, sp: State) -> float:
        r = self.R.get((s, a, sp))
        if r is None:
            r = self.R.get((s, a), 0.0)
        return float(r)

    def with_dense_transitions(self, dense: bool = True) -> "MDP":
        """Return a copy of this MDP using the requested transition type."""
        return MDP(
            self.state_space, self.enabled_actions, self.P, self.R,
            self.gamma, self.terminals, list(self.action_space), dense,
        )
