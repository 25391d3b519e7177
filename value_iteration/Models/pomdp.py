"""Standard Partially Observable Markov Decision Process."""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Hashable, List, Tuple

from .mdp import MDP

State = Hashable
Action = Hashable
Observation = Hashable


@dataclass
class POMDP:
    """
    Standard Partially Observable Markov Decision Process.

    state_space  : list of states
    observations : list of possible observations
    action_space : list of actions (global, every action enabled everywhere)
    T            : (s, a) -> {s' -> P(s' | s, a)}
    Z            : s -> {o -> P(o | s)}
    R            : (s, a, s') -> reward, or (s, a) -> reward
    gamma        : discount factor in (0, 1]
    terminals    : absorbing states

    The capability methods expose the fully observable core, so a POMDP can
    be handed to the value iteration solvers directly. Observations play no
    part in the solve.
    """
    state_space: List[State]
    observations: List[Observation]
    action_space: List[Action]
    T: Dict[Tuple[State, Action], Dict[State, float]]
    Z: Dict[State, Dict[Observation, float]]
    R: Dict[tuple, float] = field(default_factory=dict)
    gamma: float = 0.95
    terminals: FrozenSet[State] = frozenset()

    def __post_init__(self):
        self.terminals = frozenset(self.terminals)
        self._core = None

    def underlying_mdp(self) -> MDP:
        """Return the fully observable core as an MDP."""
        if self._core is None:
            self._core = MDP(
                state_space=self.state_space,
                enabled_actions={s: self.action_space for s in self.state_space},
                P=self.T,
                R=self.R,
                gamma=self.gamma,
                terminals=self.terminals,
                action_space=list(self.action_space),
            )
        return self._core

    def observation(self, s: State) -> Dict[Observation, float]:
        """Return the observation distribution emitted in state s."""
        return self.Z.get(s, {})

    def discount(self) -> float:
        return self.gamma

    def states(self) -> List[State]:
        return self.state_space

    def actions(self) -> List[Action]:
        return self.action_space

    def state_index(self, s: State) -> int:
        return self.underlying_mdp().state_index(s)

    def action_index(self, a: Action) -> int:
        return self.underlying_mdp().action_index(a)

    def legal_actions(self, s: State) -> List[Action]:
        return self.action_space

    def is_terminal(self, s: State) -> bool:
        return s in self.terminals

    def transition(self, s: State, a: Action):
        return self.underlying_mdp().transition(s, a)

    def reward(self, s: State, a: Action, sp: State) -> float:
        return self.underlying_mdp().reward(s, a, sp)
