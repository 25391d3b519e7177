"""GridWorld case study: stochastic navigation to rewarding cells."""

from typing import Dict, Hashable, List, Tuple

from ...Models import Categorical, SparseCategorical, Deterministic

State = Hashable
Cell = Tuple[int, int]
TERMINAL = "TERMINAL"

ACTIONS = ["up", "down", "left", "right"]
DIRECTIONS: Dict[str, Cell] = {
    "up": (0, 1),
    "down": (0, -1),
    "left": (-1, 0),
    "right": (1, 0),
}

DEFAULT_REWARDS: Dict[Cell, float] = {
    (4, 3): -10.0,
    (4, 6): -5.0,
    (9, 3): 10.0,
    (8, 8): 3.0,
}


def gridworld_cells(size: Tuple[int, int]) -> List[Cell]:
    """Return all (x, y) cells, 1-indexed, column-major."""
    nx, ny = size
    return [(x, y) for x in range(1, nx + 1) for y in range(1, ny + 1)]


def gridworld_in_bounds(size: Tuple[int, int], cell: Cell) -> bool:
    """Check if cell lies on the grid."""
    x, y = cell
    return 1 <= x <= size[0] and 1 <= y <= size[1]


def gridworld_move(cell: Cell, direction: str) -> Cell:
    """Compute the cell reached by moving one step in direction."""
    dx, dy = DIRECTIONS[direction]
    return cell[0] + dx, cell[1] + dy


class SimpleGridWorld:
    """
    Grid world MDP.

    The agent moves in the intended direction with probability tprob and in
    each other direction with probability (1 - tprob) / 3. Moves off the grid
    leave it in place. Cells listed in rewards pay their reward and then
    move to the absorbing TERMINAL state under every action.

    Parameters
    ----------
    size : tuple
        Grid dimensions (nx, ny)
    rewards : dict
        Cell -> reward collected when leaving that cell
    tprob : float
        Probability of moving in the intended direction
    discount : float
        Discount factor
    dense : bool
        If True, transition() returns Categorical over every state,
        zeros included; otherwise SparseCategorical
    """

    def __init__(
        self,
        size: Tuple[int, int] = (10, 10),
        rewards: Dict[Cell, float] = None,
        tprob: float = 0.7,
        discount: float = 0.95,
        dense: bool = False,
    ):
        self.size = size
        self.rewards = dict(DEFAULT_REWARDS if rewards is None else rewards)
        self.tprob = tprob
        self.gamma = discount
        self.dense = dense

        self._states: List[State] = gridworld_cells(size) + [TERMINAL]
        self._state_idx = {s: i for i, s in enumerate(self._states)}
        self._action_idx = {a: i for i, a in enumerate(ACTIONS)}

    def discount(self) -> float:
        return self.gamma

    def states(self) -> List[State]:
        return self._states

    def actions(self) -> List[str]:
        return ACTIONS

    def state_index(self, s: State) -> int:
        try:
            return self._state_idx[s]
        except (KeyError, TypeError):
            raise IndexError(f"Unknown grid world state: {s!r}") from None

    def action_index(self, a: str) -> int:
        return self._action_idx[a]

    def legal_actions(self, s: State) -> List[str]:
        return ACTIONS

    def is_terminal(self, s: State) -> bool:
        return s == TERMINAL

    def _successors(self, s: State, a: str) -> Dict[State, float]:
        if s == TERMINAL or s in self.rewards:
            return {TERMINAL: 1.0}

        slip = (1.0 - self.tprob) / (len(ACTIONS) - 1)
        dist: Dict[State, float] = {}
        for direction in ACTIONS:
            p = self.tprob if direction == a else slip
            dest = gridworld_move(s, direction)
            if not gridworld_in_bounds(self.size, dest):
                dest = s
            dist[dest] = dist.get(dest, 0.0) + p
        return dist

    def transition(self, s: State, a: str):
        succ = self._successors(s, a)
        if self.dense:
            probs = [0.0] * len(self._states)
            for sp, p in succ.items():
                probs[self._state_idx[sp]] = p
            return Categorical(self._states, probs)
        if len(succ) == 1:
            return Deterministic(next(iter(succ)))
        return SparseCategorical.from_dict(succ)

    def reward(self, s: State, a: str, sp: State) -> float:
        return self.rewards.get(s, 0.0)
