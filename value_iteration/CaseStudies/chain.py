"""Two-state chain: loop for a reward or walk into a terminal state."""

from ..Models import MDP


def two_state_chain(discount: float = 0.9, dense: bool = False) -> MDP:
    """
    State 0 offers "stay" (reward 1, loops to itself) and "go" (reward 0,
    moves to state 1). State 1 is terminal.

    V(0) = 1 / (1 - discount) under the optimal policy "stay".
    """
    return MDP(
        state_space=[0, 1],
        enabled_actions={0: ["stay", "go"], 1: ["stay", "go"]},
        P={
            (0, "stay"): {0: 1.0},
            (0, "go"): {1: 1.0},
        },
        R={(0, "stay", 0): 1.0},
        gamma=discount,
        terminals=frozenset([1]),
        dense_transitions=dense,
    )
