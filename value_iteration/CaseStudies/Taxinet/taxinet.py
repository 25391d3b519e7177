"""TaxiNet case study: keeping an aircraft on the runway centerline."""

from typing import Dict, Hashable, List, Tuple

from ...Models import MDP

State = Hashable
FAIL = "FAIL"

# State space bounds
HE_HIGH = 1   # Heading error range: -1 to 1
CTE_HIGH = 2  # Cross-track error range: -2 to 2

# Reward for each step that stays on the runway
SAFE_STEP_REWARD = 1.0


def taxinet_he_states() -> List[int]:
    """Return heading error state values."""
    return list(range(-HE_HIGH, HE_HIGH + 1))


def taxinet_cte_states() -> List[int]:
    """Return cross-track error state values."""
    return list(range(-CTE_HIGH, CTE_HIGH + 1))


def taxinet_states(with_fail: bool = False) -> List[State]:
    """Return all TaxiNet states as (cte, he) tuples."""
    states = [
        (cte, he)
        for cte in taxinet_cte_states()
        for he in taxinet_he_states()
    ]
    if with_fail:
        states.append(FAIL)
    return states


def taxinet_actions() -> Dict[State, List[int]]:
    """Return action mapping: state -> list of enabled actions."""
    return {s: list(range(-1, 2)) for s in taxinet_states()}


def taxinet_next_state(state: State, action: int) -> Tuple[int, int]:
    """Compute next state from current state and action."""
    if state == FAIL:
        return state
    cte, he = state
    return cte + he + action, he + action


def taxinet_safe(state: State) -> bool:
    """Check if state is safe (within bounds)."""
    if state == FAIL:
        return False
    cte, he = state
    return abs(he) <= HE_HIGH and abs(cte) <= CTE_HIGH


def _taxinet_rewards(P) -> Dict[tuple, float]:
    return {
        (s, a, sp): SAFE_STEP_REWARD
        for (s, a), row in P.items()
        for sp in row
        if sp != FAIL
    }


def taxinet_dynamics_prob(error: float = 0.1, discount: float = 0.95) -> MDP:
    """
    Create MDP with stochastic dynamics.

    Each transition row lists every state, most with probability 0, so the
    model is a natural test of zero skipping.

    Parameters
    ----------
    error : float
        Probability of deviation from expected next state
    discount : float
        Discount factor
    """
    states = taxinet_states(with_fail=False)
    actions = taxinet_actions()

    P = {}
    for cte, he in states:
        for a in actions[(cte, he)]:
            new_state = taxinet_next_state((cte, he), a)
            P[((cte, he), a)] = {s: 0 for s in states}
            P[((cte, he), a)][FAIL] = 0

            for i in [-1, 0, 1]:
                ns = (new_state[0] + i, new_state[1])
                prob = abs(i) * error + (1 - abs(i)) * (1 - 2 * error)
                if not taxinet_safe(ns):
                    P[((cte, he), a)][FAIL] += prob
                else:
                    P[((cte, he), a)][ns] = prob

    actions[FAIL] = [-1, 0, 1]
    states.append(FAIL)
    return MDP(states, actions, P, _taxinet_rewards(P), discount, frozenset([FAIL]))


def taxinet_dynamics(discount: float = 0.95) -> MDP:
    """Create MDP with deterministic dynamics."""
    states = taxinet_states(with_fail=False)
    actions = taxinet_actions()

    P = {}
    for cte, he in states:
        for a in actions[(cte, he)]:
            new_state = taxinet_next_state((cte, he), a)
            if not taxinet_safe(new_state):
                P[((cte, he), a)] = {FAIL: 1}
            else:
                P[((cte, he), a)] = {new_state: 1}

    actions[FAIL] = [-1, 0, 1]
    states.append(FAIL)
    return MDP(states, actions, P, _taxinet_rewards(P), discount, frozenset([FAIL]))
