"""Capability interface a model must expose to be solved."""

import numbers
from typing import Hashable, Iterable, List, Protocol, Sequence, runtime_checkable

from ..errors import ModelCapabilityError

State = Hashable
Action = Hashable

REQUIRED_METHODS = [
    'discount',
    'states',
    'actions',
    'state_index',
    'action_index',
    'legal_actions',
    'is_terminal',
    'transition',
    'reward',
]


@runtime_checkable
class MDPModel(Protocol):
    """
    Read-only queries the solvers make against a model.

    discount()             -> float in (0, 1]
    states()               -> ordered finite sequence of states
    actions()              -> ordered finite sequence of actions
    state_index(s)         -> int in [0, n_states)
    action_index(a)        -> int in [0, n_actions)
    legal_actions(s)       -> actions available at s
    is_terminal(s)         -> bool
    transition(s, a)       -> distribution over successors
    reward(s, a, s')       -> float

    The dense solver enumerates transition(s, a).items(); the sparse solver
    enumerates transition(s, a).nonzero_items().
    """

    def discount(self) -> float: ...
    def states(self) -> Sequence[State]: ...
    def actions(self) -> Sequence[Action]: ...
    def state_index(self, s: State) -> int: ...
    def action_index(self, a: Action) -> int: ...
    def legal_actions(self, s: State) -> Iterable[Action]: ...
    def is_terminal(self, s: State) -> bool: ...
    def transition(self, s: State, a: Action): ...
    def reward(self, s: State, a: Action, sp: State) -> float: ...


def _ordered(items: Sequence, index_fn, kind: str, model) -> List:
    n = len(items)
    ordered = [None] * n
    seen = [False] * n
    for x in items:
        i = index_fn(x)
        if not isinstance(i, numbers.Integral) or not 0 <= i < n or seen[i]:
            raise ModelCapabilityError(
                [f"{kind}_index must map {kind}s bijectively onto [0, {n}); got {i!r} for {x!r}"],
                model,
            )
        i = int(i)
        seen[i] = True
        ordered[i] = x
    return ordered


def ordered_states(model) -> List[State]:
    """Return states arranged so that result[state_index(s)] == s."""
    return _ordered(list(model.states()), model.state_index, "state", model)


def ordered_actions(model) -> List[Action]:
    """Return actions arranged so that result[action_index(a)] == a."""
    return _ordered(list(model.actions()), model.action_index, "action", model)


def check_requirements(model, sparse: bool = False) -> None:
    """Probe the model once and fail fast if a required query is missing.

    Parameters
    ----------
    model : object
        Model to check against the MDPModel capability set
    sparse : bool
        If True, require nonzero_items() on transition distributions,
        otherwise require items()

    Raises
    ------
    ModelCapabilityError
        Listing every capability the model lacks
    """
    missing = [
        f"{name}()" for name in REQUIRED_METHODS
        if not callable(getattr(model, name, None))
    ]
    if missing:
        raise ModelCapabilityError(missing, model)

    try:
        states = list(model.states())
        actions = list(model.actions())
    except NotImplementedError as e:
        raise ModelCapabilityError([f"state/action enumeration: {e}"], model) from e

    if not states:
        missing.append("states() must be non-empty")
    if not actions:
        missing.append("actions() must be non-empty")

    gamma = model.discount()
    if not 0.0 < gamma <= 1.0:
        missing.append(f"discount() must lie in (0, 1], got {gamma}")

    if missing:
        raise ModelCapabilityError(missing, model)

    # Probe the distribution type on the first non-terminal (s, a) pair
    for s in states:
        if model.is_terminal(s):
            continue
        try:
            legal = list(model.legal_actions(s))
        except NotImplementedError as e:
            raise ModelCapabilityError([f"legal_actions({s!r}): {e}"], model) from e
        if not legal:
            continue
        a = legal[0]
        try:
            dist = model.transition(s, a)
        except NotImplementedError as e:
            raise ModelCapabilityError([f"transition({s!r}, {a!r}): {e}"], model) from e

        needed = ['nonzero_items', 'pdf'] if sparse else ['items', 'pdf']
        for name in needed:
            if not callable(getattr(dist, name, None)):
                missing.append(f"{type(dist).__name__}.{name}()")
        break

    if missing:
        raise ModelCapabilityError(missing, model)
