"""Tests for distributions, the capability probe and tabular models."""

import numpy as np
import pytest

from ..errors import ModelCapabilityError
from .distributions import Categorical, SparseCategorical, Deterministic
from .model import MDPModel, check_requirements, ordered_states, ordered_actions
from .mdp import MDP
from .pomdp import POMDP


# ============================================================
# Distributions
# ============================================================

class TestDistributions:

    def test_categorical_keeps_zeros(self):
        """Test that dense categoricals keep zero-probability outcomes."""
        d = Categorical(["a", "b", "c"], [0.5, 0.0, 0.5])
        assert list(d.items()) == [("a", 0.5), ("b", 0.0), ("c", 0.5)]
        assert list(d.nonzero_items()) == [("a", 0.5), ("c", 0.5)]
        assert d.pdf("b") == 0.0
        assert d.pdf("missing") == 0.0
        assert len(d) == 3

    def test_sparse_categorical_drops_zeros(self):
        """Test that sparse categoricals drop zero-probability outcomes."""
        d = SparseCategorical(["a", "b", "c"], [0.5, 0.0, 0.5])
        assert d.support() == ["a", "c"]
        assert list(d.items()) == list(d.nonzero_items())
        assert d.pdf("c") == 0.5

    def test_from_dict(self):
        """Test building a sparse categorical from a mapping."""
        d = SparseCategorical.from_dict({1: 0.25, 2: 0.75, 3: 0})
        assert dict(d.items()) == {1: 0.25, 2: 0.75}

    def test_deterministic(self):
        """Test the single-outcome distribution."""
        d = Deterministic("x")
        assert list(d.nonzero_items()) == [("x", 1.0)]
        assert d.pdf("y") == 0.0

    def test_shape_mismatch(self):
        """Test rejection of mismatched values and probabilities."""
        with pytest.raises(ValueError):
            Categorical([1, 2], [1.0])


# ============================================================
# Tabular MDP
# ============================================================

def small_mdp(**kwargs):
    return MDP(
        state_space=["a", "b", "c"],
        enabled_actions={"a": ["left", "right"], "b": ["right"], "c": []},
        P={
            ("a", "left"): {"a": 1.0},
            ("a", "right"): {"b": 0.9, "a": 0.1},
            ("b", "right"): {"c": 1.0},
        },
        R={("b", "right", "c"): 5.0, ("a", "left"): -1.0},
        **{"gamma": 0.9, "terminals": frozenset(["c"]), **kwargs},
    )


class TestMDP:

    def test_indices(self):
        """Test state and action indexing."""
        mdp = small_mdp()
        assert [mdp.state_index(s) for s in mdp.states()] == [0, 1, 2]
        assert mdp.actions() == ["left", "right"]
        assert mdp.action_index("right") == 1

    def test_unknown_state(self):
        """Test that an unknown state raises IndexError."""
        with pytest.raises(IndexError):
            small_mdp().state_index("z")

    def test_rewards(self):
        """Test the (s, a, sp) then (s, a) reward lookup."""
        mdp = small_mdp()
        assert mdp.reward("b", "right", "c") == 5.0
        assert mdp.reward("a", "left", "a") == -1.0
        assert mdp.reward("a", "right", "b") == 0.0

    def test_sparse_transition(self):
        """Test the default sparse transition type."""
        dist = small_mdp().transition("a", "right")
        assert isinstance(dist, SparseCategorical)
        assert dist.pdf("b") == 0.9

    def test_dense_transition(self):
        """Test dense transitions over the whole state space."""
        mdp = small_mdp(dense_transitions=True)
        dist = mdp.transition("a", "right")
        assert dist.support() == ["a", "b", "c"]
        assert np.allclose(dist.probs, [0.1, 0.9, 0.0])

    def test_missing_row_is_empty(self):
        """Test that a missing transition row is an empty distribution."""
        assert list(small_mdp().transition("b", "left").items()) == []

    def test_with_dense_transitions(self):
        """Test copying a model with dense transitions."""
        dense = small_mdp().with_dense_transitions()
        assert dense.dense_transitions
        assert dense.actions() == ["left", "right"]
        assert dense.is_terminal("c")

    def test_satisfies_protocol(self):
        """Test that MDP satisfies the MDPModel protocol."""
        assert isinstance(small_mdp(), MDPModel)


class TestPOMDP:

    def test_core(self):
        """Test the fully observable core of a POMDP."""
        pomdp = POMDP(
            state_space=[0, 1],
            observations=["o"],
            action_space=["a"],
            T={(0, "a"): {1: 1.0}},
            Z={0: {"o": 1.0}, 1: {"o": 1.0}},
            R={(0, "a"): 2.0},
            gamma=0.5,
            terminals=frozenset([1]),
        )
        core = pomdp.underlying_mdp()
        assert core.states() == [0, 1]
        assert core.legal_actions(0) == ["a"]
        assert pomdp.reward(0, "a", 1) == 2.0
        assert pomdp.observation(0) == {"o": 1.0}
        assert pomdp.discount() == 0.5
        check_requirements(pomdp, sparse=True)


# ============================================================
# Capability probe
# ============================================================

class BadIndexModel:
    def discount(self): return 0.9
    def states(self): return ["x", "y"]
    def actions(self): return ["a"]
    def state_index(self, s): return 0
    def action_index(self, a): return 0
    def legal_actions(self, s): return ["a"]
    def is_terminal(self, s): return False
    def transition(self, s, a): return Deterministic(s)
    def reward(self, s, a, sp): return 0.0


class UnenumerableModel(BadIndexModel):
    def state_index(self, s): return ["x", "y"].index(s)
    def legal_actions(self, s): raise NotImplementedError("actions at a state")


class TestCapabilityProbe:

    def test_accepts_mdp(self):
        """Test that a tabular MDP passes both checks."""
        check_requirements(small_mdp())
        check_requirements(small_mdp(), sparse=True)

    def test_missing_methods_listed(self):
        """Test that every missing capability is listed."""
        class Empty:
            pass
        with pytest.raises(ModelCapabilityError) as exc:
            check_requirements(Empty())
        assert len(exc.value.missing) == 9

    def test_discount_out_of_range(self):
        """Test rejection of a discount above one."""
        with pytest.raises(ModelCapabilityError):
            check_requirements(small_mdp(gamma=1.5))

    def test_legal_actions_not_implemented(self):
        """Test that NotImplementedError becomes a capability error."""
        with pytest.raises(ModelCapabilityError):
            check_requirements(UnenumerableModel())

    def test_index_not_bijective(self):
        """Test rejection of a non-bijective state index."""
        with pytest.raises(ModelCapabilityError):
            ordered_states(BadIndexModel())

    def test_ordered(self):
        """Test ordering states and actions by index."""
        mdp = small_mdp(action_space=["right", "left"])
        assert ordered_states(mdp) == ["a", "b", "c"]
        assert ordered_actions(mdp) == ["right", "left"]

    def test_ordered_numpy_indices(self):
        """Test that numpy integer indices are accepted and normalized."""
        class NumpyIndexMDP(MDP):
            def state_index(self, s):
                return np.int64(super().state_index(s))

            def action_index(self, a):
                return np.int32(super().action_index(a))

        mdp = NumpyIndexMDP(**{f: getattr(small_mdp(), f) for f in (
            "state_space", "enabled_actions", "P", "R", "gamma", "terminals")})
        assert ordered_states(mdp) == ["a", "b", "c"]
        assert ordered_actions(mdp) == ["left", "right"]
        check_requirements(mdp, sparse=True)

    @pytest.mark.parametrize("index", [1.0, "0", None])
    def test_non_integer_index(self, index):
        """Test rejection of indices that are not integers."""
        class OddIndexModel(BadIndexModel):
            def states(self): return ["x"]
            def state_index(self, s): return index
        with pytest.raises(ModelCapabilityError):
            ordered_states(OddIndexModel())
