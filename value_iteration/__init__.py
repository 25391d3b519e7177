"""
Value Iteration Library

Dynamic-programming solvers for finite Markov decision processes and the
fully observable core of POMDPs.

Modules:
- Models: Capability interface, distributions, tabular MDP and POMDP
- Solvers: Dense and sparse value iteration, policy container
- CaseStudies: Example models (GridWorld, two-state chain)
"""

from . import Models
from . import Solvers
from . import CaseStudies
from .errors import ConfigurationError, ModelCapabilityError

__all__ = ['Models', 'Solvers', 'CaseStudies', 'ConfigurationError', 'ModelCapabilityError']
__version__ = '0.1.0'
