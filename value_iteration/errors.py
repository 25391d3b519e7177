"""Exceptions raised before or around a value iteration solve."""


class ConfigurationError(ValueError):
    """Invalid solver configuration or mismatched warm-start values."""


class ModelCapabilityError(TypeError):
    """Model does not expose a query the solver needs.

    Raised by the capability probe before the first sweep, never mid-solve.
    """

    def __init__(self, missing, model=None):
        self.missing = list(missing)
        name = type(model).__name__ if model is not None else "model"
        lines = "\n".join(f"  - {m}" for m in self.missing)
        super().__init__(f"{name} is missing required capabilities:\n{lines}")
