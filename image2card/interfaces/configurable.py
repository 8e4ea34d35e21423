"""Protocol for providers with a switchable remote model."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ModelConfigurable(Protocol):
    """A provider whose active remote model can be changed before a call."""

    def set_model(self, model_label: str) -> None:
        """Select the model, given either "model" or a "Provider/model" label."""
        ...
