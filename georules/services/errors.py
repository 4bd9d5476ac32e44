"""Errors raised by the rules engine."""
from typing import Optional

from georules.models.results import EngineState


class ConfigurationError(Exception):
    """The instruction block registry is structurally invalid.

    Raised for blocks without variants, duplicate IDs, unknown dependency
    references, dependency cycles and over-deep dependency chains. Always
    names the offending block.
    """

    def __init__(self, block_id: str, message: str, state: Optional[EngineState] = None):
        self.block_id = block_id
        self.message = message
        self.state = state
        super().__init__(f"Block '{block_id}': {message}")

    def at_state(self, state: EngineState) -> "ConfigurationError":
        """Return a copy of this error tagged with the engine state it was raised in."""
        return ConfigurationError(self.block_id, self.message, state)
