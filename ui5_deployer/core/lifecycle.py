"""Deploy lifecycle state machine"""

import logging
from typing import Dict, List, Set

from ..api.exceptions import LifecycleError
from ..models.result import DeployState

logger = logging.getLogger(__name__)

# Allowed transitions; FAILED is reachable from every non-terminal state
_TRANSITIONS: Dict[DeployState, Set[DeployState]] = {
    DeployState.IDLE: {DeployState.CONNECTED},
    DeployState.CONNECTED: {DeployState.RESOURCES_DISCOVERED},
    DeployState.RESOURCES_DISCOVERED: {DeployState.PLAN_COMPUTED},
    DeployState.PLAN_COMPUTED: {DeployState.SYNCING, DeployState.SYNCED},
    DeployState.SYNCING: {DeployState.SYNCED},
    DeployState.SYNCED: set(),
    DeployState.FAILED: set(),
}

TERMINAL_STATES = {DeployState.SYNCED, DeployState.FAILED}


class DeployLifecycle:
    """Tracks the state of one deploy run

    ``PLAN_COMPUTED -> SYNCED`` is allowed directly for dry runs.
    """

    def __init__(self):
        self.state = DeployState.IDLE
        self.history: List[DeployState] = [DeployState.IDLE]

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def advance(self, new_state: DeployState) -> None:
        """
        Move to a new state

        Args:
            new_state: Requested state

        Raises:
            LifecycleError: If the transition is not allowed
        """
        allowed = _TRANSITIONS[self.state]
        if new_state == DeployState.FAILED and not self.is_terminal:
            allowed = allowed | {DeployState.FAILED}

        if new_state not in allowed:
            raise LifecycleError(self.state.value, new_state.value)

        logger.debug(f"Deploy state: {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.history.append(new_state)

    def fail(self) -> None:
        """Move to FAILED unless already terminal"""
        if not self.is_terminal:
            self.advance(DeployState.FAILED)
