"""Tests for the deploy lifecycle state machine."""

import pytest

from ui5_deployer.api.exceptions import LifecycleError
from ui5_deployer.core.lifecycle import DeployLifecycle
from ui5_deployer.models import DeployState


class TestDeployLifecycle:

    def test_full_run(self):
        lifecycle = DeployLifecycle()
        for state in (
            DeployState.CONNECTED,
            DeployState.RESOURCES_DISCOVERED,
            DeployState.PLAN_COMPUTED,
            DeployState.SYNCING,
            DeployState.SYNCED,
        ):
            lifecycle.advance(state)

        assert lifecycle.state == DeployState.SYNCED
        assert lifecycle.is_terminal
        assert lifecycle.history[0] == DeployState.IDLE
        assert len(lifecycle.history) == 6

    def test_dry_run_skips_syncing(self):
        lifecycle = DeployLifecycle()
        lifecycle.advance(DeployState.CONNECTED)
        lifecycle.advance(DeployState.RESOURCES_DISCOVERED)
        lifecycle.advance(DeployState.PLAN_COMPUTED)
        lifecycle.advance(DeployState.SYNCED)
        assert lifecycle.state == DeployState.SYNCED

    def test_skipping_a_state_is_rejected(self):
        lifecycle = DeployLifecycle()
        with pytest.raises(LifecycleError) as exc_info:
            lifecycle.advance(DeployState.PLAN_COMPUTED)
        assert exc_info.value.error_code == "UD009"
        assert lifecycle.state == DeployState.IDLE

    def test_fail_from_any_active_state(self):
        lifecycle = DeployLifecycle()
        lifecycle.advance(DeployState.CONNECTED)
        lifecycle.fail()
        assert lifecycle.state == DeployState.FAILED

    def test_fail_after_success_is_ignored(self):
        lifecycle = DeployLifecycle()
        lifecycle.advance(DeployState.CONNECTED)
        lifecycle.advance(DeployState.RESOURCES_DISCOVERED)
        lifecycle.advance(DeployState.PLAN_COMPUTED)
        lifecycle.advance(DeployState.SYNCED)

        lifecycle.fail()

        assert lifecycle.state == DeployState.SYNCED

    def test_no_transition_out_of_failed(self):
        lifecycle = DeployLifecycle()
        lifecycle.fail()
        with pytest.raises(LifecycleError):
            lifecycle.advance(DeployState.CONNECTED)
