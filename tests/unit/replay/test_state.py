"""
Tests for the replay state machine and cancellation token.
"""

import pytest

from web_autoclicker.replay import CancellationToken, ReplayStatus, TRANSITIONS, can_transition


class TestReplayStatus:
    """Test status classification and transitions."""

    def test_active_and_terminal(self):
        """Test running/paused are active and the end states terminal."""
        assert {s for s in ReplayStatus if s.is_active} == {ReplayStatus.RUNNING, ReplayStatus.PAUSED}
        assert {s for s in ReplayStatus if s.is_terminal} == {
            ReplayStatus.COMPLETE,
            ReplayStatus.STOPPED,
            ReplayStatus.FAILED,
        }

    def test_every_status_has_transitions(self):
        """Test the table covers every status."""
        assert set(TRANSITIONS) == set(ReplayStatus)

    @pytest.mark.parametrize("current, target", [
        (ReplayStatus.IDLE, ReplayStatus.RUNNING),
        (ReplayStatus.RUNNING, ReplayStatus.PAUSED),
        (ReplayStatus.PAUSED, ReplayStatus.RUNNING),
        (ReplayStatus.PAUSED, ReplayStatus.STOPPED),
        (ReplayStatus.RUNNING, ReplayStatus.COMPLETE),
        (ReplayStatus.FAILED, ReplayStatus.IDLE),
    ])
    def test_allowed(self, current, target):
        """Test legal transitions."""
        assert can_transition(current, target) is True

    @pytest.mark.parametrize("current, target", [
        (ReplayStatus.IDLE, ReplayStatus.PAUSED),
        (ReplayStatus.IDLE, ReplayStatus.COMPLETE),
        (ReplayStatus.COMPLETE, ReplayStatus.RUNNING),
        (ReplayStatus.STOPPED, ReplayStatus.PAUSED),
    ])
    def test_refused(self, current, target):
        """Test illegal transitions are refused."""
        assert can_transition(current, target) is False


class TestCancellationToken:
    """Test the pause/stop flags."""

    def test_pause_resume(self):
        """Test pausing and resuming."""
        token = CancellationToken()
        token.pause()
        assert token.paused is True
        token.resume()
        assert token.paused is False

    def test_stop_overrides_pause(self):
        """Test a stopped token never reports paused."""
        token = CancellationToken()
        token.pause()
        token.stop()

        assert token.stopped is True
        assert token.paused is False
