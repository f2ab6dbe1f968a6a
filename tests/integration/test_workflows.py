"""
Integration tests - record, persist and replay a session end to end.
"""

import pytest

from web_autoclicker.actions import ActionType
from web_autoclicker.recorder import InteractionRecorder
from web_autoclicker.replay import ReplayEngine, ReplayStatus
from web_autoclicker.resolver import ElementResolver
from web_autoclicker.storage import RecordingStore, export_actions, import_actions


def login_session():
    """Raw events a user produces while filling the login form."""
    email = {"tag": "input", "input_type": "email", "placeholder": "Email", "selector": "#email"}
    password = {"tag": "input", "input_type": "password", "label": "Password", "selector": "#password"}
    return [
        {"kind": "click", "timestamp": 1000, "element": {**email, "value": ""}},
        {"kind": "input", "timestamp": 1200, "element": {**email, "value": "a"}},
        {"kind": "input", "timestamp": 1300, "element": {**email, "value": "a@b.com"}},
        {"kind": "input", "timestamp": 1500, "element": {**password, "value": "hunter2"}},
        {"kind": "change", "timestamp": 1700, "element": {
            "tag": "select", "aria_label": "Country", "value": "fr", "selector": "#country",
        }},
        {"kind": "change", "timestamp": 1900, "element": {
            "tag": "input", "input_type": "checkbox", "label": "I agree", "checked": True,
            "selector": "#terms",
        }},
        {"kind": "scroll", "timestamp": 2000, "scroll_y": 240},
        {"kind": "click", "timestamp": 2300, "element": {
            "tag": "button", "text": "Submit", "selector": "#submit",
        }},
        {"kind": "click", "timestamp": 2400, "element": {
            "tag": "button", "text": "Submit", "selector": "#submit",
        }},
    ]


class TestRecordAndReplay:
    """Recorder output replays against the same page."""

    @pytest.mark.asyncio
    async def test_round_trip(self, tmp_path, login_page, settings, recording_sleep):
        """Test a recorded session survives storage and replays cleanly."""
        recorder = InteractionRecorder(settings.recorder)
        recorder.start()
        for event in login_session():
            recorder.handle_event(event)
        recorded = recorder.stop()

        assert [a.type for a in recorded] == [
            ActionType.CLICK,
            ActionType.INPUT,
            ActionType.INPUT,
            ActionType.SELECT,
            ActionType.SELECT,
            ActionType.SCROLL,
            ActionType.CLICK,
        ]

        store = RecordingStore(tmp_path)
        store.save("login", recorded)
        loaded = import_actions(export_actions(store.load("login"), "csv"), "csv")
        assert loaded == recorded

        engine = ReplayEngine(
            login_page,
            resolver=ElementResolver(login_page, settings.resolver),
            settings=settings.replay,
            sleep=recording_sleep,
        )
        result = await engine.replay(loaded, {"speed": 2})

        assert result.status == ReplayStatus.COMPLETE
        assert (result.completed, result.failed) == (7, 0)
        assert login_page.first("#email").value == "a@b.com"
        assert login_page.first("#password").value == "hunter2"
        assert login_page.first("#country").value == "fr"
        assert login_page.first("#terms").checked is True
        assert login_page.scroll_position == (0, 240)
        assert login_page.interactions[-1].kind == "click"
