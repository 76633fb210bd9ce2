"""Smoke tests for ConsoleScreen - composition, keybindings and modal wiring.

This module tests:
- Screen class attributes and properties
- Widget composition verification
- Action method existence for every binding
- Presenter integration (screen-presenter linkage)
- Result modal apply gating

Note: Tests using app.run_test() are avoided due to Textual testing overhead.
"""

from __future__ import annotations

import inspect
from unittest.mock import MagicMock

from nginxgate.keyboard import (
    CONSOLE_SCREEN_BINDINGS,
    RESULT_MODAL_BINDINGS,
    UPDATE_MODAL_BINDINGS,
)
from nginxgate.models.api.payloads import (
    ApplyResult,
    CheckResult,
    NginxExecRecord,
    PrepareResult,
)
from nginxgate.screens import ConsoleScreen
from nginxgate.screens.console import ConsolePresenter
from nginxgate.screens.console.components import (
    CheckResultModal,
    DiffView,
    DriftStatusPanel,
    UpdateResultModal,
)
from nginxgate.screens.console.config import (
    DRIFT_INDICATOR_ID,
    FILES_TREE_ID,
    GROUPS_TREE_ID,
    LOADING_TEXT_ID,
    STATUS_LINE_ID,
)
from nginxgate.screens.mixins import WorkerMixin

# =============================================================================
# Widget Composition Tests
# =============================================================================


class TestConsoleScreenComposition:
    """Test ConsoleScreen widget composition."""

    def test_screen_has_correct_bindings(self) -> None:
        """Test that ConsoleScreen uses the console bindings."""
        assert ConsoleScreen.BINDINGS is CONSOLE_SCREEN_BINDINGS

    def test_screen_uses_worker_mixin(self) -> None:
        """Test that background calls go through WorkerMixin."""
        assert issubclass(ConsoleScreen, WorkerMixin)

    def test_screen_can_be_instantiated(self) -> None:
        """Test that ConsoleScreen can be instantiated with a controller."""
        controller = MagicMock()
        screen = ConsoleScreen(controller, auto_refresh=True)

        assert screen.controller is controller
        assert isinstance(screen.presenter, ConsolePresenter)
        assert screen._auto_refresh_on_mount is True

    def test_compose_yields_expected_widgets(self) -> None:
        """Test that compose declares every widget the screen queries."""
        source = inspect.getsource(ConsoleScreen.compose)

        for name in (
            "GROUPS_TREE_ID",
            "FILES_TREE_ID",
            "STATUS_LINE_ID",
            "DRIFT_INDICATOR_ID",
            "LOADING_TEXT_ID",
            "DiffView",
            "DriftStatusPanel",
            "Footer",
        ):
            assert name in source

    def test_widget_ids_are_unique(self) -> None:
        """Test widget id constants do not collide."""
        ids = [GROUPS_TREE_ID, FILES_TREE_ID, STATUS_LINE_ID, DRIFT_INDICATOR_ID, LOADING_TEXT_ID]
        assert len(set(ids)) == len(ids)

    def test_components_are_widgets(self) -> None:
        """Test that the diff view and drift panel expose their API."""
        assert callable(getattr(DiffView, "show_record", None))
        assert callable(getattr(DiffView, "set_title", None))
        assert callable(getattr(DriftStatusPanel, "show_report", None))
        assert callable(getattr(DriftStatusPanel, "show_error", None))


# =============================================================================
# Keybinding Tests
# =============================================================================


class TestConsoleScreenBindings:
    """Test that every binding has an action handler."""

    def test_every_binding_has_action(self) -> None:
        """Test action_* methods for all console bindings."""
        for _key, action, _description in CONSOLE_SCREEN_BINDINGS:
            assert callable(getattr(ConsoleScreen, f"action_{action}", None)), action

    def test_binding_keys_are_unique(self) -> None:
        """Test that no key is bound twice."""
        keys = [key for key, _action, _description in CONSOLE_SCREEN_BINDINGS]
        assert len(keys) == len(set(keys))

    def test_modal_bindings_have_actions(self) -> None:
        """Test modal binding actions."""
        for _key, action, _description in RESULT_MODAL_BINDINGS:
            assert callable(getattr(CheckResultModal, f"action_{action}", None))
        for _key, action, _description in UPDATE_MODAL_BINDINGS:
            assert callable(getattr(UpdateResultModal, f"action_{action}", None))

    def test_refresh_action_covers_drift_panel(self) -> None:
        """Test that manual refresh also refreshes an open drift panel."""
        source = inspect.getsource(ConsoleScreen.action_refresh)
        assert "refresh_drift_now" in source


# =============================================================================
# Result Modal Tests
# =============================================================================


class TestUpdateResultModal:
    """Test apply gating in UpdateResultModal."""

    PASSED = PrepareResult(nginx=NginxExecRecord(command="nginx -t", ok=True))
    FAILED = PrepareResult(nginx=NginxExecRecord(command="nginx -t", ok=False))

    def test_prepare_modal_allows_apply_when_gate_allows(self) -> None:
        """Test that the confirm button is enabled from the gate decision."""
        modal = UpdateResultModal(self.PASSED, can_apply=True, target="edge/10.0.0.1")

        assert modal.is_prepare is True
        assert modal.can_apply is True

    def test_prepare_modal_blocks_apply_by_default(self) -> None:
        """Test that apply is disabled unless the gate allowed it."""
        assert UpdateResultModal(self.FAILED).can_apply is False
        assert UpdateResultModal(self.PASSED).can_apply is False

    def test_apply_modal_never_offers_apply(self) -> None:
        """Test that an apply result shows no confirm action."""
        modal = UpdateResultModal(ApplyResult(success=True), can_apply=True)

        assert modal.is_prepare is False
        assert modal.can_apply is False

    def test_confirm_button_disabled_state_follows_can_apply(self) -> None:
        """Test compose wiring of the confirm button."""
        source = inspect.getsource(UpdateResultModal.compose)
        assert "disabled=not self.can_apply" in source

    def test_title_includes_target_and_status(self) -> None:
        """Test the modal title text."""
        modal = UpdateResultModal(self.FAILED, target="edge/10.0.0.1")
        assert modal._title() == "Update configuration - edge/10.0.0.1: FAILED"


class TestCheckResultModal:
    """Test CheckResultModal construction."""

    def test_can_be_instantiated(self) -> None:
        """Test that the modal accepts a result and target."""
        modal = CheckResultModal(CheckResult(ok=True), target="edge/10.0.0.1")
        assert modal is not None
