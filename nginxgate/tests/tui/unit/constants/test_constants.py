"""Unit tests for constants.

This module tests:
- Enum values that travel over the wire
- Status marker table shape
- Limits, timeouts and defaults consistency
"""

from __future__ import annotations

import pytest

from nginxgate.constants import (
    DRIFT_POLL_INTERVAL,
    MODE_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
    REFRESH_INTERVAL_MIN,
    SHORT_HASH_LENGTH,
    STATUS_MARKERS,
    DeployMode,
    DriftState,
    FileStatus,
    GateState,
    UpdateStage,
)
from nginxgate.constants.values import API_PREFIX_DEFAULT, PATH_SEPARATOR
from nginxgate.screens.console.config import DRIFT_STATUS_TAGS, STAGE_LABELS


@pytest.mark.unit
@pytest.mark.fast
class TestEnums:
    """Tests for enum values."""

    def test_deploy_mode_values(self) -> None:
        """Test the mode query values and labels."""
        assert DeployMode.PREVIEW.value == "preview"
        assert DeployMode.PROD.value == "prod"
        assert DeployMode.PROD.label == "Production"
        assert DeployMode(MODE_DEFAULT) is DeployMode.PREVIEW

    def test_file_status_values(self) -> None:
        """Test that every file status has a marker."""
        assert {status.value for status in FileStatus} == set(STATUS_MARKERS)

    def test_drift_states_have_tags(self) -> None:
        """Test that every drift state maps to a label and severity."""
        assert {state.value for state in DriftState} == set(DRIFT_STATUS_TAGS)
        for label, severity in DRIFT_STATUS_TAGS.values():
            assert label
            assert severity in ("information", "warning", "error")

    def test_gate_states(self) -> None:
        """Test gate state members."""
        assert [state.name for state in GateState] == [
            "IDLE",
            "PREPARING",
            "PREPARED",
            "APPLYING",
            "APPLIED",
        ]

    def test_update_stages_have_labels(self) -> None:
        """Test that each stage has a display label."""
        assert {stage.value for stage in UpdateStage} == set(STAGE_LABELS)


@pytest.mark.unit
@pytest.mark.fast
class TestValues:
    """Tests for scalar values and limits."""

    def test_status_marker_shape(self) -> None:
        """Test that markers are (icon, color, label) triples."""
        for icon, color, label in STATUS_MARKERS.values():
            assert len(icon) == 1
            assert color.startswith("#")
            assert label

    def test_limits_and_defaults(self) -> None:
        """Test interval and display limits."""
        assert REFRESH_INTERVAL_MIN == 3
        assert REFRESH_INTERVAL_DEFAULT >= REFRESH_INTERVAL_MIN
        assert DRIFT_POLL_INTERVAL == 10.0
        assert SHORT_HASH_LENGTH == 7

    def test_api_and_path_values(self) -> None:
        """Test backend prefix and path separator."""
        assert API_PREFIX_DEFAULT == "/api/v1"
        assert PATH_SEPARATOR == "/"
