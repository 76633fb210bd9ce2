"""File content panel: diff, remote content and compare-environment content."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import TabbedContent, TabPane

from nginxgate.models.api.payloads import DiffRecord
from nginxgate.screens.console.config import NO_FILE_SELECTED
from nginxgate.screens.console.presenter import normalize_newlines, render_diff_lines
from nginxgate.widgets import CustomRichLog, CustomStatic

TAB_DIFF = "file-tab-diff"
TAB_REMOTE = "file-tab-remote"
TAB_COMPARE = "file-tab-compare"


class DiffView(Vertical):
    """Shows one ``DiffRecord``; ``show_record(None)`` resets to the placeholder."""

    DEFAULT_CSS = """
    DiffView {
        height: 1fr;
    }

    DiffView #diff-view-title {
        height: 1;
        text-style: bold;
    }

    DiffView TabbedContent {
        height: 1fr;
    }

    DiffView CustomRichLog {
        height: 1fr;
    }
    """

    def compose(self) -> ComposeResult:
        yield CustomStatic(NO_FILE_SELECTED, id="diff-view-title", markup=False)
        with TabbedContent(initial=TAB_DIFF):
            with TabPane("Diff", id=TAB_DIFF):
                yield CustomRichLog(id="diff-view-diff")
            with TabPane("Remote", id=TAB_REMOTE):
                yield CustomRichLog(id="diff-view-remote")
            with TabPane("Compare", id=TAB_COMPARE):
                yield CustomRichLog(id="diff-view-compare")

    def set_title(self, title: str) -> None:
        self.query_one("#diff-view-title", CustomStatic).update(title or NO_FILE_SELECTED)

    def show_record(self, record: DiffRecord | None) -> None:
        diff_log = self.query_one("#diff-view-diff", CustomRichLog)
        remote_log = self.query_one("#diff-view-remote", CustomRichLog)
        compare_log = self.query_one("#diff-view-compare", CustomRichLog)
        if record is None:
            for log in (diff_log, remote_log, compare_log):
                log.clear()
            return
        diff_log.replace_lines(render_diff_lines(record.diff))
        remote_log.replace_lines(normalize_newlines(record.remote_content).split("\n"))
        compare_log.replace_lines(normalize_newlines(record.compare_content).split("\n"))


__all__ = [
    "DiffView",
]
