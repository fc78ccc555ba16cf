"""Progress reporting for Streamlit pages."""

from __future__ import annotations

import streamlit as st


class ProgressReporter:
    """Banner + progress bar in Streamlit, driven by IssueService progress callbacks."""

    def __init__(self, title: str):
        self._container = st.container()
        self._container.info(title)
        self._message_placeholder = self._container.empty()
        self._progress_placeholder = self._container.progress(0.0)
        self._total: int | None = None
        self._current: int = 0
        self._finalized: bool = False

    def callback(self, message: str, current: int | None = None, total: int | None = None) -> None:
        """Signature compatible with IssueService progress callbacks."""
        self.update(message, current=current, total=total)

    def update(self, message: str, *, current: int | None = None, total: int | None = None) -> None:
        if self._finalized:
            return
        if total is not None and total > 0:
            self._total = total
        if current is not None:
            self._current = max(0, current)
        self._message_placeholder.write(message)
        if self._total:
            self._progress_placeholder.progress(min(max(self._current / self._total, 0.0), 1.0))
        else:
            self._progress_placeholder.progress(0.0)

    def complete(self, message: str) -> None:
        if self._finalized:
            return
        self._progress_placeholder.progress(1.0)
        self._container.success(message)
        self._finalized = True

    def error(self, message: str) -> None:
        if self._finalized:
            return
        self._container.error(message)
        self._finalized = True
