"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from jira_readiness.core.config import SETTINGS

VERDICT_DISPLAY_ORDER: tuple[str, ...] = (
    "Ticket",
    "summary",
    "priority",
    "status",
    "owner",
    "qe_assignee",
    "issues_done",
    "points_done",
    "comment_date",
    "ready",
    "check_status",
    "messages",
)


def add_ticket_link(df: pd.DataFrame, server: str, key_col: str = "key", label: str = "Ticket"):
    if df.empty or key_col not in df.columns:
        return df, {}
    out = df.copy()
    base = server.rstrip("/")
    out[label] = out[key_col].astype(str).apply(lambda k: f"{base}/browse/{k}" if k and k != "nan" else "")
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="medium",
        )
    }
    return out, cfg


def add_completion_ratios(df: pd.DataFrame) -> pd.DataFrame:
    """Derive 0..1 completion ratios; None where there is nothing to complete."""
    if df.empty:
        return df
    out = df.copy()

    def ratio(done, total):
        if not total:
            return None
        return min(done / total, 1.0)

    out["issues_done"] = [ratio(d, t) for d, t in zip(out["issues_completed"], out["issues_total"], strict=True)]
    out["points_done"] = [
        None if unknown else ratio(d, t)
        for d, t, unknown in zip(out["points_completed"], out["points_total"], out["points_unknown"], strict=True)
    ]
    return out


def render_verdict_table(df: pd.DataFrame, server: str, limit: int = SETTINGS.max_table_rows):
    linked, cfg = add_ticket_link(add_completion_ratios(df), server)
    cfg.update(
        {
            "issues_done": st.column_config.ProgressColumn("Issues", min_value=0.0, max_value=1.0),
            "points_done": st.column_config.ProgressColumn("Points", min_value=0.0, max_value=1.0),
            "ready": st.column_config.CheckboxColumn("Ready"),
            "check_status": st.column_config.TextColumn("Status"),
            "comment_date": st.column_config.DatetimeColumn("Status Comment", format="YYYY-MM-DD"),
        }
    )
    cols = [c for c in VERDICT_DISPLAY_ORDER if c in linked.columns]
    st.dataframe(linked[cols].head(limit), hide_index=True, column_config=cfg)
