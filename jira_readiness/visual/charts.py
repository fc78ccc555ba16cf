"""Chart builders (Altair) for readiness verdicts."""

from __future__ import annotations

import altair as alt
import pandas as pd

from jira_readiness.analysis.result import CheckStatus

STATUS_COLORS: dict[str, str] = {
    "NONE": "#bdbdbd",
    "GREEN": "#2ca02c",
    "YELLOW": "#ffbf00",
    "RED": "#d62728",
}


def status_distribution(df: pd.DataFrame) -> pd.DataFrame:
    """Count epics per check status and readiness, in severity order."""
    order = [str(s) for s in CheckStatus]
    if df.empty:
        return pd.DataFrame({"check_status": order, "ready": 0, "not_ready": 0, "count": 0})
    tmp = df.copy()
    tmp["ready_flag"] = tmp["ready"].astype(bool)
    agg = (
        tmp.groupby("check_status")
        .agg(count=("key", "count"), ready=("ready_flag", "sum"))
        .reindex(pd.Index(order, name="check_status"), fill_value=0)
        .reset_index()
    )
    agg["ready"] = agg["ready"].astype(int)
    agg["not_ready"] = agg["count"] - agg["ready"]
    return agg[["check_status", "ready", "not_ready", "count"]]


def status_distribution_chart(df: pd.DataFrame):
    if df.empty:
        return None
    agg = status_distribution(df)
    order = [str(s) for s in CheckStatus]
    chart = (
        alt.Chart(agg)
        .mark_bar()
        .encode(
            x=alt.X("check_status:N", title="Status", sort=order),
            y=alt.Y("count:Q", title="Epics"),
            color=alt.Color(
                "check_status:N",
                scale=alt.Scale(domain=list(STATUS_COLORS), range=list(STATUS_COLORS.values())),
                legend=None,
            ),
            tooltip=[
                alt.Tooltip("check_status:N", title="Status"),
                alt.Tooltip("count:Q", title="Epics"),
                alt.Tooltip("ready:Q", title="Ready"),
                alt.Tooltip("not_ready:Q", title="Not ready"),
            ],
        )
        .properties(height=220)
    )
    return chart
