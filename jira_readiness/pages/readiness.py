"""Epic readiness page.

Fetches the epics of a search profile (or free JQL) with their linked issues,
runs the readiness checks, and offers the spreadsheet report for download.
"""

from __future__ import annotations

import io

import streamlit as st

from jira_readiness.app import register_page
from jira_readiness.core.config import SETTINGS
from jira_readiness.core.jira_client import JiraAuthenticationError
from jira_readiness.core.profiles import SearchProfile, parse_configuration
from jira_readiness.core.service import IssueService
from jira_readiness.report.components import ComponentsCollection
from jira_readiness.report.emitter import build_report_frame, build_verdict_frame, write_report
from jira_readiness.visual.charts import status_distribution_chart
from jira_readiness.visual.progress import ProgressReporter
from jira_readiness.visual.tables import render_verdict_table


def _select_profile() -> SearchProfile | None:
    uploaded = st.file_uploader("Search profiles (YAML)", type=["yaml", "yml"])
    if uploaded is not None:
        config = parse_configuration(uploaded.getvalue().decode("utf-8"))
        ids = [p.id for p in config.profiles]
        if not ids:
            st.warning("No profiles defined in the uploaded configuration.")
            return None
        choice = st.selectbox("Profile", ids)
        return config.find_profile(choice)
    jql = st.text_input("JQL", value=st.session_state.get("readiness_jql", ""))
    if not jql:
        return None
    st.session_state["readiness_jql"] = jql
    return SearchProfile(id="adhoc", jql=jql)


@register_page("Epic Readiness")
def readiness_page():
    st.title("Epic Readiness")
    st.caption("Readiness to commit and delivery risk of Jira epics.")
    service: IssueService | None = st.session_state.get("issue_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return

    profile = _select_profile()
    if profile is None:
        st.info("Upload a profile configuration or enter a JQL query.")
        return
    st.code(profile.jql, language="sql")

    if st.button("Assess Epics", type="primary"):
        reporter = ProgressReporter("Fetching epics")
        try:
            epics = service.find_epics(profile.jql, progress=reporter.callback)
            st.session_state["readiness_epics"] = epics
            reporter.complete(f"Assessed {len(epics)} epic(s).")
        except JiraAuthenticationError as exc:
            reporter.error(str(exc))
            return
        except Exception as exc:  # pragma: no cover
            reporter.error(f"Failed to fetch epics: {exc}")
            raise

    epics = st.session_state.get("readiness_epics")
    if not epics:
        st.info("No epics assessed yet.")
        return

    components = ComponentsCollection(profile.include_components)
    components.add_issues(epics)
    names = [c.name for c in components if c.name not in profile.exclude_components]
    scope = st.selectbox("Scope by component", ["(none)", *names])
    if scope == "(none)":
        verdicts = build_verdict_frame(epics)
    else:
        verdicts = build_verdict_frame(components.get(scope).issues, scope)

    st.markdown("---")
    chart = status_distribution_chart(verdicts)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)
    render_verdict_table(verdicts, st.session_state.get("jira_server", ""))

    buffer = io.StringIO()
    write_report(build_report_frame(components, exclude=profile.exclude_components), buffer)
    st.download_button(
        "Download spreadsheet report (TSV)",
        buffer.getvalue().encode(SETTINGS.download_encoding),
        file_name=f"readiness_{profile.id}.tsv",
        mime="text/tab-separated-values",
    )
