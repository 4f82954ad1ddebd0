"""Streamlit UI for Taiwan Job Hub."""
from __future__ import annotations

import os
from pathlib import Path

import streamlit as st

from jobhub.cards import html_block, meta_line
from jobhub.config import ROOT_DIR, load_filter_options
from jobhub.log import get_logger
from jobhub.models import Job, LoadingState
from jobhub.session import JobHubSession

log = get_logger(__name__)

# ── Constants ────────────────────────────────────────────────────────────

ENV_KEYS: list[str] = [
    "JOBHUB_PROVIDER", "GROQ_API_KEY", "GROQ_LLM_MODEL", "GEMINI_API_KEY", "GEMINI_MODEL",
    "GEMINI_SEARCH_GROUNDING",
]

_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: #ffffff;
}
[data-testid="stSidebar"] {
    background: #f8fafc;
    border-right: 1px solid #f1f5f9;
}
.block-container {
    padding-top: 2rem;
}
[data-testid="stMetric"] {
    background: #f8fafc;
    padding: 0.75rem 1rem;
    border-radius: 16px;
    border: 1px solid #f1f5f9;
}
.job-meta {
    color: #64748b;
    font-size: 0.85rem;
}
.job-source {
    display: inline-block; padding: 0.1rem 0.6rem;
    background: #eff6ff; color: #2563eb;
    border-radius: 999px; font-size: 0.75rem; font-weight: 700;
}
.mentor-box {
    padding: 0.5rem 0.75rem; background: rgba(37,99,235,0.06);
    border-left: 3px solid #2563eb; border-radius: 6px;
    font-size: 0.9rem; color: #333;
}
.review-box {
    padding: 0.5rem 0.75rem; background: rgba(16,185,129,0.08);
    border-left: 3px solid #10b981; border-radius: 6px;
    font-size: 0.9rem; color: #333;
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _load_env() -> dict[str, str]:
    env_path = ROOT_DIR / ".env"
    values: dict[str, str] = {}
    if env_path.exists():
        for line in env_path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                k, _, v = line.partition("=")
                values[k.strip()] = v.strip()
    return values


def _save_env(values: dict[str, str]) -> None:
    env_path: Path = ROOT_DIR / ".env"
    lines: list[str] = []
    written: set[str] = set()

    if env_path.exists():
        for line in env_path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if stripped and not stripped.startswith("#") and "=" in stripped:
                k = stripped.partition("=")[0].strip()
                if k in values:
                    lines.append(f"{k}={values[k]}")
                    written.add(k)
                    continue
            lines.append(line)

    for k, v in values.items():
        if k not in written:
            lines.append(f"{k}={v}")

    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _hub() -> JobHubSession:
    if "hub" not in st.session_state:
        st.session_state["hub"] = JobHubSession()
    return st.session_state["hub"]


def _run_search(hub: JobHubSession, retry: bool = False) -> None:
    label = hub.filters.job_title or "最新熱門"
    with st.spinner(f"AI 正在各平台搜尋與分析「{label}」的職缺…"):
        if retry:
            hub.retry()
        else:
            hub.search()


# ── Filter bar ───────────────────────────────────────────────────────────


def _filter_bar(hub: JobHubSession) -> bool:
    """Render the filters; returns True when the user asked for a search."""
    options = load_filter_options()
    current = hub.filters

    with st.container(border=True):
        c1, c2 = st.columns([4, 1])
        with c1:
            title = st.text_input(
                "職稱",
                value=current.job_title,
                placeholder="輸入職稱，例如：後端工程師",
                label_visibility="collapsed",
            )
        with c2:
            clicked = st.button(
                "搜尋職缺",
                type="primary",
                use_container_width=True,
                disabled=hub.controller.is_loading,
            )

        c1, c2, c3 = st.columns(3)
        with c1:
            industries = st.multiselect("產業", options.industries, default=[v for v in current.industries if v in options.industries])
        with c2:
            locations = st.multiselect("地區", options.regions, default=[v for v in current.locations if v in options.regions])
        with c3:
            levels = st.multiselect(
                "經驗", options.experience_levels, default=[v for v in current.experience_levels if v in options.experience_levels]
            )

    hub.update_filters(
        job_title=title,
        industries=industries,
        locations=locations,
        experience_levels=levels,
    )
    return clicked


# ── Job cards ────────────────────────────────────────────────────────────


def _job_card(hub: JobHubSession, job: Job) -> None:
    with st.container(border=True):
        st.markdown(html_block("job-source", job.source.value, tag="span"), unsafe_allow_html=True)
        st.markdown(f"#### {job.title}")
        st.markdown(f"**{job.company}**")
        meta = meta_line(job)
        if meta:
            st.markdown(html_block("job-meta", meta), unsafe_allow_html=True)

        st.write(job.description)

        with st.expander("職缺條件與企業洞察"):
            if job.requirements:
                st.markdown("**條件要求**")
                st.markdown("\n".join(f"- {r}" for r in job.requirements))
            if job.linkedin_employees:
                st.markdown("**LinkedIn 前輩**")
                for p in job.linkedin_employees:
                    st.markdown(f"- [{p.name}]({p.url}) — {p.role}")
            if job.mentor_analysis:
                st.markdown("**前輩分析**")
                st.markdown(html_block("mentor-box", job.mentor_analysis), unsafe_allow_html=True)
            if job.company_reviews:
                st.markdown("**企業評價**")
                st.markdown(html_block("review-box", job.company_reviews), unsafe_allow_html=True)

        c1, c2, c3 = st.columns(3)
        c1.link_button("前往應徵", job.link, use_container_width=True)
        c2.button(
            "已儲存" if hub.is_saved(job.id) else "儲存",
            key=f"save-{job.id}",
            on_click=hub.toggle_save,
            args=(job.id,),
            use_container_width=True,
        )
        c3.button(
            "標記已應徵",
            key=f"apply-{job.id}",
            on_click=hub.toggle_apply,
            args=(job.id,),
            use_container_width=True,
        )


# ── Page: Jobs ───────────────────────────────────────────────────────────


def page_jobs() -> None:
    hub = _hub()
    st.title("Taiwan Job Hub")
    st.caption("AI 驅動的全台職缺深度聚合平台")

    search_clicked = _filter_bar(hub)

    if not hub.started:
        with st.spinner("AI 正在各平台搜尋與分析…"):
            hub.start()
    elif search_clicked:
        _run_search(hub)

    views = hub.views
    state = hub.state

    if state is LoadingState.SUCCESS:
        st.subheader(f"精選職缺 · 找到 {views.visible_count} 個項目")
        st.caption("已應徵的職缺不會出現在列表中")
    elif state is LoadingState.LOADING:
        st.subheader("正在載入...")

    if state is LoadingState.ERROR:
        with st.container(border=True):
            st.markdown("### 搜尋遇到一點困難")
            st.error(hub.error or "")
            if st.button("再試一次", type="primary"):
                _run_search(hub, retry=True)
                st.rerun()
    elif state is LoadingState.SUCCESS and not views.visible:
        st.info("目前沒有匹配的職缺。請嘗試更換關鍵字或擴大搜尋條件。")
    elif state is LoadingState.SUCCESS:
        cols = st.columns(2)
        for i, job in enumerate(views.visible):
            with cols[i % 2]:
                _job_card(hub, job)

    _sidebar_lists(hub)


def _sidebar_lists(hub: JobHubSession) -> None:
    views = hub.views
    with st.sidebar:
        c1, c2 = st.columns(2)
        c1.metric("已儲存", views.saved_count)
        c2.metric("已應徵", views.applied_count)

        st.markdown("**已儲存職缺**")
        if views.saved:
            for job in views.saved:
                with st.container(border=True):
                    st.markdown(f"**{job.title}**  \n{job.company} · {job.location}")
                    st.button("移除", key=f"unsave-{job.id}", on_click=hub.toggle_save, args=(job.id,))
        else:
            st.caption("尚無儲存職缺")

        st.divider()
        st.markdown("**應徵歷史**")
        if views.applied:
            for job in views.applied:
                with st.container(border=True):
                    st.markdown(f"**{job.title}**  \n{job.company} - 已應徵 · {job.location}")
                    st.button("重新顯示", key=f"unapply-{job.id}", on_click=hub.toggle_apply, args=(job.id,))
        else:
            st.caption("尚無應徵記錄")


# ── Page: Settings ───────────────────────────────────────────────────────


def page_settings() -> None:
    st.header("Settings")
    hub = _hub()
    tab_keys, tab_data = st.tabs(["API Keys", "Data Management"])

    with tab_keys:
        env = _load_env()
        choices = ["", "groq", "gemini", "mock"]
        current = env.get("JOBHUB_PROVIDER", "").lower()
        with st.form("provider_settings"):
            provider = st.selectbox(
                "Job data provider",
                choices,
                index=choices.index(current) if current in choices else 0,
                help="Leave empty to use the first configured key (Groq, then Gemini), else sample data.",
            )
            c1, c2 = st.columns(2)
            with c1:
                groq = st.text_input("Groq API key", value=env.get("GROQ_API_KEY", ""), type="password")
                groq_model = st.text_input("Groq model", value=env.get("GROQ_LLM_MODEL", ""), placeholder="llama-3.3-70b-versatile")
            with c2:
                gemini = st.text_input("Gemini API key", value=env.get("GEMINI_API_KEY", ""), type="password")
                gemini_model = st.text_input("Gemini model", value=env.get("GEMINI_MODEL", ""), placeholder="gemini-2.0-flash")
                grounding = st.checkbox(
                    "Ground Gemini with Google Search",
                    value=env.get("GEMINI_SEARCH_GROUNDING", "").lower() in ("1", "true", "yes", "on"),
                    help="Looks up live postings; the response schema is not enforced in this mode.",
                )

            if st.form_submit_button("Save", type="primary", use_container_width=True):
                values = dict(zip(ENV_KEYS, [provider, groq, groq_model, gemini, gemini_model, "true" if grounding else ""]))
                _save_env(values)
                for k, v in values.items():
                    os.environ[k] = v
                hub.close()
                st.session_state.pop("hub", None)
                log.info("Provider settings saved")
                st.success("Settings saved. The next search uses the new provider.")

    with tab_data:
        views = hub.views
        st.write(f"Saved jobs: **{views.saved_count}** · Applied jobs: **{views.applied_count}**")
        if st.button("Clear saved and applied history"):
            hub.reset_history()
            st.success("History cleared.")


# ── Main ─────────────────────────────────────────────────────────────────


def _wrap_jobs():
    st.markdown(_CSS, unsafe_allow_html=True)
    page_jobs()


def _wrap_settings():
    st.markdown(_CSS, unsafe_allow_html=True)
    page_settings()


st.set_page_config(page_title="Taiwan Job Hub", page_icon="💼", layout="wide")

pages = [
    st.Page(_wrap_jobs, title="Jobs", icon="💼", url_path="jobs", default=True),
    st.Page(_wrap_settings, title="Settings", icon="⚙️", url_path="settings"),
]

nav = st.navigation(pages)
nav.run()
