"""
Steamshot: dashboard for browsing the screenshots Steam players upload.
Run with: streamlit run steamshot/dashboard.py
"""

import html
import logging
import sys
import os

import streamlit as st
import plotly.graph_objects as go
import pandas as pd

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from steamshot import config
from steamshot.catalog import search_apps, find_app_by_id
from steamshot.errors import ConfigurationError, FetchError, ParseError
from steamshot.fetcher import Fetcher
from steamshot.query import ORDERS
from steamshot.scraper import get_app_screenshots

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)],
)

# ============================================================
# PAGE CONFIG
# ============================================================
st.set_page_config(
    page_title="Steamshot",
    page_icon="◆",
    layout="wide",
    initial_sidebar_state="expanded",
)

CUSTOM_CSS = """
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap');
html, body, [class*="css"] { font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif; }

footer {visibility: hidden;}
#MainMenu {visibility: hidden;}

:root {
    --bg-elevated: #1b2838;
    --border: rgba(199,213,224,0.10);
    --text-primary: #c7d5e0;
    --text-secondary: #8f98a0;
    --accent: #66c0f4;
}

[data-testid="stMetric"] {
    background: var(--bg-elevated);
    border: 1px solid var(--border); border-radius: 14px;
    padding: 18px 22px;
}
.stButton > button { border-radius: 10px; font-weight: 600; }
[data-testid="stSidebar"] { border-right: 1px solid var(--border); }
.shot-title { color: var(--text-primary); font-weight: 600; font-size: 0.9rem; margin: 0.3rem 0 0; }
.shot-meta { color: var(--text-secondary); font-size: 0.75rem; }
</style>
"""

st.markdown(CUSTOM_CSS, unsafe_allow_html=True)


def apply_chart_style(fig):
    fig.update_layout(
        font=dict(family="Inter, sans-serif", color="#8f98a0"),
        paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
        title_font=dict(size=14, color="#c7d5e0"),
        xaxis=dict(gridcolor="rgba(199,213,224,0.04)", tickfont=dict(color="#8f98a0")),
        yaxis=dict(gridcolor="rgba(199,213,224,0.04)", tickfont=dict(color="#8f98a0")),
        margin=dict(l=40, r=20, t=45, b=35),
    )
    return fig


# ============================================================
# SESSION STATE HELPERS
# ============================================================

@st.cache_resource
def _get_fetcher() -> Fetcher:
    # One HTTP session for the whole server
    return Fetcher()

def _clear_results():
    for k in ["screenshots", "screenshots_key"]:
        st.session_state.pop(k, None)


# ============================================================
# SIDEBAR
# ============================================================
def render_sidebar():
    st.sidebar.markdown("""
    <div style="text-align:center; padding:0.5rem 0 0.3rem;">
        <span style="color:#66c0f4; font-size:1.4rem;">◆</span>
        <span style="font-size:1.1rem; font-weight:700; color:#c7d5e0; margin-left:6px;">Steamshot</span>
    </div>""", unsafe_allow_html=True)
    st.sidebar.markdown("---")

    apps_list_path = st.sidebar.text_input("Apps list (JSON)", value=config.STEAM_APPS_LIST_PATH or "",
                                           help="File written by catalog.download_apps_list()")
    app_query = st.sidebar.text_input("Find app", placeholder="Name or app ID", value="")

    app = None
    if app_query:
        try:
            if app_query.strip().isdigit():
                matches = [m for m in [find_app_by_id(app_query, apps_list_path)] if m]
            else:
                matches = search_apps(app_query, apps_list_path)
        except ConfigurationError as e:
            st.sidebar.error(str(e))
            matches = []

        if matches:
            labels = {f"{m.name} ({m.id})": m for m in matches[:200]}
            selected = st.sidebar.selectbox("Matches", list(labels.keys()), key="sidebar_app_select")
            app = labels[selected]
            st.sidebar.caption(f"{len(matches):,} match{'es' if len(matches) != 1 else ''}")
        else:
            st.sidebar.caption("No matching apps.")

    st.sidebar.markdown("---")
    order = st.sidebar.selectbox("Order", list(ORDERS.keys()), format_func=lambda o: ORDERS[o])
    text_query = st.sidebar.text_input("Search screenshots", value="")
    page = st.sidebar.number_input("Page", min_value=1, value=1, step=1)
    with_details = st.sidebar.toggle("Fetch details (date, size, likes)", value=False)

    return app, order, text_query or None, int(page), with_details


# ============================================================
# CHARTS
# ============================================================
def chart_likes(screenshots):
    rows = [s for s in screenshots if s.like_count is not None]
    if not rows: return
    labels = [(s.title or s.details_url.rsplit("=", 1)[-1])[:30] for s in rows]
    fig = go.Figure(go.Bar(
        x=labels, y=[s.like_count for s in rows], marker_color="#66c0f4",
        text=[s.like_count for s in rows], textposition="outside",
        textfont=dict(color="#8f98a0", size=10),
    ))
    fig.update_layout(title="Likes per screenshot", height=360, yaxis_title="Likes", xaxis_title="")
    apply_chart_style(fig)
    st.plotly_chart(fig, use_container_width=True)


# ============================================================
# RESULTS
# ============================================================
def render_screenshot_grid(screenshots, columns: int = 3):
    cols = st.columns(columns)
    for i, shot in enumerate(screenshots):
        with cols[i % columns]:
            if shot.medium_url:
                st.image(shot.medium_url, use_container_width=True)
            st.markdown(f'<p class="shot-title">{html.escape(shot.title or "Untitled")}</p>', unsafe_allow_html=True)
            meta = []
            if shot.user_name:
                meta.append(f'<a href="{html.escape(shot.user_url or "")}">{html.escape(shot.user_name)}</a>')
            if shot.date:
                meta.append(shot.date.strftime("%Y-%m-%d %H:%M"))
            if shot.width and shot.height:
                meta.append(f"{shot.width}×{shot.height}")
            if shot.file_size:
                meta.append(html.escape(shot.file_size))
            st.markdown(f'<p class="shot-meta">{" · ".join(meta)}</p>', unsafe_allow_html=True)
            links = [f"[Details]({shot.details_url})"]
            if shot.full_size_url:
                links.append(f"[Full size]({shot.full_size_url})")
            st.markdown(" · ".join(links))


def screenshots_table(screenshots) -> pd.DataFrame:
    rows = []
    for shot in screenshots:
        row = shot.to_dict()
        row.pop("app")
        try:
            row["file_size_in_bytes"] = shot.file_size_in_bytes
        except ParseError:
            row["file_size_in_bytes"] = None
        rows.append(row)
    return pd.DataFrame(rows)


def render_dashboard(app, order, text_query, page, with_details):
    if app is None:
        st.markdown("### Find an app")
        st.caption("Search Steam's app list in the sidebar, then pick an order and a page.")
        return

    st.markdown(f"""
    <div style="display:flex; align-items:center; gap:10px; margin-bottom:0.2rem;">
        <span style="font-size:1.3rem; color:#66c0f4;">◆</span>
        <span style="font-size:1.3rem; font-weight:700; color:#c7d5e0;">{html.escape(app.name or "")}</span>
        <span style="color:#8f98a0; font-size:0.8rem; margin-left:auto;">App {app.id}</span>
    </div>""", unsafe_allow_html=True)

    key = (app.id, order, text_query, page, with_details)
    if st.session_state.get("screenshots_key") != key:
        _clear_results()

    if st.button("⬇ Fetch screenshots", type="primary", key="btn_fetch"):
        with st.spinner(f"Fetching page {page} of {ORDERS.get(order, order).lower()} screenshots..."):
            try:
                st.session_state["screenshots"] = get_app_screenshots(
                    app, fetcher=_get_fetcher(), order=order, query=text_query, page=page,
                    per_page=config.DASHBOARD_PAGE_SIZE, with_details=with_details,
                )
                st.session_state["screenshots_key"] = key
            except FetchError as e:
                st.error(f"Fetching failed: {e}")
                return

    screenshots = st.session_state.get("screenshots")
    if screenshots is None:
        return
    if not screenshots:
        st.info("No screenshots on this page.")
        return

    m1, m2, m3 = st.columns(3)
    m1.metric("Screenshots", f"{len(screenshots):,}")
    m2.metric("Uploaders", f"{len({s.user_url for s in screenshots if s.user_url}):,}")
    if with_details:
        m3.metric("Likes", f"{sum(s.like_count or 0 for s in screenshots):,}")

    tab_grid, tab_table = st.tabs(["🖼 Screenshots", "📋 Table"])
    with tab_grid:
        render_screenshot_grid(screenshots)
    with tab_table:
        st.dataframe(screenshots_table(screenshots), use_container_width=True, hide_index=True)
        if with_details:
            chart_likes(screenshots)


# ============================================================
# MAIN
# ============================================================
def main():
    app, order, text_query, page, with_details = render_sidebar()
    render_dashboard(app, order, text_query, page, with_details)

if __name__ == "__main__":
    main()
