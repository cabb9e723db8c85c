"""
Superstore Profit Story: Main Streamlit Application
Three-scene narrative over the Superstore sales data: profit by category per
state, nationwide profit by category, and discount vs. profit.

Data: drop superstore.csv into  data/  (or point SUPERSTORE_DATA_PATH at it)
and run  `streamlit run app.py`.
"""
import streamlit as st
from loguru import logger

from superstore_story import config
from superstore_story.controller import SceneController
from superstore_story.data_layer import load_session
from superstore_story.exceptions import DataLoadError
from superstore_story.logging_setup import setup_logging
from superstore_story.scenes import SceneKind
from superstore_story.visualizations import RENDERERS

# ── Page Config ───────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Superstore Profit Story",
    page_icon="📊",
    layout="wide",
)

# ── Custom CSS ────────────────────────────────────────────────────────────────
st.markdown("""
<style>
  @import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap');
  html, body, [class*="css"] { font-family: 'Inter', sans-serif; }

  .stApp { background-color: #f0f4fb; color: #1a2744; }
  .main .block-container { padding: 1.5rem 2rem 3rem; }
  section[data-testid="stSidebar"] { background-color: #dde6f5; border-right: 1px solid #b8cceb; }

  .app-header {
    background: linear-gradient(135deg, #2563eb 0%, #1d4ed8 60%, #1e40af 100%);
    border-radius: 12px;
    padding: 1.4rem 2rem;
    margin-bottom: 1.5rem;
    border: 1px solid #1d4ed8;
  }
  .app-header h1 { margin: 0; font-size: 1.75rem; font-weight: 700; color: #ffffff; }
  .app-header p  { margin: 0.3rem 0 0; font-size: 0.9rem; color: #bfdbfe; }

  .scene-indicator { text-align: center; font-weight: 600; color: #1a2744; padding-top: 0.4rem; }

  .sidebar-section {
    background: #ffffff;
    border-radius: 8px;
    padding: 0.8rem 1rem;
    margin-bottom: 0.8rem;
    border: 1px solid #d1ddf0;
  }
  .sidebar-section h4 { margin: 0 0 0.5rem; font-size: 0.82rem;
                         color: #64748b; text-transform: uppercase; letter-spacing: 0.05em; }

  .stButton > button {
    background: #ffffff; color: #1a2744;
    border: 1px solid #b8cceb; border-radius: 8px;
    font-size: 0.82rem; padding: 0.4rem 1rem;
  }
  .stButton > button:hover { background: #dde6f5; border-color: #2563eb; }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def _configure_logging():
    setup_logging(config.log_level(), config.log_dir())


_configure_logging()


# ── Session State Init ────────────────────────────────────────────────────────

def _init_state():
    if "controller" not in st.session_state:
        st.session_state.controller = None


_init_state()


# ── Data Bootstrap ────────────────────────────────────────────────────────────

@st.cache_resource(show_spinner="Loading Superstore dataset…")
def _load_session(path: str):
    """Loaded once per data path and shared read-only by every browser session."""
    return load_session(path)


# Header
st.markdown("""
<div class="app-header">
  <h1>📊 Superstore Profit Story</h1>
  <p>Where the profit comes from · and where discounts take it away</p>
</div>
""", unsafe_allow_html=True)

_data_path = config.data_path()
try:
    session = _load_session(str(_data_path))
except DataLoadError as exc:
    logger.error("Data load failed: {}", exc)
    st.error(
        f"Error: Could not load data. {exc}. Please ensure 'superstore.csv' is in the "
        "data/ folder or set SUPERSTORE_DATA_PATH in your .env file."
    )
    st.stop()

if st.session_state.controller is None or st.session_state.controller.session is not session:
    _controller = SceneController(session, RENDERERS)
    _controller.start()
    st.session_state.controller = _controller

controller: SceneController = st.session_state.controller
kpis = session.kpis


# ── Sidebar ───────────────────────────────────────────────────────────────────

with st.sidebar:
    st.markdown("### 📊 Profit Story")
    st.markdown("---")

    _profit_color = "#16a34a" if kpis["total_profit"] >= 0 else "#dc2626"
    st.markdown("**Quick KPIs**")
    st.markdown(f"""
<div class="sidebar-section">
<h4>Dataset Snapshot</h4>
<p style="margin:0;font-size:0.82rem;color:#1a2744">
  Records       <strong style="float:right;color:#2563eb">{kpis['total_records']:,}</strong><br><br>
  Total Sales   <strong style="float:right;color:#d97706">${kpis['total_sales']:,.0f}</strong><br><br>
  Total Profit  <strong style="float:right;color:{_profit_color}">${kpis['total_profit']:,.0f}</strong><br><br>
  States        <strong style="float:right;color:#7c3aed">{kpis['total_states']:,}</strong><br><br>
  Top State     <strong style="float:right;color:#2563eb">{kpis['top_state']}</strong>
</p>
</div>
""", unsafe_allow_html=True)

    if session.issues:
        st.warning(
            f"{len(session.issues):,} record(s) rejected: "
            "blank State or Category, or malformed numeric fields."
        )
        with st.expander("Rejected records"):
            for issue in session.issues[:50]:
                st.markdown(f"- row {issue.row + 1}: `{issue.column}` = `{issue.value}`")

    st.markdown("---")
    st.markdown(
        f"<small style='color:#94a3b8'>Source: <code>{_data_path.name}</code></small>",
        unsafe_allow_html=True,
    )


# ── Navigation ────────────────────────────────────────────────────────────────

nav = controller.navigation
_prev_col, _ind_col, _next_col = st.columns([1, 3, 1])
with _prev_col:
    if st.button("← Previous", disabled=nav.previous_disabled, use_container_width=True):
        controller.previous()
        st.rerun()
with _ind_col:
    st.markdown(f'<div class="scene-indicator">{nav.indicator}</div>', unsafe_allow_html=True)
with _next_col:
    if st.button("Next →", disabled=nav.next_disabled, use_container_width=True):
        controller.next()
        st.rerun()


# ── Scene Area ────────────────────────────────────────────────────────────────

if controller.kind is SceneKind.STATE_SELECTOR:
    scene = controller.scene
    if scene.options:
        # Keyed per visit so the dropdown starts back on the first state after re-entry
        _choice = st.selectbox(
            "Select a state",
            options=scene.options,
            index=scene.options.index(scene.selected_state),
            key=f"state_select_{controller.entries}",
        )
        if _choice != scene.selected_state:
            scene.select(_choice)
            controller.refresh()
    else:
        st.info("No states available in the dataset.")

st.plotly_chart(
    controller.view,
    use_container_width=True,
    config={"displayModeBar": False},
)

# ── Footer ────────────────────────────────────────────────────────────────────
st.markdown("""
<div style='text-align:center;padding:2rem 0 0.5rem;color:#94a3b8;font-size:0.75rem'>
  Superstore Profit Story &nbsp;·&nbsp; Streamlit &amp; Plotly
</div>
""", unsafe_allow_html=True)
