"""Session utilities for Streamlit.

Helpers for paths, environment, the submission store and the per-user
dashboard kept in ``st.session_state``.
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent

DASHBOARD_KEY = "dashboard"


def setup_paths() -> None:
    """Add project root and frontend_streamlit to sys.path."""
    project_root = str(PROJECT_ROOT)
    streamlit_root = str(Path(__file__).parent.parent)
    if project_root not in sys.path:
        sys.path.insert(0, project_root)
    if streamlit_root not in sys.path:
        sys.path.insert(0, streamlit_root)


def load_environment() -> None:
    """Load .env from project root."""
    from dotenv import load_dotenv

    env_path = PROJECT_ROOT / ".env"
    load_dotenv(env_path)


def get_store_path() -> Path:
    """Location of the YAML submission store (MENTOR_DIAGNOSIS_STORE, relative to the root)."""
    from mentor_diagnosis.config import DEFAULT_STORE_PATH

    path = Path(DEFAULT_STORE_PATH)
    return path if path.is_absolute() else PROJECT_ROOT / path


def get_dashboard(state):
    """Return the logged-in user's dashboard, or None before login."""
    return state.get(DASHBOARD_KEY)


def start_dashboard(state, name: str, email: str):
    """Create the dashboard for a user, restoring anything already stored.

    Args:
        state: ``st.session_state`` (or any mapping)
        name: User display name
        email: User email, the key submissions are stored under
    """
    from mentor_diagnosis.config import AutoSaveConfig
    from mentor_diagnosis.persistence import Identity, YamlSubmissionStore
    from mentor_diagnosis.workflow import DashboardOrchestrator

    autosave = AutoSaveConfig.from_env()
    store = YamlSubmissionStore(get_store_path())
    dashboard = DashboardOrchestrator.restore(
        Identity(name=name, email=email),
        store,
        autosave_delay=autosave.delay_seconds,
        saved_indicator_seconds=autosave.saved_indicator_seconds,
    )
    state[DASHBOARD_KEY] = dashboard
    return dashboard


def end_dashboard(state) -> None:
    """Log out: drop pending saves and forget the dashboard."""
    dashboard = state.pop(DASHBOARD_KEY, None)
    if dashboard is not None:
        dashboard.logout()
        dashboard.close()
