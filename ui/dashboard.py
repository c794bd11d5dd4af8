import streamlit as st
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from ui.client import DashboardClient, DashboardState

STATE_KEY = 'dashboard_state'
PENDING_KEY = 'dashboard_fetch_pending'

st.set_page_config(page_title='Simple Web App', layout='centered')


def _request_refresh() -> None:
    # button callback: runs before the next script pass
    st.session_state[PENDING_KEY] = True


def _get_client() -> DashboardClient:
    if 'dashboard_client' not in st.session_state:
        st.session_state['dashboard_client'] = DashboardClient.from_env()
    return st.session_state['dashboard_client']


def _render_result_box(slot, state: DashboardState) -> None:
    kind = state.result_box_class().split()[-1]
    text = state.result_text()
    if kind == 'loading':
        slot.info(text)
    elif kind == 'error':
        slot.error(text)
    else:
        slot.success(text)


def _render_cards(state: DashboardState) -> None:
    stat_cards = state.stat_cards()
    if stat_cards:
        for col, (label, value) in zip(st.columns(len(stat_cards)), stat_cards):
            col.metric(label, str(value))

    health_cards = state.health_cards()
    if health_cards:
        status_col, env_col = st.columns(2)
        (status_label, status_value), (env_label, env_value) = health_cards
        with status_col:
            st.caption(status_label)
            if state.is_healthy:
                st.success(str(status_value))
            else:
                st.error(str(status_value))
        env_col.metric(env_label, str(env_value))


# first render of a session fetches automatically
if STATE_KEY not in st.session_state:
    st.session_state[STATE_KEY] = DashboardState()
    st.session_state[PENDING_KEY] = True

state: DashboardState = st.session_state[STATE_KEY]

st.title('🚀 Simple Web App')
st.write('A Streamlit dashboard with a FastAPI backend, deployed on AWS')

result_slot = st.empty()
button_slot = st.empty()

if st.session_state.pop(PENDING_KEY, False):
    state.begin()
    _render_result_box(result_slot, state)
    button_slot.button(state.refresh_label(), key='refresh_btn_busy', disabled=True)
    with st.spinner('Fetching data from the API...'):
        _get_client().refresh(state)

# placeholders are filled again with the settled state
_render_result_box(result_slot, state)
button_slot.button(
    state.refresh_label(),
    key='refresh_btn',
    on_click=_request_refresh,
    disabled=not state.refresh_enabled,
)

_render_cards(state)

st.markdown('---')
st.subheader('Infrastructure')
st.caption(
    'Frontend: Streamlit dashboard\n\n'
    'Backend: FastAPI + uvicorn → AWS ECS Fargate\n\n'
    'Infrastructure: Terraform (IaC)'
)
