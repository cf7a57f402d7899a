import streamlit as st
import pandas as pd

from modules.config import DEFAULT_PARAMS, MAX_PREVIEW_ROWS, SUPPORTED_TYPES
from modules.processor import build_preview
from modules.session import NO_FILE, Session, deselect_file, load_file, submit_search

SESSION_KEY = 'sku_session'
UPLOAD_ID_KEY = '_prev_upload_id'
HIGHLIGHT_STYLE = 'background-color: #fff3bf; font-weight: 600'


def get_session() -> Session:
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = Session()
    return st.session_state[SESSION_KEY]


def style_preview(preview: pd.DataFrame, highlight_index):
    """Styler that marks the highlighted sheet row (preview index = sheet row)."""
    def _row_style(row):
        style = HIGHLIGHT_STYLE if row.name == highlight_index else ''
        return [style] * len(row)
    return preview.style.apply(_row_style, axis=1)


def preview_caption(session: Session) -> str:
    if not session.headers:
        return 'No data loaded'
    return f'Loaded {session.row_count} rows. Showing {min(session.row_count, MAX_PREVIEW_ROWS)} rows.'


def _show_status(status):
    if not status.message:
        return
    if status.tone == 'error':
        st.error(status.message)
    elif status.tone == 'success':
        st.success(status.message)
    else:
        st.info(status.message)


def render_ui(params: dict = None):
    params = {**DEFAULT_PARAMS, **(params or {})}
    session = get_session()

    st.header('Upload inventory file')
    uploaded = st.file_uploader('Upload inventory file', type=SUPPORTED_TYPES)
    st.caption(f'Supported formats: .csv, .xlsx, .xls. Preview shows the first {MAX_PREVIEW_ROWS} rows.')

    # Reload only when a different file is picked; Streamlit reruns on every widget change.
    if uploaded is None:
        st.session_state[UPLOAD_ID_KEY] = None
        if session.file_name != NO_FILE:
            session = deselect_file(session)
            st.session_state[SESSION_KEY] = session
    else:
        upload_id = getattr(uploaded, 'file_id', None) or (uploaded.name, uploaded.size)
        if upload_id != st.session_state.get(UPLOAD_ID_KEY):
            st.session_state[UPLOAD_ID_KEY] = upload_id
            session = load_file(session, uploaded.getvalue(), uploaded.name)
            st.session_state[SESSION_KEY] = session
    st.markdown(f"_{session.file_name}_")

    st.markdown('---')
    st.subheader('Search SKU and update stock')
    with st.form('sku_form'):
        cols = st.columns([3, 2])
        with cols[0]:
            sku = st.text_input('Search SKU', placeholder='Enter Product Code/SKU')
        with cols[1]:
            increment = st.number_input('Increment by', min_value=1, value=1, step=1)
        submitted = st.form_submit_button('Update Stock', type='primary')

    if submitted:
        session = submit_search(session, sku, increment, params)
        st.session_state[SESSION_KEY] = session

    _show_status(session.status)

    st.markdown('---')
    st.subheader('File Preview')
    st.caption(preview_caption(session))
    if session.headers:
        preview = build_preview(session.rows, MAX_PREVIEW_ROWS)
        st.dataframe(style_preview(preview, session.highlight_index), use_container_width=True)
