# streamlit_app.py
import logging

import streamlit as st
from modules.config import LOG_LEVEL, PAGE_TITLE
from modules.ui import render_ui

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title=PAGE_TITLE, layout="wide")

st.title(PAGE_TITLE)
st.markdown("Upload a BigCommerce inventory sheet, preview it, then search for a SKU to increment its Current Stock Level.")

render_ui()
