import pandas as pd
import streamlit as st
from loguru import logger

from domain.constants import STATUS_LABELS
from services import experiment_data as data_svc, experiments as experiment_svc
from services.backend import BackendError
from ui import session


def view():
    backend = session.get_backend()
    user_id = session.current_user_id()
    st.header("Analytics")
    st.caption("Experiment progress and measurement trends")

    try:
        experiments = experiment_svc.list_experiments(backend, user_id)
    except BackendError:
        logger.exception("Failed to load experiments for analytics")
        experiments = []

    if not experiments:
        st.info("No experiments yet. Analytics appear once you record some.")
        return

    st.subheader("Status breakdown")
    counts = experiment_svc.status_counts(experiments)
    df_status = pd.DataFrame(
        [{"Status": STATUS_LABELS.get(s, s), "Experiments": n} for s, n in counts.items()]
    ).set_index("Status")
    c1, c2 = st.columns([2, 1])
    c1.bar_chart(df_status)
    c2.dataframe(df_status, use_container_width=True)

    st.subheader("Measurement trends")
    by_id = {e.id: e for e in experiments}
    exp_id = st.selectbox("Experiment", list(by_id), key="analytics_experiment",
                          format_func=lambda i: by_id[i].title)
    try:
        records = data_svc.list_data(backend, exp_id)
    except BackendError:
        logger.exception("Failed to load data for {}", exp_id)
        records = []
    series = data_svc.numeric_series(records)
    if series.empty:
        st.info("This experiment has no numeric measurements to chart.")
        return
    st.line_chart(series)
    with st.expander("Values"):
        st.dataframe(series, use_container_width=True)
