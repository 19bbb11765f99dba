"""
Shared display components for listings and admin tables.
Consolidates repeated metrics rows, table expanders and download buttons.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd
import streamlit as st


def render_metrics_row(metrics: List[Dict[str, Any]], num_columns: Optional[int] = None) -> None:
    """
    Render a row of metrics in columns.

    Args:
        metrics: List of dicts with 'label' and 'value' keys, optionally 'delta'
        num_columns: Number of columns (defaults to len(metrics))

    Example:
        render_metrics_row([
            {"label": "Total Listings", "value": 150},
            {"label": "Stubs", "value": 12},
        ])
    """
    if not metrics:
        return

    cols = st.columns(num_columns or len(metrics))
    for i, metric in enumerate(metrics):
        with cols[i % len(cols)]:
            st.metric(
                label=metric.get("label", ""),
                value=metric.get("value", ""),
                delta=metric.get("delta"),
            )


def render_data_expander(
    title: str,
    df: pd.DataFrame,
    display_columns: Optional[List[str]] = None,
    download_filename: Optional[str] = None,
    download_key: Optional[str] = None,
) -> None:
    """
    Render an expander with a dataframe and an optional CSV download button.

    Args:
        title: Expander title (e.g., "View Listings Table")
        df: DataFrame to display
        display_columns: List of columns to show (None = show all)
        download_filename: Filename for CSV download (None = no download button)
        download_key: Unique key for the download button
    """
    if df is None or df.empty:
        return

    with st.expander(title):
        available_cols = [c for c in (display_columns or []) if c in df.columns]
        st.dataframe(df[available_cols] if available_cols else df, use_container_width=True)

        if download_filename and download_key:
            st.download_button(
                label="Download CSV",
                data=df.to_csv(index=False),
                file_name=download_filename,
                mime="text/csv",
                key=download_key,
            )


def render_json_download(
    label: str,
    documents: List[Mapping[str, Any]],
    file_name: str,
    key: str,
) -> None:
    """Download button for a list of documents as pretty-printed JSON."""
    st.download_button(
        label=label,
        data=json.dumps(list(documents), ensure_ascii=False, indent=2),
        file_name=file_name,
        mime="application/json",
        key=key,
    )
