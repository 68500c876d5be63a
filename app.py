import os

import streamlit as st
import plotly.express as px

from run_pipeline import PROJ, load_bundle
from sales_report import (
    analyze_sales_data,
    default_options,
    report_to_frame,
    summarize_report,
    top_products_frame,
)

DATA_PATH = os.getenv("SALES_DATA_PATH", str(PROJ / "sample_data.json"))

st.set_page_config(layout="wide", page_title="Seller Performance Dashboard")

@st.cache_data
def load_report(path):
    rows = analyze_sales_data(load_bundle(path), default_options())
    return report_to_frame(rows), top_products_frame(rows), summarize_report(rows)

leaderboard, products, totals = load_report(DATA_PATH)

st.title("Seller Performance Dashboard")

# Sidebar filters
with st.sidebar:
    st.header("Filters")
    seller_options = leaderboard["name"].tolist()
    seller = st.selectbox("Seller", seller_options)
    if len(leaderboard) > 1:
        top_n = st.slider("Sellers shown in charts", 1, len(leaderboard), min(10, len(leaderboard)))
    else:
        top_n = len(leaderboard)

# KPIs
col1, col2, col3, col4 = st.columns(4)
col1.metric("Total Revenue", f"${totals['revenue']:,.2f}")
col2.metric("Total Profit", f"${totals['profit']:,.2f}")
col3.metric("Bonus Pool", f"${totals['bonus']:,.2f}")
col4.metric("Purchase Records", f"{totals['sales_count']:,}")

# Profit and bonus by rank
shown = leaderboard.head(top_n)
fig1 = px.bar(shown, x="name", y="profit", title="Profit by Seller")
st.plotly_chart(fig1, use_container_width=True)

fig2 = px.bar(shown, x="name", y="bonus", title="Bonus by Seller")
st.plotly_chart(fig2, use_container_width=True)

# Top products of the selected seller
seller_products = products[products["name"] == seller]
fig3 = px.bar(seller_products, x="sku", y="quantity", title=f"Top Products: {seller}")
st.plotly_chart(fig3, use_container_width=True)

# Show report table
with st.expander("Show seller report"):
    st.dataframe(leaderboard)
