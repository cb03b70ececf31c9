import streamlit as st
import os
import glob
import pandas as pd
import plotly.graph_objects as go
from config import Config

st.set_page_config(page_title="SkyFighter Dashboard", layout="wide")

st.title("✈️ SkyFighter Flight Records")

# --- Sidebar: Record Selection ---
st.sidebar.header("Controls")
log_dir = Config.LOG_DIR
if not os.path.exists(log_dir):
    st.error(f"Log directory '{log_dir}' not found! Run play.py first.")
    st.stop()

records = sorted(glob.glob(os.path.join(log_dir, "flight_record_*.csv")), key=os.path.getmtime, reverse=True)
if not records:
    st.warning("No flight records found yet.")
    st.stop()

selected = st.sidebar.selectbox("Select Flight Record", records)
st.sidebar.text(f"Selected: {os.path.basename(selected)}")

try:
    df = pd.read_csv(selected)
except Exception as e:
    st.error(f"Error reading record: {e}")
    st.stop()

# --- Top Row: Summary ---
last = df.iloc[-1]
col_s1, col_s2, col_s3, col_s4 = st.columns(4)
col_s1.metric("Final Score", int(last["score"]))
col_s2.metric("Wave", int(last["wave"]))
col_s3.metric("Lives", int(last["lives"]))
col_s4.metric("Ticks", int(last["tick"]))
cause = last["cause"] if isinstance(last["cause"], str) and last["cause"] else "timeout"
st.caption(f"Session ended: {cause}")

st.markdown("---")

# --- Metrics ---
st.subheader("📈 Session Metrics")
col_m1, col_m2 = st.columns(2)

with col_m1:
    st.markdown("#### Score")
    st.line_chart(df.set_index("tick")[["score"]], height=250)
    st.markdown("#### Lives")
    st.line_chart(df.set_index("tick")[["lives"]], height=250)

with col_m2:
    st.markdown("#### Wave")
    st.line_chart(df.set_index("tick")[["wave"]], height=250)
    st.markdown("#### Enemies / Bullets")
    st.line_chart(df.set_index("tick")[["enemies", "bullets"]], height=250)

st.markdown("---")

# --- 3D Flight Path ---
st.subheader("🛩️ 3D Flight Path")
fig = go.Figure()
fig.add_trace(go.Scatter3d(
    x=df["player_x"], y=df["player_y"], z=df["player_alt"],
    mode='lines',
    line=dict(color=df["score"], colorscale='Viridis', width=3),
    name="Player",
))
fig.add_trace(go.Scatter3d(
    x=[last["player_x"]], y=[last["player_y"]], z=[last["player_alt"]],
    mode='markers',
    marker=dict(size=6, color='red' if cause != "timeout" else 'blue'),
    name="End",
))
b = Config.WORLD_BOUNDARY
fig.update_layout(
    scene=dict(
        xaxis=dict(range=[-b, b], title="X"),
        yaxis=dict(range=[-b, b], title="Y"),
        zaxis=dict(range=[Config.GROUND_LEVEL, Config.ALTITUDE_CEILING], title="Altitude"),
        aspectmode='manual',
        aspectratio=dict(x=1, y=1, z=0.5),
    ),
    height=700,
    margin=dict(l=0, r=0, t=30, b=0),
)
st.plotly_chart(fig, use_container_width=True)

st.caption("SkyFighter | Flight Record Viewer")
