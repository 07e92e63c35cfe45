import os
import csv
from datetime import datetime

import streamlit as st
import requests

from client import QAClient

# ---------- local audit log ----------
LOG_DIR = os.path.join("data", "logs")
os.makedirs(LOG_DIR, exist_ok=True)
LOG_PATH = os.path.join(LOG_DIR, "app_events.csv")


def log_event(event_type: str, details: str):
    """Append user actions to a local CSV for auditing."""
    with open(LOG_PATH, "a", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow([datetime.now().isoformat(timespec="seconds"), event_type, details])


client = QAClient()

# ---------- page config ----------
st.set_page_config(page_title="Sentence QA", page_icon="🔎", layout="wide")
st.title("🔎 Sentence Embedding QA")


# ---------- sidebar ----------
with st.sidebar:
    st.header("API status")
    st.caption(client.base_url)
    try:
        info = client.status()
        if info["status"] == "ready":
            st.success(f"Ready: {info['model']} ({info['answers']} answers)")
        elif info["status"] == "loading":
            st.info("Model is still loading…")
        else:
            st.error("Model failed to load. Check the server logs.")
    except requests.RequestException as e:
        st.error(f"Could not reach the API ({e})")
        st.info("Run this in another terminal: `python api_server.py`")


tab1, tab2 = st.tabs(["💬 Ask", "🧮 Embed"])


# ================= ASK =================
with tab1:
    st.subheader("Ask a question")
    question = st.text_input(
        "Question:", placeholder="e.g., What is the capital of France?"
    )
    if st.button("Get Answer", type="primary"):
        if not question.strip():
            st.warning("Please enter a question first.")
        else:
            try:
                with st.spinner("Finding the closest answer..."):
                    reply = client.answer(question)
                st.markdown("### 🧠 Answer")
                st.write(reply)
                log_event("answer", question)
            except requests.HTTPError:
                st.error("The API rejected the request (is the model ready?).")
            except requests.RequestException as e:
                st.error(f"Could not reach the API ({e})")


# ================= EMBED =================
with tab2:
    st.subheader("Embed text")
    text = st.text_area("Text:", "Hello, world!", height=80)
    if st.button("Embed"):
        try:
            vec = client.embed(text)
            st.write(f"**Dimension:** {len(vec)}")
            st.code(", ".join(f"{x:.4f}" for x in vec[:8]) + ", …")
            log_event("embed", f"chars={len(text)}")
        except requests.HTTPError:
            st.error("The API rejected the request (empty text, or model not ready).")
        except requests.RequestException as e:
            st.error(f"Could not reach the API ({e})")
