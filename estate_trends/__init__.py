"""
Core package for the transaction trend dashboard.

Submodules provide artifact fetching, selection state synchronisation, the
record viewer and trend engines, and the Streamlit user interface that is
orchestrated by the top-level `app.py`.
"""
