"""ui package: Streamlit dashboard for the API service."""
