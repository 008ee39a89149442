"""Streamlit view layer for Footy Arena."""
