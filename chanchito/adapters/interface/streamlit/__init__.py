"""Streamlit dashboard adapter."""

__all__: list[str] = []
