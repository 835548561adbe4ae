"""Entry-point adapters: CLIs and the Streamlit dashboard."""

__all__: list[str] = []
