"""Chanchito personal finance tracker."""

__all__: list[str] = []
