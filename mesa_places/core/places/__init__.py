"""Поиск мест через Google Places."""
