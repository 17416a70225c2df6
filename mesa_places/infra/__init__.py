# mesa_places/infra/__init__.py
"""
Инфраструктурный слой: PostgreSQL, шина событий, внешние HTTP API, почта.
"""
