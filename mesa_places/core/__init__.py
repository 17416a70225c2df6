# mesa_places/core/__init__.py
"""
Доменный слой: пользователи, избранное, отзывы, поиск мест.
"""
