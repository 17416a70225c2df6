# mesa_places/core/users/__init__.py
"""
Пользователи и избранные места.
"""
