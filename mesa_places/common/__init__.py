# mesa_places/common/__init__.py
"""
Общие компоненты: константы, доменные ошибки, логирование.
"""
