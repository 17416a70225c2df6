"""Отзывы (avaliações) о местах."""
