from mesa_places.api.middleware.auth import AuthMiddleware

__all__ = ["AuthMiddleware"]
