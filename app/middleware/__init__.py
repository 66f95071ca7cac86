"""HTTP middleware applied in app.main (first added = outermost)."""

from app.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
