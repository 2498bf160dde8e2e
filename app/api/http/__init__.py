from app.api.http.contents import router as contents_router

__all__ = [
    "contents_router"
]
