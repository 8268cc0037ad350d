from gatehouse.web.routers.dispatch import router as dispatch_router

__all__ = [
    "dispatch_router",
]
