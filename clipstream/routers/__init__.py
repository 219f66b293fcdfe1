"""Routers package initialization"""
from .clips import router as clips_router

__all__ = ["clips_router"]
