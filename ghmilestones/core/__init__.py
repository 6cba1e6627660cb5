"""
Core interfaces for plugging the milestones pipeline into a host application.
"""

from ghmilestones.core.interfaces import MilestoneLister, RefreshHook, RenderHook

__all__ = ["MilestoneLister", "RefreshHook", "RenderHook"]
