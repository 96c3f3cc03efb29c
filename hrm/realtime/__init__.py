"""Realtime infrastructure (Socket.IO, etc).

This package holds cross-domain realtime primitives so device events,
notifications, and future features can share one socket server.
"""
