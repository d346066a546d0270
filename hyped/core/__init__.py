"""Logging, time sources, timing and shared types."""