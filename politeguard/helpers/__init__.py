"""Shared helper functions."""

from .env import env_flag, env_float, env_int

__all__ = ["env_flag", "env_float", "env_int"]
