"""
Robotoff adapter package.
"""

from .client import RobotoffClient

__all__ = ["RobotoffClient"]
