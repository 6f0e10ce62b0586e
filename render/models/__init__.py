"""
Render Models Package
"""

from render.models.pass_record import PassRecord

__all__ = ["PassRecord"]
