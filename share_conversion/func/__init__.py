"""Ideal functionalities consumed by the protocols."""

from share_conversion.func.ole import Ole, Role

__all__ = ["Ole", "Role"]
