from handcricket.models.setting import Setting

__all__ = [
    "Setting",
]
