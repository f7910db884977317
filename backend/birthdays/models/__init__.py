from .users import User, utc_now

__all__ = ["User", "utc_now"]
