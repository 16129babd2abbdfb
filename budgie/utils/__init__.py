from .timestamp import advance_past, from_millis, normalize, to_millis, utc_now

__all__ = ["advance_past", "from_millis", "normalize", "to_millis", "utc_now"]
