from typing import Any, Optional

# ids are stored in 32-bit integer columns
MAX_ID = 2**31 - 1


def id_invalid(value: Any) -> bool:
    # bool is an int subclass; True must not pass as id 1
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        return True
    return value <= 0 or value > MAX_ID


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_not_blank(value: Optional[str]) -> bool:
    return not is_blank(value)
