import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def render_error_location(code: str, error_char_idx: int, context: int = 10) -> list[str]:
    """Source excerpt around the error with a caret under the offending character"""
    print_start_idx = max(0, error_char_idx - context)
    print_ellipsis_pre = print_start_idx > 0
    print_end_idx = min(len(code), error_char_idx + context)
    print_ellipsis_post = print_end_idx < len(code)
    return [
        (
            ("..." if print_ellipsis_pre else "")
            + code[print_start_idx:print_end_idx]
            + ("..." if print_ellipsis_post else "")
        ),
        " " * (error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
    ]
