"""Image bounds, plane windows and the mapping between them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ImageBounds:
    """Width and height of a pixel grid."""

    width: int
    height: int

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}.")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}.")

    @property
    def size(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class PlaneWindow:
    """Rectangle of the complex plane given by its upper-left and lower-right corners.

    Corners are ``(real, imag)`` pairs. The upper-left corner has the smaller
    real part and the larger imaginary part.
    """

    upper_left: tuple[float, float]
    lower_right: tuple[float, float]

    def __post_init__(self) -> None:
        # Written as negated comparisons so NaN coordinates are rejected too.
        if not self.upper_left[0] < self.lower_right[0]:
            raise ValueError(
                f"upper left real part {self.upper_left[0]} must be less than "
                f"lower right real part {self.lower_right[0]}."
            )
        if not self.upper_left[1] > self.lower_right[1]:
            raise ValueError(
                f"upper left imaginary part {self.upper_left[1]} must be greater than "
                f"lower right imaginary part {self.lower_right[1]}."
            )

    @classmethod
    def derived(cls, upper_left: tuple[float, float], lower_right: tuple[float, float]) -> PlaneWindow:
        """Build a sub-window mapped from an already validated window.

        Corners of a sub-window can round to the same double when the parent
        is narrow compared to the pixel count, so the corner ordering check
        is skipped here.
        """

        window = object.__new__(cls)
        object.__setattr__(window, "upper_left", upper_left)
        object.__setattr__(window, "lower_right", lower_right)
        return window

    @property
    def width(self) -> float:
        return self.lower_right[0] - self.upper_left[0]

    @property
    def height(self) -> float:
        return self.upper_left[1] - self.lower_right[1]


def pixel_to_point(bounds: ImageBounds, pixel, window: PlaneWindow):
    """Return the plane point at the upper-left corner of ``pixel``.

    ``pixel`` is a ``(col, row)`` pair. Columns up to ``bounds.width`` and rows
    up to ``bounds.height`` are accepted so that band corners can be mapped.
    The pair may hold numpy arrays, in which case the result broadcasts.
    """

    col, row = pixel
    real = window.upper_left[0] + col * window.width / bounds.width
    imag = window.upper_left[1] - row * window.height / bounds.height
    return real, imag


def parse_pair(s: str, separator: str, kind: Callable[[str], T]) -> Optional[tuple[T, T]]:
    """Parse ``s`` as ``<left><separator><right>``, e.g. ``"400x600"`` or ``"1.0,0.5"``.

    The string is split at the first occurrence of ``separator`` and each half
    is converted with ``kind``. Returns ``None`` when the separator is missing
    or either half fails to convert. A second separator is not treated
    specially: it stays in the right half, which then fails to convert.
    """

    index = s.find(separator)
    if index < 0:
        return None
    halves = s[:index], s[index + 1:]
    # int() and float() would accept padding and digit separators.
    if any(half != half.strip() or "_" in half for half in halves):
        return None
    try:
        return kind(halves[0]), kind(halves[1])
    except ValueError:
        return None
