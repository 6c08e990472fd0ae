"""Pure thumbnail sizing logic (no I/O)."""

from fractions import Fraction
from math import floor

from ..common.schemas import Dimensions


def _ratio(bound: int | None, source: int) -> Fraction | None:
    # Zero bounds count as unset, matching a falsy bound in either mode.
    # A zero source axis has no ratio and stays zero.
    if bound is None or bound <= 0 or source <= 0:
        return None
    return Fraction(bound, source)


def resolve_size(
    source_width: int,
    source_height: int,
    max_width: int | None = None,
    max_height: int | None = None,
    scale: bool = True,
    inflate: bool = True,
) -> Dimensions:
    """
    Compute thumbnail dimensions for a source image.

    Args:
        source_width: Source width in pixels (positive)
        source_height: Source height in pixels (positive)
        max_width: Width bound, None for unbounded
        max_height: Height bound, None for unbounded
        scale: Preserve aspect ratio if True, stretch each axis to its bound if False
        inflate: Allow upscaling images smaller than the bounds

    Returns:
        Target dimensions, floored to whole pixels
    """
    ratio_width = _ratio(max_width, source_width)
    ratio_height = _ratio(max_height, source_height)

    if scale:
        if ratio_width is not None and ratio_height is not None:
            ratio = min(ratio_width, ratio_height)
        elif ratio_width is not None:
            ratio = ratio_width
        elif ratio_height is not None:
            ratio = ratio_height
        else:
            ratio = Fraction(1)

        if not inflate and ratio > 1:
            ratio = Fraction(1)

        return Dimensions(floor(ratio * source_width), floor(ratio * source_height))

    if ratio_width is None or (not inflate and ratio_width > 1):
        ratio_width = Fraction(1)
    if ratio_height is None or (not inflate and ratio_height > 1):
        ratio_height = Fraction(1)

    return Dimensions(
        floor(ratio_width * source_width),
        floor(ratio_height * source_height),
    )
