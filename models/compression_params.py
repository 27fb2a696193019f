"""Image codec parameters."""

from dataclasses import dataclass


@dataclass
class ImageCodecParams:
    """Block-transform image codec parameters.

    The artifact does not record these; decode with the same values used to encode.
    """

    quality: int = 30
    # Leave coefficients zero when a channel's symbol stream ends early instead of failing
    tolerant_decode: bool = False

    def __post_init__(self):
        if not (1 <= self.quality <= 100):
            raise ValueError(f"Quality must be 1-100, got {self.quality}")
