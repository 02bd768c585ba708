"""KZG polynomial commitments over BLS12-381, in time- and space-efficient flavours."""

__version__ = "0.5.0"
__all__ = ["commitment", "curve", "folding", "polynomial", "space", "time", "utils"]