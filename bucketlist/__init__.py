"""BucketList: saved places behind a biometric gate, with nearby-place lookup."""

__version__ = "1.0.0"
