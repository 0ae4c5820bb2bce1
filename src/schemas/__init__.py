"""Schema package for external and internal contracts."""

from .requests import AugmentOptions, GenerationEnvelope
from .responses import AugmentResult, HostCardPayload

__all__ = ["AugmentOptions", "AugmentResult", "GenerationEnvelope", "HostCardPayload"]
