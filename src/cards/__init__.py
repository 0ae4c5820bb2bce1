"""Card normalization, classification and composition engine."""

from importlib.metadata import PackageNotFoundError, version as pkg_version

from .augment import HERO_SENTINEL_ID, augment  # noqa: F401
from .bbox import normalize_bbox  # noqa: F401
from .classifier import classify  # noqa: F401
from .composer import compose  # noqa: F401
from .coordinates import collect_coordinates  # noqa: F401
from .inputs import extract_input_defaults, input_pairs  # noqa: F401
from .normalizer import normalize, normalize_many  # noqa: F401
from .traversal import flatten  # noqa: F401

try:
    __version__ = pkg_version("cardsynth")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "HERO_SENTINEL_ID",
    "__version__",
    "augment",
    "classify",
    "collect_coordinates",
    "compose",
    "extract_input_defaults",
    "flatten",
    "input_pairs",
    "normalize",
    "normalize_many",
    "normalize_bbox",
]
