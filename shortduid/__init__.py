from shortduid.core.exceptions import IdentifierOverflowError, InvalidBatchSizeError
from shortduid.services.generator import ShortDUID, init

__all__ = [
    "ShortDUID",
    "init",
    "IdentifierOverflowError",
    "InvalidBatchSizeError",
]
