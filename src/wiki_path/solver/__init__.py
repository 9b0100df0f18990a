# Bidirectional link-path search

from .frontier import FrontierExpander
from .bidirectional import BidirectionalSearch, NO_PATH_MESSAGE

__all__ = [
    "FrontierExpander",
    "BidirectionalSearch",
    "NO_PATH_MESSAGE",
]
