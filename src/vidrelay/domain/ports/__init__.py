from .extraction_strategy import ExtractionStrategyPort
from .link_resolver import LinkResolverPort

__all__ = [
    "ExtractionStrategyPort",
    "LinkResolverPort",
]
