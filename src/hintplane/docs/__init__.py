"""Library documentation: bundle decoding and HTTP fetching."""

from hintplane.docs.decoding import decode_bundle, decode_module
from hintplane.docs.fetcher import DocsFetcher

__all__ = ["DocsFetcher", "decode_bundle", "decode_module"]
