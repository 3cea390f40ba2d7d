"""Cache adapters."""

from libvault.adapters.cache.verified_cache import VerifiedCache


__all__ = ["VerifiedCache"]
