from ._key_set_manager import KeySetManager, jwks_uri_for

__all__ = ["KeySetManager", "jwks_uri_for"]
