from ._token_requirements import IdTokenRequirements

__all__ = ["IdTokenRequirements"]
