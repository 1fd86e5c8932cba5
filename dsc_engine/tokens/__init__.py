"""In-process token collaborators (collateral tokens and the stable coin)."""
from .stablecoin import DecentralizedStableCoin
from .token import BaseToken, Token

__all__ = ["BaseToken", "DecentralizedStableCoin", "Token"]
