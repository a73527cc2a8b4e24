"""
Interactive Liquid wallet built on the Liquid Wallet Kit.
"""

from lqwallet.secret_store import SecretStore
from lqwallet.session import SessionContext, WalletSession, build_session_context
from lqwallet.version import __version__

__all__ = [
    "SecretStore",
    "SessionContext",
    "WalletSession",
    "build_session_context",
    "__version__",
]
