# Tabquery Services Package
"""
Adapters between the query engine and the outside world.

Services wrap the browser (tab/group snapshots, bulk actions) and the
vault (persisting saved tabs).
"""

from .browser import BrowserAPI, TabService
from .vault import InMemoryVault, VaultWriter

__all__ = ["BrowserAPI", "TabService", "VaultWriter", "InMemoryVault"]
